"""Shared dataclasses for panel machining operations and tools.

All values are millimetres (lengths, depths) and mm/min (rates).
Operations and tools are frozen and validated on construction so that a
generator never sees physically meaningless input.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Tuple

Point = Tuple[float, float]
Path = Tuple[Point, ...]


class InvalidOperation(ValueError):
    """Raised when an operation is built from unusable values."""

    def __init__(self, message: str, field_name: Optional[str] = None):
        super().__init__(message)
        self.field_name = field_name


class InvalidTool(ValueError):
    """Raised when a tool record is built from unusable values."""


class InvalidPanel(ValueError):
    """Raised when panel metadata is unusable."""


def _is_finite(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _require_positive(value, name: str, error=InvalidOperation):
    if not _is_finite(value) or value <= 0:
        raise error(f"{name} must be a positive number, got {value!r}")


def _require_non_negative(value, name: str, error=InvalidOperation):
    if not _is_finite(value) or value < 0:
        raise error(f"{name} must be zero or a positive number, got {value!r}")


def _normalize_path(points, name: str = 'path') -> Path:
    """Return the path as a tuple of (x, y) float pairs, rejecting empty paths."""
    normalized = tuple((p[0], p[1]) for p in points or ())
    if not normalized:
        raise InvalidOperation(f"{name} must contain at least one point", name)
    for index, (x, y) in enumerate(normalized):
        if not (_is_finite(x) and _is_finite(y)):
            raise InvalidOperation(f"{name}[{index}] has a non-finite coordinate ({x!r}, {y!r})", name)
    return tuple((float(x), float(y)) for x, y in normalized)


class ToolKind(str, Enum):
    MILLING_BIT = 'milling_bit'
    DRILL_BIT = 'drill_bit'


class EntryType(str, Enum):
    VERTICAL = 'vertical'
    RAMP = 'ramp'
    SPIRAL = 'spiral'


class ExitType(str, Enum):
    VERTICAL = 'vertical'
    RAMP = 'ramp'
    STRAIGHT = 'straight'


class Compensation(str, Enum):
    NONE = 'none'
    LEFT = 'left'
    RIGHT = 'right'


class ClosedPocketStrategy(str, Enum):
    SPIRAL = 'spiral'
    ZIGZAG = 'zigzag'
    CONTOUR = 'contour'


class OpenPocketStrategy(str, Enum):
    ZIGZAG = 'zigzag'
    PARALLEL = 'parallel'


@dataclass(frozen=True)
class Tool:
    """A cutter from the tool catalog."""
    id: str
    kind: ToolKind
    diameter: float
    spindle_speed: float
    feed_rate: float
    plunge_rate: Optional[float] = None  # milling bits only
    max_depth: Optional[float] = None
    name: str = ''

    def __post_init__(self):
        if not self.id:
            raise InvalidTool("Tool id must not be empty")
        object.__setattr__(self, 'kind', ToolKind(self.kind))
        _require_positive(self.diameter, f"Tool {self.id!r} diameter", InvalidTool)
        _require_positive(self.spindle_speed, f"Tool {self.id!r} spindle_speed", InvalidTool)
        _require_positive(self.feed_rate, f"Tool {self.id!r} feed_rate", InvalidTool)
        if self.plunge_rate is not None:
            _require_positive(self.plunge_rate, f"Tool {self.id!r} plunge_rate", InvalidTool)
        if self.max_depth is not None:
            _require_positive(self.max_depth, f"Tool {self.id!r} max_depth", InvalidTool)
        if not self.name:
            object.__setattr__(self, 'name', self.id)


@dataclass(frozen=True)
class Entry:
    """How the tool engages the material at the start of a cut."""
    type: EntryType = EntryType.VERTICAL
    angle: Optional[float] = None   # ramp
    radius: Optional[float] = None  # spiral

    def __post_init__(self):
        object.__setattr__(self, 'type', EntryType(self.type))
        if self.angle is not None and not _is_finite(self.angle):
            raise InvalidOperation(f"entry angle must be finite, got {self.angle!r}", 'entry')
        if self.radius is not None:
            _require_positive(self.radius, "entry radius")


@dataclass(frozen=True)
class Exit:
    """How the tool leaves the material at the end of a cut."""
    type: ExitType = ExitType.VERTICAL

    def __post_init__(self):
        object.__setattr__(self, 'type', ExitType(self.type))


@dataclass(frozen=True)
class Operation:
    """Base for all machining operations.

    ``kind`` is a class-level tag, so an instance can never change variant.
    """
    kind: ClassVar[str] = ''

    tool_id: str
    depth: float
    comment: Optional[str] = None

    def _validate_common(self):
        if not self.tool_id:
            raise InvalidOperation(f"{self.kind} operation has no tool", 'tool_id')
        _require_non_negative(self.depth, f"{self.kind} depth")

    def _validate_path(self):
        object.__setattr__(self, 'path', _normalize_path(self.path))
        if self.pass_depth is not None:
            _require_positive(self.pass_depth, f"{self.kind} pass_depth")


@dataclass(frozen=True)
class DrillOperation(Operation):
    kind: ClassVar[str] = 'drill'

    x: float = 0.0
    y: float = 0.0
    diameter: float = 0.0
    through: bool = False

    def __post_init__(self):
        self._validate_common()
        if not (_is_finite(self.x) and _is_finite(self.y)):
            raise InvalidOperation(f"drill position ({self.x!r}, {self.y!r}) is not finite", 'x')
        _require_positive(self.diameter, "drill diameter")


@dataclass(frozen=True)
class ContourOperation(Operation):
    kind: ClassVar[str] = 'contour'

    path: Path = ()
    closed: bool = False
    multi_pass: bool = False
    pass_depth: Optional[float] = None
    entry: Optional[Entry] = None
    exit: Optional[Exit] = None
    compensation: Compensation = Compensation.NONE

    def __post_init__(self):
        self._validate_common()
        self._validate_path()
        object.__setattr__(self, 'compensation', Compensation(self.compensation or Compensation.NONE))


@dataclass(frozen=True)
class ClosedPocketOperation(Operation):
    """Pocket bounded by a closed outline; the path is always closed."""
    kind: ClassVar[str] = 'closed_pocket'

    path: Path = ()
    strategy: ClosedPocketStrategy = ClosedPocketStrategy.CONTOUR
    multi_pass: bool = False
    pass_depth: Optional[float] = None
    entry: Optional[Entry] = None

    def __post_init__(self):
        self._validate_common()
        self._validate_path()
        object.__setattr__(self, 'strategy', ClosedPocketStrategy(self.strategy))


@dataclass(frozen=True)
class OpenPocketOperation(Operation):
    """Pocket open to a panel edge; ``width`` is informational."""
    kind: ClassVar[str] = 'open_pocket'

    path: Path = ()
    width: float = 0.0
    strategy: OpenPocketStrategy = OpenPocketStrategy.ZIGZAG
    multi_pass: bool = False
    pass_depth: Optional[float] = None

    def __post_init__(self):
        self._validate_common()
        self._validate_path()
        object.__setattr__(self, 'strategy', OpenPocketStrategy(self.strategy))
        _require_non_negative(self.width, "open pocket width")


OPERATION_TYPES = (DrillOperation, ContourOperation, ClosedPocketOperation, OpenPocketOperation)

PANEL_ORIGINS = ('bottom_left', 'bottom_right', 'top_left', 'top_right', 'center')
PANEL_FACES = ('top', 'bottom')


@dataclass(frozen=True)
class PanelInfo:
    """Panel metadata reported in the program header."""
    name: str
    length: float
    width: float
    thickness: float
    material: str = ''
    origin: str = 'bottom_left'
    face: str = 'top'
    z_offset: float = 0.0

    def __post_init__(self):
        for name in ('length', 'width', 'thickness'):
            _require_positive(getattr(self, name), f"panel {name}", InvalidPanel)
        if self.origin not in PANEL_ORIGINS:
            raise InvalidPanel(f"panel origin must be one of {', '.join(PANEL_ORIGINS)}, got {self.origin!r}")
        if self.face not in PANEL_FACES:
            raise InvalidPanel(f"panel face must be one of {', '.join(PANEL_FACES)}, got {self.face!r}")
        if not _is_finite(self.z_offset):
            raise InvalidPanel(f"panel z_offset must be finite, got {self.z_offset!r}")


@dataclass(frozen=True)
class Program:
    """Generated program: header, one block per operation, footer."""
    header: Tuple[str, ...]
    blocks: Tuple[Tuple[str, ...], ...]
    footer: Tuple[str, ...]
    warnings: Tuple[str, ...] = field(default_factory=tuple)
    timestamp_line: Optional[str] = None

    @property
    def lines(self) -> Tuple[str, ...]:
        result = list(self.header)
        for block in self.blocks:
            result.extend(block)
        result.extend(self.footer)
        return tuple(result)

    @property
    def text(self) -> str:
        return "\n".join(self.lines) + "\n"

    def without_timestamp(self) -> str:
        """Program text with the generation timestamp comment removed."""
        return "\n".join(line for line in self.lines if line != self.timestamp_line) + "\n"


# Default catalog shipped with the editor
DEFAULT_TOOLS = (
    Tool(id='drill_5mm', name='Drill 5mm', kind=ToolKind.DRILL_BIT,
         diameter=5, spindle_speed=18000, feed_rate=900),
    Tool(id='drill_8mm', name='Drill 8mm', kind=ToolKind.DRILL_BIT,
         diameter=8, spindle_speed=16000, feed_rate=800),
    Tool(id='mill_6mm', name='Straight bit 6mm', kind=ToolKind.MILLING_BIT,
         diameter=6, spindle_speed=16000, feed_rate=800, plunge_rate=300, max_depth=20),
    Tool(id='mill_12mm', name='Straight bit 12mm', kind=ToolKind.MILLING_BIT,
         diameter=12, spindle_speed=14000, feed_rate=700, plunge_rate=250, max_depth=30),
)
