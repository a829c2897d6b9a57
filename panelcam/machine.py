"""Machine profiles and controller dialects."""
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)


class InvalidProfile(ValueError):
    """Raised when a machine profile holds unusable values."""


class Dialect(str, Enum):
    """Numeric-control dialects the generator can target."""
    GENERIC = 'generic'
    BIESSE = 'biesse'
    HOMAG = 'homag'
    SCM = 'scm'
    GRBL = 'grbl'

    @classmethod
    def from_name(cls, name: Optional[str]) -> 'Dialect':
        """
        Look up a dialect by name, case-insensitively.

        Unknown names are not an error: they fall back to the generic
        instruction set.
        """
        if isinstance(name, cls):
            return name
        key = name.strip().lower() if isinstance(name, str) else ''
        for dialect in cls:
            if dialect.value == key:
                return dialect
        logger.warning("Unknown machine dialect %r, using generic", name)
        return cls.GENERIC


@dataclass(frozen=True)
class DialectSyntax:
    """Spelling of instructions and comments for one dialect."""
    rapid: str = 'G0'
    linear: str = 'G1'
    comment_open: str = '; '
    comment_close: str = ''
    inline_comments: bool = True
    banner: Optional[str] = None


DIALECT_SYNTAX: Dict[Dialect, DialectSyntax] = {
    Dialect.GENERIC: DialectSyntax(),
    Dialect.GRBL: DialectSyntax(),
    Dialect.BIESSE: DialectSyntax(inline_comments=False, banner='Program for Biesse'),
    Dialect.HOMAG: DialectSyntax(
        rapid='G00', linear='G01', inline_comments=False, banner='Program for Homag'
    ),
    Dialect.SCM: DialectSyntax(
        comment_open='(', comment_close=')', inline_comments=False, banner='Program for SCM'
    ),
}


def get_syntax(dialect: Dialect) -> DialectSyntax:
    """Return the syntax table for a dialect, generic when unknown."""
    return DIALECT_SYNTAX.get(dialect, DIALECT_SYNTAX[Dialect.GENERIC])


TRUE_WORDS = ('1', 'true', 'yes', 'on')
FALSE_WORDS = ('0', 'false', 'no', 'off', '')


def parse_flag(value) -> bool:
    """
    Read an on/off setting from JSON or the environment.

    Accepts real booleans and the usual words (``true``/``false``,
    ``yes``/``no``, ``on``/``off``, ``1``/``0``).

    Raises:
        ValueError: for anything else, e.g. a number or an unknown word
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in TRUE_WORDS:
            return True
        if word in FALSE_WORDS:
            return False
    raise ValueError(f"expected true or false, got {value!r}")


@dataclass(frozen=True)
class MachineProfile:
    """Target machine configuration, fixed for one generation call."""
    dialect: Dialect = Dialect.GENERIC
    safe_height: float = 10.0
    spindle_speed: float = 18000
    feed_rate: float = 800
    plunge_rate: float = 300
    use_tool_compensation: bool = False
    # False reproduces the legacy editor, which always cut at profile rates
    use_tool_rates: bool = True

    def __post_init__(self):
        object.__setattr__(self, 'dialect', Dialect.from_name(self.dialect))
        for name in ('safe_height', 'spindle_speed', 'feed_rate', 'plunge_rate'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) \
                    or not math.isfinite(value) or value <= 0:
                raise InvalidProfile(f"Machine {name} must be a positive number, got {value!r}")

    @property
    def syntax(self) -> DialectSyntax:
        return get_syntax(self.dialect)

    @classmethod
    def from_mapping(cls, data: Mapping, defaults: Optional['MachineProfile'] = None) -> 'MachineProfile':
        """
        Build a profile from a JSON-style mapping.

        Keys missing from ``data`` take their value from ``defaults``
        (or the class defaults), so callers never merge partial dicts.
        """
        base = defaults or cls()
        try:
            return cls(
                dialect=data.get('dialect', base.dialect),
                safe_height=float(data.get('safe_height', base.safe_height)),
                spindle_speed=float(data.get('spindle_speed', base.spindle_speed)),
                feed_rate=float(data.get('feed_rate', base.feed_rate)),
                plunge_rate=float(data.get('plunge_rate', base.plunge_rate)),
                use_tool_compensation=parse_flag(
                    data.get('use_tool_compensation', base.use_tool_compensation)
                ),
                use_tool_rates=parse_flag(data.get('use_tool_rates', base.use_tool_rates)),
            )
        except InvalidProfile:
            raise
        except (TypeError, ValueError) as e:
            raise InvalidProfile(f"Invalid machine profile: {e}") from e

    @classmethod
    def from_config(cls, config: Mapping) -> 'MachineProfile':
        """Build the default profile from ``MACHINE_*`` application settings."""
        return cls.from_mapping({
            key[len('MACHINE_'):].lower(): value
            for key, value in config.items()
            if key.startswith('MACHINE_') and value is not None
        })

    def to_dict(self) -> Dict:
        return {
            'dialect': self.dialect.value,
            'safe_height': self.safe_height,
            'spindle_speed': self.spindle_speed,
            'feed_rate': self.feed_rate,
            'plunge_rate': self.plunge_rate,
            'use_tool_compensation': self.use_tool_compensation,
            'use_tool_rates': self.use_tool_rates,
        }
