"""Conversion of editor JSON payloads into machining model objects."""
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .machine import InvalidProfile, MachineProfile, parse_flag
from .models import (
    ClosedPocketOperation,
    ContourOperation,
    DEFAULT_TOOLS,
    DrillOperation,
    Entry,
    Exit,
    InvalidPanel,
    InvalidTool,
    OpenPocketOperation,
    Operation,
    PanelInfo,
    Tool,
)
from .utils.tools import build_catalog


class ParseError(Exception):
    """Custom exception for job payload errors."""
    pass


@dataclass
class Job:
    """Everything needed to generate one panel program."""
    panel: PanelInfo
    operations: List[Operation]
    tools: Tuple[Tool, ...]
    profile: MachineProfile


def _number(data: Mapping, key: str, context: str, default: Any = ...) -> Optional[float]:
    if key not in data or data[key] is None:
        if default is ...:
            raise ParseError(f"{context}: missing '{key}'")
        return default
    value = data[key]
    if isinstance(value, bool):
        raise ParseError(f"{context}: '{key}' must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ParseError(f"{context}: '{key}' must be a number, got {value!r}")


def _text(data: Mapping, key: str, context: str, default: Any = ...) -> Optional[str]:
    if key not in data or data[key] is None:
        if default is ...:
            raise ParseError(f"{context}: missing '{key}'")
        return default
    return str(data[key])


def _flag(data: Mapping, key: str, context: str, default: bool = False) -> bool:
    if key not in data or data[key] is None:
        return default
    try:
        return parse_flag(data[key])
    except ValueError:
        raise ParseError(f"{context}: '{key}' must be true or false, got {data[key]!r}")


def _parse_point(point: Any, context: str) -> Tuple[float, float]:
    """Accept ``[x, y]`` pairs or ``{"x": .., "y": ..}`` objects."""
    if isinstance(point, Mapping):
        return (_number(point, 'x', context), _number(point, 'y', context))
    if isinstance(point, (list, tuple)) and len(point) >= 2:
        try:
            return (float(point[0]), float(point[1]))
        except (TypeError, ValueError):
            pass
    raise ParseError(f"{context}: invalid point {point!r}, expected [x, y]")


def _parse_path(data: Mapping, context: str) -> Tuple[Tuple[float, float], ...]:
    points = data.get('path')
    if not isinstance(points, (list, tuple)):
        raise ParseError(f"{context}: 'path' must be a list of points")
    return tuple(_parse_point(p, f"{context} path[{i}]") for i, p in enumerate(points))


def _parse_entry(data: Optional[Mapping], context: str) -> Optional[Entry]:
    if not data:
        return None
    if not isinstance(data, Mapping):
        raise ParseError(f"{context}: 'entry' must be an object")
    return Entry(
        type=_text(data, 'type', f"{context} entry", 'vertical'),
        angle=_number(data, 'angle', f"{context} entry", None),
        radius=_number(data, 'radius', f"{context} entry", None),
    )


def _parse_exit(data: Optional[Mapping], context: str) -> Optional[Exit]:
    if not data:
        return None
    if not isinstance(data, Mapping):
        raise ParseError(f"{context}: 'exit' must be an object")
    return Exit(type=_text(data, 'type', f"{context} exit", 'vertical'))


def _common(data: Mapping, context: str) -> Dict[str, Any]:
    return {
        'tool_id': _text(data, 'tool', context),
        'depth': _number(data, 'depth', context),
        'comment': _text(data, 'comment', context, None),
    }


def _multi_pass(data: Mapping, context: str) -> Dict[str, Any]:
    return {
        'multi_pass': _flag(data, 'multi_pass', context),
        'pass_depth': _number(data, 'pass_depth', context, None),
    }


def _build_drill(data: Mapping, context: str) -> DrillOperation:
    return DrillOperation(
        **_common(data, context),
        x=_number(data, 'x', context),
        y=_number(data, 'y', context),
        diameter=_number(data, 'diameter', context),
        through=_flag(data, 'through', context),
    )


def _build_contour(data: Mapping, context: str) -> ContourOperation:
    return ContourOperation(
        **_common(data, context),
        **_multi_pass(data, context),
        path=_parse_path(data, context),
        closed=_flag(data, 'closed', context),
        entry=_parse_entry(data.get('entry'), context),
        exit=_parse_exit(data.get('exit'), context),
        compensation=_text(data, 'compensation', context, 'none'),
    )


def _build_closed_pocket(data: Mapping, context: str) -> ClosedPocketOperation:
    return ClosedPocketOperation(
        **_common(data, context),
        **_multi_pass(data, context),
        path=_parse_path(data, context),
        strategy=_text(data, 'strategy', context, 'contour'),
        entry=_parse_entry(data.get('entry'), context),
    )


def _build_open_pocket(data: Mapping, context: str) -> OpenPocketOperation:
    return OpenPocketOperation(
        **_common(data, context),
        **_multi_pass(data, context),
        path=_parse_path(data, context),
        width=_number(data, 'width', context, 0.0),
        strategy=_text(data, 'strategy', context, 'zigzag'),
    )


OPERATION_BUILDERS = {
    'drill': _build_drill,
    'contour': _build_contour,
    'closed_pocket': _build_closed_pocket,
    'open_pocket': _build_open_pocket,
}


def parse_operation(data: Any, index: int = 0) -> Operation:
    """
    Build one operation from its JSON object.

    Args:
        data: Operation dict with a 'type' tag
        index: Zero-indexed position, used in error messages

    Raises:
        ParseError: on missing fields, unknown types or invalid values
    """
    context = f"Operation {index + 1}"
    if not isinstance(data, Mapping):
        raise ParseError(f"{context}: expected an object")
    op_type = data.get('type')
    builder = OPERATION_BUILDERS.get(op_type) if isinstance(op_type, str) else None
    if builder is None:
        raise ParseError(
            f"{context}: unknown type {op_type!r}, expected one of {', '.join(OPERATION_BUILDERS)}"
        )
    try:
        return builder(data, context)
    except ValueError as e:
        raise ParseError(f"{context}: {e}") from e


def parse_tool(data: Any, index: int = 0) -> Tool:
    """Build one tool from its JSON object."""
    context = f"Tool {index + 1}"
    if not isinstance(data, Mapping):
        raise ParseError(f"{context}: expected an object")
    try:
        return Tool(
            id=_text(data, 'id', context),
            name=_text(data, 'name', context, ''),
            kind=_text(data, 'kind', context),
            diameter=_number(data, 'diameter', context),
            spindle_speed=_number(data, 'spindle_speed', context),
            feed_rate=_number(data, 'feed_rate', context),
            plunge_rate=_number(data, 'plunge_rate', context, None),
            max_depth=_number(data, 'max_depth', context, None),
        )
    except ValueError as e:
        raise ParseError(f"{context}: {e}") from e


def parse_panel(data: Any) -> PanelInfo:
    """Build panel metadata from its JSON object."""
    if not isinstance(data, Mapping):
        raise ParseError("Panel: expected an object")
    dimensions = data.get('dimensions') or {}
    if not isinstance(dimensions, Mapping):
        raise ParseError("Panel: 'dimensions' must be an object")
    try:
        return PanelInfo(
            name=_text(data, 'name', "Panel", 'Untitled panel'),
            length=_number(dimensions, 'length', "Panel dimensions"),
            width=_number(dimensions, 'width', "Panel dimensions"),
            thickness=_number(dimensions, 'thickness', "Panel dimensions"),
            material=_text(data, 'material', "Panel", ''),
            origin=_text(data, 'origin', "Panel", 'bottom_left'),
            face=_text(data, 'face', "Panel", 'top'),
            z_offset=_number(data, 'z_offset', "Panel", 0.0),
        )
    except InvalidPanel as e:
        raise ParseError(f"Panel: {e}") from e


def parse_job(data: Any, default_profile: Optional[MachineProfile] = None) -> Job:
    """
    Parse a complete generation request.

    Expected keys: 'panel', 'operations', optional 'tools' (defaults to the
    built-in catalog) and optional 'machine' (defaults to
    ``default_profile``).

    Raises:
        ParseError: listing every invalid operation
    """
    if not isinstance(data, Mapping):
        raise ParseError("Job must be a JSON object")

    panel = parse_panel(data.get('panel'))

    raw_operations = data.get('operations', [])
    if not isinstance(raw_operations, list):
        raise ParseError("'operations' must be a list")
    operations = []
    errors = []
    for index, raw in enumerate(raw_operations):
        try:
            operations.append(parse_operation(raw, index))
        except ParseError as e:
            errors.append(str(e))
    if errors:
        raise ParseError("\n".join(errors))

    raw_tools = data.get('tools')
    if raw_tools is None:
        tools = DEFAULT_TOOLS
    elif isinstance(raw_tools, list):
        tools = tuple(parse_tool(raw, index) for index, raw in enumerate(raw_tools))
        try:
            build_catalog(tools)
        except InvalidTool as e:
            raise ParseError(str(e)) from e
    else:
        raise ParseError("'tools' must be a list")

    machine = data.get('machine')
    if machine is None:
        profile = default_profile or MachineProfile()
    elif isinstance(machine, Mapping):
        try:
            profile = MachineProfile.from_mapping(machine, default_profile)
        except InvalidProfile as e:
            raise ParseError(str(e)) from e
    else:
        raise ParseError("'machine' must be an object")

    return Job(panel=panel, operations=operations, tools=tools, profile=profile)
