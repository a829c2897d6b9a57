"""Per-operation G-code generators.

Each generator turns one operation, its resolved tool and the machine
profile into a list of program lines. Pockets are cut as a single contour
pass per depth step; no area clearing is performed.
"""
import logging
from typing import Callable, Dict, List, Type

from .machine import MachineProfile
from .models import (
    ClosedPocketOperation,
    ContourOperation,
    DrillOperation,
    OpenPocketOperation,
    Operation,
    OPERATION_TYPES,
    Path,
    Tool,
)
from .utils.gcode_format import comment, format_number, linear_move, rapid_move
from .utils.lead_in import (
    generate_entry,
    generate_exit,
    generate_plunge,
    generate_ramp_return,
    is_ramp_entry,
)
from .utils.multipass import iter_passes
from .utils.tool_compensation import (
    compensation_active,
    generate_compensation_off,
    generate_compensation_on,
)
from .utils.tools import feed_rate_for, plunge_rate_for

logger = logging.getLogger(__name__)

# Overtravel below the stated depth for through holes (mm)
THROUGH_OVERTRAVEL = 2.0

Generator = Callable[[Operation, Tool, MachineProfile], List[str]]


def cut_depth(operation: Operation) -> float:
    """Deepest point the tool reaches below the surface for an operation."""
    if isinstance(operation, DrillOperation) and operation.through:
        return operation.depth + THROUGH_OVERTRAVEL
    return operation.depth


def _describe(operation: Operation, tool: Tool, profile: MachineProfile, summary: str) -> List[str]:
    syntax = profile.syntax
    lines = [
        comment(syntax, summary),
        comment(syntax, f"Tool: {tool.name}, D{format_number(tool.diameter)} mm"),
    ]
    if operation.comment:
        lines.append(comment(syntax, operation.comment))
    return lines


def _traverse(
    profile: MachineProfile,
    path: Path,
    feed: float,
    closed: bool
) -> List[str]:
    """Cut from the first path point through every other point, optionally closing."""
    syntax = profile.syntax
    lines = [
        linear_move(syntax, x=x, y=y, feed=feed, note=f"Point {number}")
        for number, (x, y) in enumerate(path[1:], start=2)
    ]
    if closed:
        x, y = path[0]
        lines.append(linear_move(syntax, x=x, y=y, feed=feed, note="Close path"))
    return lines


def _approach(profile: MachineProfile, x: float, y: float) -> List[str]:
    syntax = profile.syntax
    return [
        rapid_move(syntax, x=x, y=y, note="Go to start point"),
        rapid_move(syntax, z=profile.safe_height, note="Safe height"),
    ]


def _retract(profile: MachineProfile) -> str:
    return rapid_move(profile.syntax, z=profile.safe_height, note="Retract to safe height")


def _pass_comment(profile: MachineProfile, pass_num: int, num_passes: int, z: float) -> str:
    return comment(profile.syntax, f"Pass {pass_num + 1}/{num_passes} - depth {format_number(z)} mm")


def generate_drill_gcode(
    operation: DrillOperation,
    tool: Tool,
    profile: MachineProfile
) -> List[str]:
    """
    Generate G-code for a single drilled hole.

    The hole is reached in one plunge; through holes go THROUGH_OVERTRAVEL
    below the stated depth.
    """
    syntax = profile.syntax
    final_depth = -cut_depth(operation)
    summary = (
        f"Drill at X={format_number(operation.x)} Y={format_number(operation.y)}, "
        f"D={format_number(operation.diameter)} mm, depth={format_number(operation.depth)} mm"
    )
    if operation.through:
        summary += ", through"

    lines = _describe(operation, tool, profile, summary)
    lines.append(rapid_move(syntax, x=operation.x, y=operation.y, note="Position over hole"))
    lines.append(rapid_move(syntax, z=profile.safe_height, note="Safe height"))
    lines.append(linear_move(syntax, z=final_depth, feed=plunge_rate_for(tool, profile), note="Drill"))
    lines.append(_retract(profile))
    return lines


def generate_contour_gcode(
    operation: ContourOperation,
    tool: Tool,
    profile: MachineProfile
) -> List[str]:
    """
    Generate G-code for a contour cut.

    Per pass:
    - rapid to the first point, then to safe height
    - entry (first pass only; later passes plunge vertically)
    - compensation on, right after the tool reaches pass depth
    - traverse the path, closing it when requested
    - exit (last pass only), compensation off, retract
    """
    syntax = profile.syntax
    path = operation.path
    start = path[0]
    feed = feed_rate_for(tool, profile)
    plunge = plunge_rate_for(tool, profile)
    use_compensation = compensation_active(profile, operation.compensation)

    lines = _describe(
        operation, tool, profile,
        f"Contour, {len(path)} points, depth {format_number(operation.depth)} mm"
    )

    for pass_num, num_passes, z in iter_passes(operation.depth, operation.pass_depth, operation.multi_pass):
        ramp = pass_num == 0 and is_ramp_entry(operation.entry)

        lines.append(_pass_comment(profile, pass_num, num_passes, z))
        lines.extend(_approach(profile, *start))

        entry = operation.entry if pass_num == 0 else None
        lines.extend(generate_entry(syntax, entry, start, z, plunge))

        if use_compensation:
            lines.append(generate_compensation_on(syntax, operation.compensation, tool))

        if ramp:
            lines.append(generate_ramp_return(syntax, start, feed))

        lines.extend(_traverse(profile, path, feed, operation.closed))

        if pass_num == num_passes - 1:
            lines.extend(generate_exit(syntax, operation.exit, start, plunge))

        if use_compensation:
            lines.append(generate_compensation_off(syntax))

        lines.append(_retract(profile))

    logger.debug("Contour with %d points cut in %d pass(es)", len(path), num_passes)
    return lines


def _generate_pocket_passes(
    operation,
    tool: Tool,
    profile: MachineProfile,
    closed: bool
) -> List[str]:
    """Follow the pocket outline once per depth step with a vertical plunge."""
    syntax = profile.syntax
    path = operation.path
    feed = feed_rate_for(tool, profile)
    plunge = plunge_rate_for(tool, profile)

    lines = []
    for pass_num, num_passes, z in iter_passes(operation.depth, operation.pass_depth, operation.multi_pass):
        lines.append(_pass_comment(profile, pass_num, num_passes, z))
        lines.extend(_approach(profile, *path[0]))
        lines.append(generate_plunge(syntax, z, plunge))
        lines.extend(_traverse(profile, path, feed, closed))
        lines.append(_retract(profile))
    return lines


def generate_closed_pocket_gcode(
    operation: ClosedPocketOperation,
    tool: Tool,
    profile: MachineProfile
) -> List[str]:
    """Generate G-code for a closed pocket; the outline is always closed."""
    lines = _describe(
        operation, tool, profile,
        f"Closed pocket, {len(operation.path)} points, depth {format_number(operation.depth)} mm"
    )
    lines.append(comment(profile.syntax, f"Strategy: {operation.strategy.value}"))
    lines.extend(_generate_pocket_passes(operation, tool, profile, closed=True))
    return lines


def generate_open_pocket_gcode(
    operation: OpenPocketOperation,
    tool: Tool,
    profile: MachineProfile
) -> List[str]:
    """Generate G-code for an open pocket; the path is never closed."""
    lines = _describe(
        operation, tool, profile,
        f"Open pocket, {len(operation.path)} points, depth {format_number(operation.depth)} mm, "
        f"width {format_number(operation.width)} mm"
    )
    lines.append(comment(profile.syntax, f"Strategy: {operation.strategy.value}"))
    lines.extend(_generate_pocket_passes(operation, tool, profile, closed=False))
    return lines


GENERATORS: Dict[Type[Operation], Generator] = {
    DrillOperation: generate_drill_gcode,
    ContourOperation: generate_contour_gcode,
    ClosedPocketOperation: generate_closed_pocket_gcode,
    OpenPocketOperation: generate_open_pocket_gcode,
}


def _check_registry():
    missing = [op_type.__name__ for op_type in OPERATION_TYPES if op_type not in GENERATORS]
    if missing:
        raise ImportError(f"No G-code generator registered for: {', '.join(missing)}")


_check_registry()


def generate_operation_gcode(
    operation: Operation,
    tool: Tool,
    profile: MachineProfile
) -> List[str]:
    """Dispatch an operation to the generator for its variant."""
    try:
        generator = GENERATORS[type(operation)]
    except KeyError:
        raise TypeError(f"Unsupported operation type: {type(operation).__name__}") from None
    return generator(operation, tool, profile)
