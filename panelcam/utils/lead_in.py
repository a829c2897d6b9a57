"""Entry and exit strategies for path cuts.

Ramp moves use a fixed lateral offset (RAMP_DISTANCE along +X and +Y from
the path start). The entry ``angle`` is carried on the operation but does
not change that offset. Spiral entries carry a radius but are cut as a
vertical plunge.
"""
from typing import List, Optional

from ..machine import DialectSyntax
from ..models import Entry, EntryType, Exit, ExitType, Point
from .gcode_format import linear_move

RAMP_DISTANCE = 10.0


def ramp_point(start: Point) -> Point:
    """Point where a ramp entry bottoms out and a ramp exit surfaces."""
    return (start[0] + RAMP_DISTANCE, start[1] + RAMP_DISTANCE)


def is_ramp_entry(entry: Optional[Entry]) -> bool:
    return entry is not None and entry.type == EntryType.RAMP


def is_ramp_exit(exit: Optional[Exit]) -> bool:
    return exit is not None and exit.type == ExitType.RAMP


def generate_plunge(syntax: DialectSyntax, z: float, plunge_rate: float) -> str:
    """Straight vertical plunge to ``z``."""
    return linear_move(syntax, z=z, feed=plunge_rate, note="Vertical plunge")


def generate_ramp_descent(
    syntax: DialectSyntax,
    start: Point,
    z: float,
    plunge_rate: float
) -> List[str]:
    """
    Touch the surface, then descend to ``z`` while moving to the ramp point.

    Returns:
        Two G-code lines; the tool ends at the ramp point at depth ``z``
    """
    rx, ry = ramp_point(start)
    return [
        linear_move(syntax, z=0, feed=plunge_rate, note="Touch surface"),
        linear_move(syntax, x=rx, y=ry, z=z, feed=plunge_rate, note="Ramp entry"),
    ]


def generate_ramp_return(syntax: DialectSyntax, start: Point, feed_rate: float) -> str:
    """Move back from the ramp point to the path start at cutting depth."""
    return linear_move(syntax, x=start[0], y=start[1], feed=feed_rate, note="Back to path start")


def generate_entry(
    syntax: DialectSyntax,
    entry: Optional[Entry],
    start: Point,
    z: float,
    plunge_rate: float
) -> List[str]:
    """
    Lines that take the tool from safe height down to ``z``.

    Only the descent is returned; for a ramp the tool is left at the ramp
    point and ``generate_ramp_return`` brings it back to the path start.
    """
    if is_ramp_entry(entry):
        return generate_ramp_descent(syntax, start, z, plunge_rate)
    return [generate_plunge(syntax, z, plunge_rate)]


def generate_exit(
    syntax: DialectSyntax,
    exit: Optional[Exit],
    start: Point,
    plunge_rate: float
) -> List[str]:
    """
    Lines that bring the tool out of the material after the last pass.

    Ramp exits rise to the surface at the ramp point; vertical and straight
    exits rely on the retract that follows every pass.
    """
    if is_ramp_exit(exit):
        rx, ry = ramp_point(start)
        return [linear_move(syntax, x=rx, y=ry, z=0, feed=plunge_rate, note="Ramp exit")]
    return []
