"""Multi-pass depth calculation utilities."""
import math
from typing import Iterator, List, Optional, Tuple

# Quotients are rounded before ceil so 1.1 / 0.1 counts 11 passes, not 12
_QUOTIENT_DIGITS = 9


def calculate_num_passes(
    total_depth: float,
    pass_depth: Optional[float],
    multi_pass: bool = True
) -> int:
    """
    Calculate the number of passes needed for a given depth.

    Args:
        total_depth: Total depth to cut (mm)
        pass_depth: Maximum depth per pass (mm); None means the total depth
        multi_pass: False forces a single pass

    Returns:
        Number of passes required (at least 1)
    """
    if not multi_pass or not pass_depth or pass_depth <= 0:
        return 1
    return max(1, math.ceil(round(total_depth / pass_depth, _QUOTIENT_DIGITS)))


def calculate_pass_depths(
    total_depth: float,
    pass_depth: Optional[float],
    multi_pass: bool = True
) -> List[float]:
    """
    Calculate the absolute Z depth of each pass.

    Every pass goes ``pass_depth`` deeper than the previous one; the last
    pass always lands exactly on ``total_depth``.

    Args:
        total_depth: Total depth to cut (mm)
        pass_depth: Maximum depth per pass (mm)
        multi_pass: False forces a single pass at full depth

    Returns:
        List of negative Z values, one per pass, ending at ``-total_depth``
    """
    num_passes = calculate_num_passes(total_depth, pass_depth, multi_pass)
    if num_passes == 1:
        return [-total_depth]
    depths = [-min((i + 1) * pass_depth, total_depth) for i in range(num_passes - 1)]
    depths.append(-total_depth)
    return depths


def iter_passes(
    total_depth: float,
    pass_depth: Optional[float],
    multi_pass: bool = True
) -> Iterator[Tuple[int, int, float]]:
    """
    Iterate over passes, yielding pass information.

    Yields:
        Tuple of (pass_num, num_passes, z):
        - pass_num: Zero-indexed pass number
        - num_passes: Total number of passes
        - z: Absolute depth of this pass (negative)
    """
    depths = calculate_pass_depths(total_depth, pass_depth, multi_pass)
    for i, z in enumerate(depths):
        yield i, len(depths), z
