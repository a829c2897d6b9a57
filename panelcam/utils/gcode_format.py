"""G-code formatting utilities.

Operands are millimetres. Every builder takes the dialect's
``DialectSyntax`` so the same motion can be spelled for any controller;
``note`` text is only written on dialects that accept inline comments.
"""
import re
from typing import List, Optional

from ..machine import DialectSyntax


def format_number(value: float, precision: int = 3) -> str:
    """
    Format a millimetre value as a command operand.

    Rounds to ``precision`` decimals and strips trailing zeros, so whole
    numbers print without a decimal point.

    Args:
        value: The value to format
        precision: Number of decimal places kept (default 3)

    Returns:
        Formatted string representation, e.g. ``10``, ``-12.5``, ``0.3``
    """
    text = f"{value:.{precision}f}"
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    if text in ('-0', ''):
        text = '0'
    return text


# Control characters, newlines included, are not allowed inside a comment line
_CONTROL_CHARS = re.compile(r'[\x00-\x1f\x7f]+')


def _comment_text(syntax: DialectSyntax, text: str) -> str:
    """Flatten text to one line and remove the dialect's own comment delimiters."""
    text = _CONTROL_CHARS.sub(' ', str(text)).strip()
    if syntax.comment_close:
        text = text.replace(syntax.comment_open, '[').replace(syntax.comment_close, ']')
    return text


def comment(syntax: DialectSyntax, text: str) -> str:
    """
    Generate a full-line comment in the dialect's comment style.

    The text is always kept on a single line; on dialects with bracketed
    comments, nested ``(`` and ``)`` become ``[`` and ``]``.
    """
    return f"{syntax.comment_open}{_comment_text(syntax, text)}{syntax.comment_close}"


def _with_note(syntax: DialectSyntax, command: str, note: Optional[str]) -> str:
    if note and syntax.inline_comments:
        return f"{command} {comment(syntax, note)}"
    return command


def _axes(
    x: Optional[float],
    y: Optional[float],
    z: Optional[float]
) -> List[str]:
    parts = []
    if x is not None:
        parts.append(f"X{format_number(x)}")
    if y is not None:
        parts.append(f"Y{format_number(y)}")
    if z is not None:
        parts.append(f"Z{format_number(z)}")
    return parts


def rapid_move(
    syntax: DialectSyntax,
    x: Optional[float] = None,
    y: Optional[float] = None,
    z: Optional[float] = None,
    note: Optional[str] = None
) -> str:
    """
    Generate a rapid (non-cutting) move.

    Args:
        syntax: Dialect spelling
        x: X coordinate (optional)
        y: Y coordinate (optional)
        z: Z coordinate (optional)
        note: Inline explanation (optional)

    Returns:
        Rapid move command string
    """
    command = " ".join([syntax.rapid] + _axes(x, y, z))
    return _with_note(syntax, command, note)


def linear_move(
    syntax: DialectSyntax,
    x: Optional[float] = None,
    y: Optional[float] = None,
    z: Optional[float] = None,
    feed: Optional[float] = None,
    note: Optional[str] = None
) -> str:
    """
    Generate a linear cutting move.

    Args:
        syntax: Dialect spelling
        x: X coordinate (optional)
        y: Y coordinate (optional)
        z: Z coordinate (optional)
        feed: Feed rate in mm/min (optional)
        note: Inline explanation (optional)

    Returns:
        Linear move command string
    """
    parts = [syntax.linear] + _axes(x, y, z)
    if feed is not None:
        parts.append(f"F{format_number(feed)}")
    return _with_note(syntax, " ".join(parts), note)


def plain_command(syntax: DialectSyntax, command: str, note: Optional[str] = None) -> str:
    """Generate a modal/setup command such as ``G90`` or ``M5``."""
    return _with_note(syntax, command, note)


def sanitize_program_name(name: str) -> str:
    """
    Clean a panel name for filesystem use.

    - Replace spaces with underscores
    - Remove special characters except underscores and hyphens
    - Truncate to 50 characters max
    - Fall back to ``program`` when nothing is left

    Args:
        name: Original panel name

    Returns:
        Sanitized name safe for filesystem
    """
    sanitized = name.replace(" ", "_")
    sanitized = re.sub(r'[^a-zA-Z0-9_-]', '', sanitized)
    return sanitized[:50] or 'program'
