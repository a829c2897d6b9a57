"""Controller-side tool radius compensation (G41/G42/G40)."""
from ..machine import DialectSyntax, MachineProfile
from ..models import Compensation, Tool
from .gcode_format import format_number, plain_command


def compensation_active(profile: MachineProfile, side: Compensation) -> bool:
    """True when the profile enables compensation and a side is requested."""
    return profile.use_tool_compensation and side not in (None, Compensation.NONE)


def generate_compensation_on(syntax: DialectSyntax, side: Compensation, tool: Tool) -> str:
    """
    Activate compensation on the requested side of the path.

    The tool diameter is passed as the D value.
    """
    code = 'G41' if side == Compensation.LEFT else 'G42'
    return plain_command(syntax, f"{code} D{format_number(tool.diameter)}", "Tool compensation")


def generate_compensation_off(syntax: DialectSyntax) -> str:
    return plain_command(syntax, 'G40', "Cancel tool compensation")
