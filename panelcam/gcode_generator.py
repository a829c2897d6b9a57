"""G-code program assembly for panel machining.

This module orchestrates G-code generation for one panel:
- Dialect-specific header (absolute mode, millimetres, spindle start)
- One block per operation, in list order
- Inline diagnostics for operations whose tool cannot be resolved
- Shutdown footer
"""
import logging
from datetime import datetime, UTC
from typing import Callable, Iterable, List, Optional, Sequence

from .machine import MachineProfile
from .models import Operation, PanelInfo, Program, Tool
from .operation_gcode import cut_depth, generate_operation_gcode
from .utils.gcode_format import comment, format_number, plain_command, rapid_move
from .utils.tools import Catalog, build_catalog, resolve_tool

logger = logging.getLogger(__name__)

ORIGIN_LABELS = {
    'bottom_left': 'bottom left corner',
    'bottom_right': 'bottom right corner',
    'top_left': 'top left corner',
    'top_right': 'top right corner',
    'center': 'center',
}


def _utc_now() -> datetime:
    return datetime.now(UTC)


class PanelGCodeGenerator:
    """Compiles a panel's operation list into a program for one machine."""

    def __init__(
        self,
        profile: Optional[MachineProfile] = None,
        clock: Callable[[], datetime] = _utc_now
    ):
        """
        Initialize the generator.

        Args:
            profile: Target machine; defaults to the generic profile
            clock: Source of the header timestamp
        """
        self.profile = profile or MachineProfile()
        self.clock = clock

    @property
    def syntax(self):
        return self.profile.syntax

    def generate_header(self, panel: PanelInfo, timestamp_line: Optional[str] = None) -> List[str]:
        """
        Generate the program header.

        Returns:
            Descriptive comments, including the generation timestamp,
            followed by the setup commands
        """
        syntax = self.syntax
        profile = self.profile
        lines = [
            comment(syntax, f"Program for: {panel.name}"),
            comment(
                syntax,
                f"Dimensions: {format_number(panel.length)} x {format_number(panel.width)} x "
                f"{format_number(panel.thickness)} mm"
            ),
            comment(syntax, f"Material: {panel.material or 'unspecified'}"),
            comment(
                syntax,
                f"Origin: {ORIGIN_LABELS[panel.origin]}, {panel.face} face, "
                f"Z offset {format_number(panel.z_offset)} mm"
            ),
            timestamp_line or self._timestamp_line(),
        ]
        if syntax.banner:
            lines.append(comment(syntax, syntax.banner))
        lines.extend([
            plain_command(syntax, 'G90', "Absolute positioning"),
            plain_command(syntax, 'G21', "Units in millimeters"),
            rapid_move(syntax, z=profile.safe_height, note="Safe height"),
            plain_command(syntax, f"M3 S{format_number(profile.spindle_speed)}", "Start spindle"),
        ])
        return lines

    def generate_footer(self) -> List[str]:
        """Retract, stop the spindle and end the program."""
        syntax = self.syntax
        return [
            rapid_move(syntax, z=self.profile.safe_height, note="Safe height"),
            plain_command(syntax, 'M5', "Stop spindle"),
            plain_command(syntax, 'M30', "End of program"),
        ]

    def _timestamp_line(self) -> str:
        return comment(self.syntax, f"Generated: {self.clock().isoformat()}")

    def _depth_warning(self, number: int, operation: Operation, tool: Tool) -> Optional[str]:
        if tool.max_depth is None or cut_depth(operation) <= tool.max_depth:
            return None
        return (
            f"WARNING: operation {number} cuts {format_number(cut_depth(operation))} mm deep, "
            f"tool \"{tool.id}\" max depth is {format_number(tool.max_depth)} mm"
        )

    def generate_block(
        self,
        number: int,
        operation: Operation,
        catalog: Catalog,
        warnings: List[str]
    ) -> List[str]:
        """
        Generate the block for one operation.

        A missing tool does not abort generation: the block is replaced by a
        single diagnostic comment and the message is added to ``warnings``.
        """
        syntax = self.syntax
        tool = resolve_tool(operation.tool_id, catalog)
        if tool is None:
            message = f"ERROR: tool \"{operation.tool_id}\" not found for operation {number}"
            logger.warning("Operation %d (%s): tool %r not found", number, operation.kind, operation.tool_id)
            warnings.append(message)
            return [comment(syntax, message)]

        lines = ['', comment(syntax, f"Operation {number}: {operation.kind}")]
        depth_warning = self._depth_warning(number, operation, tool)
        if depth_warning:
            logger.warning(depth_warning)
            warnings.append(depth_warning)
            lines.append(comment(syntax, depth_warning))
        lines.extend(generate_operation_gcode(operation, tool, self.profile))
        return lines

    def generate(
        self,
        panel: PanelInfo,
        operations: Sequence[Operation],
        tools: Iterable[Tool]
    ) -> Program:
        """
        Generate the complete program for a panel.

        Args:
            panel: Panel metadata for the header
            operations: Operations in machining order
            tools: Tool catalog

        Returns:
            Program with one block per operation
        """
        catalog = build_catalog(tools)
        warnings: List[str] = []

        timestamp_line = self._timestamp_line()
        header = self.generate_header(panel, timestamp_line)
        blocks = tuple(
            tuple(self.generate_block(number, operation, catalog, warnings))
            for number, operation in enumerate(operations, start=1)
        )
        footer = [''] + self.generate_footer()

        logger.debug(
            "Generated %d operation block(s) for panel %r (%s)",
            len(blocks), panel.name, self.profile.dialect.value
        )
        return Program(
            header=tuple(header),
            blocks=blocks,
            footer=tuple(footer),
            warnings=tuple(warnings),
            timestamp_line=timestamp_line,
        )


def generate_gcode(
    panel: PanelInfo,
    operations: Sequence[Operation],
    tools: Iterable[Tool],
    profile: Optional[MachineProfile] = None
) -> str:
    """Generate the program text for a panel."""
    return PanelGCodeGenerator(profile).generate(panel, operations, tools).text
