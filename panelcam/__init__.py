"""Machining-operation compiler for panel CNC programs."""

from .gcode_generator import PanelGCodeGenerator, generate_gcode
from .job_parser import Job, ParseError, parse_job, parse_operation, parse_tool, parse_panel
from .machine import Dialect, InvalidProfile, MachineProfile
from .models import (
    ClosedPocketOperation,
    Compensation,
    ContourOperation,
    DEFAULT_TOOLS,
    DrillOperation,
    Entry,
    EntryType,
    Exit,
    ExitType,
    InvalidOperation,
    InvalidPanel,
    InvalidTool,
    OpenPocketOperation,
    Operation,
    PanelInfo,
    Program,
    Tool,
    ToolKind,
)
from .operation_gcode import (
    generate_drill_gcode,
    generate_contour_gcode,
    generate_closed_pocket_gcode,
    generate_open_pocket_gcode,
    generate_operation_gcode,
)

__all__ = [
    # Program assembly
    'PanelGCodeGenerator',
    'generate_gcode',
    # Per-operation generators
    'generate_drill_gcode',
    'generate_contour_gcode',
    'generate_closed_pocket_gcode',
    'generate_open_pocket_gcode',
    'generate_operation_gcode',
    # Job parsing
    'Job',
    'ParseError',
    'parse_job',
    'parse_operation',
    'parse_tool',
    'parse_panel',
    # Machine
    'Dialect',
    'InvalidProfile',
    'MachineProfile',
    # Model
    'ClosedPocketOperation',
    'Compensation',
    'ContourOperation',
    'DEFAULT_TOOLS',
    'DrillOperation',
    'Entry',
    'EntryType',
    'Exit',
    'ExitType',
    'InvalidOperation',
    'InvalidPanel',
    'InvalidTool',
    'OpenPocketOperation',
    'Operation',
    'PanelInfo',
    'Program',
    'Tool',
    'ToolKind',
]
