"""Shared utility modules for G-code generation."""

from .gcode_format import (
    format_number,
    comment,
    rapid_move,
    linear_move,
    plain_command,
    sanitize_program_name
)
from .multipass import calculate_num_passes, calculate_pass_depths, iter_passes
from .tools import build_catalog, resolve_tool, plunge_rate_for, feed_rate_for
from .lead_in import (
    RAMP_DISTANCE,
    ramp_point,
    generate_entry,
    generate_exit
)
from .tool_compensation import (
    compensation_active,
    generate_compensation_on,
    generate_compensation_off
)
from .file_manager import create_output_directory, build_program_path, write_program_file

__all__ = [
    # gcode_format
    'format_number',
    'comment',
    'rapid_move',
    'linear_move',
    'plain_command',
    'sanitize_program_name',
    # multipass
    'calculate_num_passes',
    'calculate_pass_depths',
    'iter_passes',
    # tools
    'build_catalog',
    'resolve_tool',
    'plunge_rate_for',
    'feed_rate_for',
    # lead_in
    'RAMP_DISTANCE',
    'ramp_point',
    'generate_entry',
    'generate_exit',
    # tool_compensation
    'compensation_active',
    'generate_compensation_on',
    'generate_compensation_off',
    # file_manager
    'create_output_directory',
    'build_program_path',
    'write_program_file',
]
