"""G-code generation service."""
import logging
from typing import Dict, List, Mapping, Tuple

from flask import current_app

from panelcam.gcode_generator import PanelGCodeGenerator
from panelcam.job_parser import Job, parse_job
from panelcam.machine import Dialect, MachineProfile
from panelcam.models import DEFAULT_TOOLS, Program, Tool
from panelcam.utils.gcode_format import sanitize_program_name
from panelcam.utils.file_manager import PROGRAM_EXTENSION
from panelcam.utils.tools import resolve_tool

logger = logging.getLogger(__name__)


class GCodeService:
    """Service for G-code generation and validation."""

    @staticmethod
    def default_profile() -> MachineProfile:
        """Machine profile built from the application's MACHINE_* settings."""
        return MachineProfile.from_config(current_app.config)

    @staticmethod
    def parse(data: Mapping) -> Job:
        """
        Parse a request payload into a job.

        Raises:
            ParseError: if the payload is malformed
        """
        return parse_job(data, GCodeService.default_profile())

    @staticmethod
    def generate_job(job: Job) -> Program:
        """Generate the program for a parsed job."""
        program = PanelGCodeGenerator(job.profile).generate(job.panel, job.operations, job.tools)
        logger.info(
            "Generated %d line(s) for panel %r with %d warning(s)",
            len(program.lines), job.panel.name, len(program.warnings)
        )
        return program

    @staticmethod
    def generate(data: Mapping) -> Program:
        """Parse a request payload and generate its program."""
        return GCodeService.generate_job(GCodeService.parse(data))

    @staticmethod
    def generate_download(data: Mapping) -> Tuple[bytes, str]:
        """
        Generate a program ready for download.

        Returns:
            Tuple of (program bytes, download filename)
        """
        job = GCodeService.parse(data)
        program = GCodeService.generate_job(job)
        filename = sanitize_program_name(job.panel.name) + PROGRAM_EXTENSION
        return program.text.encode('utf-8'), filename

    @staticmethod
    def validate(data: Mapping) -> Tuple[List[str], List[str]]:
        """
        Validate a payload before generating G-code.

        Unresolvable tool references are warnings, not errors: generation
        still succeeds and marks those operations in the program.

        Returns:
            Tuple of (errors, warnings)
        """
        job = GCodeService.parse(data)
        warnings = []
        for number, operation in enumerate(job.operations, start=1):
            if resolve_tool(operation.tool_id, job.tools) is None:
                warnings.append(f"Operation {number}: tool \"{operation.tool_id}\" not found")
        if not job.operations:
            warnings.append("Job has no operations")
        return [], warnings

    @staticmethod
    def list_dialects() -> List[str]:
        return [dialect.value for dialect in Dialect]

    @staticmethod
    def tool_to_dict(tool: Tool) -> Dict:
        return {
            'id': tool.id,
            'name': tool.name,
            'kind': tool.kind.value,
            'diameter': tool.diameter,
            'spindle_speed': tool.spindle_speed,
            'feed_rate': tool.feed_rate,
            'plunge_rate': tool.plunge_rate,
            'max_depth': tool.max_depth,
        }

    @staticmethod
    def default_tools() -> List[Dict]:
        return [GCodeService.tool_to_dict(tool) for tool in DEFAULT_TOOLS]
