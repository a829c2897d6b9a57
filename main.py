#!/usr/bin/env python3

import argparse
import json
import logging
import sys

from config import Config
from panelcam.gcode_generator import PanelGCodeGenerator
from panelcam.job_parser import ParseError, parse_job
from panelcam.machine import Dialect, MachineProfile
from panelcam.utils.file_manager import build_program_path, create_output_directory, write_program_file


def build_parser():
    parser = argparse.ArgumentParser(description="Generate a CNC program from a panel job file")
    parser.add_argument('job_file', help="JSON job: panel, operations, tools, machine")
    parser.add_argument('-o', '--output', help="Program file to write (default: OUTPUT_DIR/<panel>.nc)")
    parser.add_argument('--dialect', choices=[d.value for d in Dialect],
                        help="Override the machine dialect")
    parser.add_argument('--print', dest='print_program', action='store_true',
                        help="Print the program instead of writing a file")
    return parser


def load_job(path, default_profile):
    """Read and parse a job file, raising ParseError on any problem."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ParseError(f"Job file not found: {path}")
    except json.JSONDecodeError as e:
        raise ParseError(f"Job file {path} is not valid JSON: {e}")
    return parse_job(data, default_profile)


def main(argv=None):
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(Config.LOG_LEVEL).upper(), logging.INFO),
        format='%(levelname)s %(name)s: %(message)s'
    )

    default_profile = MachineProfile.from_config(vars(Config))
    try:
        job = load_job(args.job_file, default_profile)
    except ParseError as e:
        print(f"ERROR: Problem with job file:\n{e}", file=sys.stderr)
        return 1

    profile = job.profile
    if args.dialect:
        profile = MachineProfile.from_mapping({'dialect': args.dialect}, profile)

    program = PanelGCodeGenerator(profile).generate(job.panel, job.operations, job.tools)

    if args.print_program:
        sys.stdout.write(program.text)
    else:
        output = args.output or build_program_path(create_output_directory(Config.OUTPUT_DIR), job.panel.name)
        write_program_file(output, program.text)
        print(f"Program for '{job.panel.name}' written to {output}")
        print(f"- {len(job.operations)} operation(s), {len(program.lines)} line(s), dialect {profile.dialect.value}")

    for warning in program.warnings:
        print(f"WARNING: {warning}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
