"""Output directory and program file utilities."""
import os

from .gcode_format import sanitize_program_name

PROGRAM_EXTENSION = '.nc'


def create_output_directory(base_path: str) -> str:
    """
    Create the output directory if needed.

    Args:
        base_path: Directory that receives program files

    Returns:
        Absolute path of the directory
    """
    directory = os.path.abspath(base_path)
    os.makedirs(directory, exist_ok=True)
    return directory


def build_program_path(directory: str, panel_name: str) -> str:
    """Path of the program file for a panel, e.g. ``out/Side_panel.nc``."""
    return os.path.join(directory, sanitize_program_name(panel_name) + PROGRAM_EXTENSION)


def write_program_file(file_path: str, content: str) -> str:
    """
    Write a program file, creating parent directories.

    Args:
        file_path: Destination file
        content: Program text

    Returns:
        Full path to the written file
    """
    parent = os.path.dirname(file_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(file_path, 'w', newline='\n') as f:
        f.write(content)
    return file_path
