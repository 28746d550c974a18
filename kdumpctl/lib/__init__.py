"""Shared utility library for kdumpctl components."""

from kdumpctl.lib.filesystem import FileError, file_exists, read_file, read_int
from kdumpctl.lib.process import CommandError, check_tool, command_succeeds, run_command

__all__ = [
    "CommandError",
    "FileError",
    "check_tool",
    "command_succeeds",
    "file_exists",
    "read_file",
    "read_int",
    "run_command",
]
