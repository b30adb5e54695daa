"""
Type aliases for pickle-installer.

This module provides centralized type definitions used throughout the installer
to keep signatures consistent.

Type Aliases:
    ArgsList: List of string arguments
    ExitCode: Integer representing exit codes
    ConfigData: Dictionary representing configuration data
    LineSink: Callable receiving one line of process output
"""

from typing import Callable, Dict, List, NamedTuple

ArgsList = List[str]
"""List of string arguments used for command lines."""

ExitCode = int
"""Integer representing process exit codes (0 for success, non-zero for errors)."""

ConfigData = Dict[str, str]
"""Dictionary representing configuration data with string keys and values."""

LineSink = Callable[[str], None]
"""Callable receiving a single line of process output (without trailing newline)."""


class CommandResult(NamedTuple):
    """Exit code and captured combined output of a finished process."""

    exit_code: ExitCode
    output: str
