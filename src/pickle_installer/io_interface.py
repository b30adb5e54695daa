"""Output sinks the host hands to installers."""

import sys
from typing import List, Protocol


class IOInterface(Protocol):
    """Where installers write human-readable progress."""

    def write(self, message: str) -> None:
        ...

    def write_error(self, message: str) -> None:
        ...

    def is_verbose(self) -> bool:
        ...


class ConsoleIO:
    """Writes progress to stdout and errors to stderr."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def write(self, message: str) -> None:
        print(message, flush=True)

    def write_error(self, message: str) -> None:
        print(message, file=sys.stderr, flush=True)

    def is_verbose(self) -> bool:
        return self.verbose


class BufferIO:
    """Collects output in memory, mostly for embedding and tests."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.lines: List[str] = []
        self.error_lines: List[str] = []

    def write(self, message: str) -> None:
        self.lines.append(message)

    def write_error(self, message: str) -> None:
        self.error_lines.append(message)

    def is_verbose(self) -> bool:
        return self.verbose

    def get_output(self) -> str:
        return "\n".join(self.lines)
