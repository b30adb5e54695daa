"""Process execution functionality for pickle-installer."""

import selectors
import shlex
import subprocess
from typing import TextIO, cast

from .environment_helper import debug_log
from .exceptions import ExecutableNotFoundError
from .types import ArgsList, CommandResult, ExitCode, LineSink


class ProcessExecutor:
    """
    Runs external commands synchronously.

    The installer only talks to processes through this class, so tests and
    hosts can swap in their own executor.
    """

    @staticmethod
    def format_command(argv: ArgsList) -> str:
        """Render an argument list as a shell-quoted command line."""
        return " ".join(shlex.quote(arg) for arg in argv)

    def execute(self, argv: ArgsList) -> CommandResult:
        """Run command to completion, capturing combined stdout/stderr."""
        debug_log(f"execute: {self.format_command(argv)}")
        try:
            completed = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise ExecutableNotFoundError(argv[0]) from e

        debug_log(f"execute: exit code {completed.returncode}")
        return CommandResult(completed.returncode, completed.stdout or "")

    def run_nonblocking(self, argv: ArgsList, on_line: LineSink) -> ExitCode:
        """Execute command with non-blocking I/O, forwarding stdout/stderr lines as they arrive."""
        debug_log(f"run_nonblocking: {self.format_command(argv)}")
        try:
            process = subprocess.Popen(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                bufsize=0,
                text=True,
            )
        except FileNotFoundError as e:
            raise ExecutableNotFoundError(argv[0]) from e

        sel = selectors.DefaultSelector()
        for fileobj in (process.stdout, process.stderr):
            if fileobj:
                sel.register(cast(TextIO, fileobj), selectors.EVENT_READ)

        try:
            while sel.get_map():
                for key, _ in sel.select():
                    fileobj = cast(TextIO, key.fileobj)
                    try:
                        line = fileobj.readline()
                    except (IOError, OSError):
                        # If we can't read from the fileobj, unregister it
                        sel.unregister(fileobj)
                        continue
                    if not line:
                        sel.unregister(fileobj)
                        continue

                    on_line(line.rstrip("\r\n"))
        except BaseException:
            # The child never outlives this call
            if process.poll() is None:
                debug_log(f"run_nonblocking: killing pid {process.pid}")
                process.kill()
            process.wait()
            raise
        finally:
            sel.close()

        exit_code = process.wait()
        debug_log(f"run_nonblocking: exit code {exit_code}")
        return exit_code
