"""
Process spawning for aps.

Runner.run() is the single place where child processes are started.
Children inherit stdin/stdout/stderr, so apt talks to the terminal
directly and its own messages are the only diagnostics. While a child
runs, SIGINT and SIGQUIT are ignored here and left to the child.

Exit codes follow the shell:
    child exit status       -> returned as is
    killed by signal N      -> 128 + N
    program not found       -> 127
    program not executable  -> 126
"""

import logging
import shlex
import signal
import subprocess
import sys
from contextlib import contextmanager
from typing import Sequence

from ..auth.context import CallerContext
from .config import Config

logger = logging.getLogger(__name__)

EXIT_NOT_EXECUTABLE = 126
EXIT_NOT_FOUND = 127
SIGNAL_EXIT_BASE = 128

# Left to the child while it runs, as a shell does for its foreground job
FORWARDED_SIGNALS = (signal.SIGINT, signal.SIGQUIT)


def exit_status(returncode: int) -> int:
    """Convert a subprocess return code to a shell-style exit status."""
    if returncode < 0:
        return SIGNAL_EXIT_BASE - returncode
    return returncode


@contextmanager
def interrupts_ignored():
    """Ignore SIGINT and SIGQUIT in this process, restoring handlers on exit.

    The terminal delivers Ctrl-C to the whole foreground process group, so
    the child still receives it and decides for itself whether to stop.
    """
    saved = {sig: signal.getsignal(sig) for sig in FORWARDED_SIGNALS}
    for sig in saved:
        signal.signal(sig, signal.SIG_IGN)
    try:
        yield
    finally:
        for sig, handler in saved.items():
            if handler is not None:
                signal.signal(sig, handler)


class Runner:
    """Spawn commands synchronously, optionally through the elevation prefix."""

    def __init__(self, config: Config, caller: CallerContext = None):
        """Initialize runner.

        Args:
            config: Configuration providing the elevation command
            caller: Caller identity (default: current process)
        """
        self.config = config
        self.caller = caller or CallerContext.current()

    def build_argv(self, command: str, args: Sequence[str], elevated: bool = False) -> list:
        """Return the full argv for a command."""
        argv = [command, *args]
        if elevated:
            argv = [*self.caller.elevation_prefix(self.config.elevate), *argv]
        return argv

    def run(self, command: str, args: Sequence[str], elevated: bool = False) -> int:
        """Run a command and wait for it.

        Args:
            command: Executable path or name
            args: Arguments, passed verbatim
            elevated: Run through the elevation prefix

        Returns:
            Exit status of the child
        """
        argv = self.build_argv(command, args, elevated)
        logger.debug(f"Running: {shlex.join(argv)}")

        # The child writes to the same descriptors: our output goes first
        sys.stdout.flush()
        sys.stderr.flush()

        try:
            proc = subprocess.Popen(argv)
        except FileNotFoundError:
            print(f"aps: {argv[0]}: command not found", file=sys.stderr)
            return EXIT_NOT_FOUND
        except PermissionError:
            print(f"aps: {argv[0]}: Permission denied", file=sys.stderr)
            return EXIT_NOT_EXECUTABLE

        with interrupts_ignored():
            returncode = proc.wait()

        status = exit_status(returncode)
        logger.debug(f"{argv[0]} exited with status {status}")
        return status
