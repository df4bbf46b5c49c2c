"""Alias dispatch for aps.

Routes the first token through the alias table and forwards the rest,
untouched, to apt or apt-mark. Unknown first tokens go to apt as they are.
"""

import logging
from typing import Sequence

from ..core.config import Config
from ..core.operations import (
    RULES, NOTICES, Operation, aliases_for, get_rule, lookup,
)
from ..core.runner import Runner
from . import colors

logger = logging.getLogger(__name__)


def format_help() -> str:
    """Build the help text from the alias table."""
    rows = [(', '.join(aliases_for(op)), rule.summary) for op, rule in RULES.items()]
    rows.append(('help', "show this help"))
    width = max(len(names) for names, _ in rows) + 2

    lines = [
        colors.bold('aps - short aliases for apt'),
        '',
        "Usage: aps <alias> [args...]",
        '',
    ]
    for names, summary in rows:
        padding = ' ' * (width - len(names))
        lines.append(f"  {colors.success(names)}{padding}{summary}")
    lines.extend([
        '',
        colors.dim("Arguments after the alias are passed to apt unchanged."),
        colors.dim("Any other command goes straight to apt, e.g. 'aps show curl'."),
    ])
    return '\n'.join(lines)


def print_help():
    print(format_help())


class Dispatcher:
    """Map an argument list onto apt invocations."""

    def __init__(self, config: Config, runner: Runner = None):
        """Initialize dispatcher.

        Args:
            config: Executable locations
            runner: Object with run(command, args, elevated) (default: Runner)
        """
        self.config = config
        self.runner = runner or Runner(config)

    def dispatch(self, tokens: Sequence[str]) -> int:
        """Dispatch one invocation.

        Args:
            tokens: Command line arguments without the program name

        Returns:
            Exit status of the last child spawned, 0 after help
        """
        tokens = list(tokens)
        operation = lookup(tokens)

        if operation is Operation.HELP:
            print_help()
            return 0

        if operation is Operation.PASSTHROUGH:
            logger.debug(f"No alias for {tokens[0]!r}, passing through to apt")
            return self.runner.run(self.config.apt, tokens, elevated=False)

        alias, args = tokens[0], tokens[1:]
        logger.debug(f"Alias {alias!r} -> {operation.value}")

        for line in NOTICES.get(alias, ()):
            print(colors.warning(line))

        return self.execute(operation, args)

    def execute(self, operation: Operation, args: Sequence[str]) -> int:
        """Run an operation, refreshing first if its rule says so.

        A failed refresh stops the operation and its status is returned.
        """
        rule = get_rule(operation)
        if rule is None:
            raise ValueError(f"Operation {operation.value} has no execution rule")

        if rule.needs_refresh:
            status = self.execute(Operation.REFRESH, [])
            if status != 0:
                logger.debug(f"Refresh failed with status {status}, "
                             f"skipping {operation.value}")
                return status

        command = self.config.executable(rule.executable)
        return self.runner.run(command, [*rule.prefix, *args], elevated=rule.elevated)


def dispatch(tokens: Sequence[str], config: Config = None, runner: Runner = None) -> int:
    """Dispatch tokens with a default configuration."""
    return Dispatcher(config or Config(), runner).dispatch(tokens)
