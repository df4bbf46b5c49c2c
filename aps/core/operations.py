"""
Operation table for aps.

Each alias maps to an Operation; each Operation maps to a Rule saying
which executable to run, which fixed arguments go before the user's,
whether it needs root, and whether the package lists are refreshed first.

Adding an alias is a table edit:

    ALIASES['i'] = Operation.INSTALL
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Optional, Tuple


class Operation(Enum):
    """Operations aps knows about."""
    REFRESH = 'refresh'
    UPGRADE = 'upgrade'
    SOFT_UPGRADE = 'soft-upgrade'
    INSTALL = 'install'
    REINSTALL = 'reinstall'
    REMOVE = 'remove'
    AUTOREMOVE = 'autoremove'
    MARK = 'mark'
    SEARCH = 'search'
    HELP = 'help'
    PASSTHROUGH = 'passthrough'


@dataclass(frozen=True)
class Rule:
    """How an operation is executed.

    executable is a Config field name ('apt' or 'apt_mark').
    """
    executable: str
    prefix: Tuple[str, ...]
    elevated: bool
    needs_refresh: bool = False
    summary: str = ""


# Flag passed to apt install so Recommends are not pulled in
NO_RECOMMENDS = '--no-install-recommends'

# Flag passed to apt search to match package names only
NAMES_ONLY = '--names-only'

RULES = MappingProxyType({
    Operation.REFRESH: Rule(
        'apt', ('update',), elevated=True,
        summary="refresh package lists"),
    Operation.UPGRADE: Rule(
        'apt', ('full-upgrade',), elevated=True, needs_refresh=True,
        summary="refresh, then full upgrade (may remove packages)"),
    Operation.SOFT_UPGRADE: Rule(
        'apt', ('upgrade',), elevated=True, needs_refresh=True,
        summary="refresh, then upgrade without removing packages"),
    Operation.INSTALL: Rule(
        'apt', ('install', NO_RECOMMENDS), elevated=True, needs_refresh=True,
        summary="refresh, then install without recommended packages"),
    Operation.REINSTALL: Rule(
        'apt', ('reinstall',), elevated=True, needs_refresh=True,
        summary="refresh, then reinstall packages"),
    Operation.REMOVE: Rule(
        'apt', ('remove',), elevated=True,
        summary="remove packages"),
    Operation.AUTOREMOVE: Rule(
        'apt', ('autoremove',), elevated=True,
        summary="remove automatically installed packages no longer needed"),
    Operation.MARK: Rule(
        'apt_mark', (), elevated=True,
        summary="run apt-mark (auto, manual, hold, unhold, ...)"),
    Operation.SEARCH: Rule(
        'apt', ('search', NAMES_ONLY), elevated=False,
        summary="search package names"),
})

# Alias -> Operation. Matching is exact and case-sensitive.
ALIASES = MappingProxyType({
    'refresh': Operation.REFRESH,
    'ref': Operation.REFRESH,
    'upgrade': Operation.UPGRADE,
    'up': Operation.UPGRADE,
    'full-upgrade': Operation.UPGRADE,
    'soft-upgrade': Operation.SOFT_UPGRADE,
    'sup': Operation.SOFT_UPGRADE,
    'install': Operation.INSTALL,
    'in': Operation.INSTALL,
    'reinstall': Operation.REINSTALL,
    'rein': Operation.REINSTALL,
    'remove': Operation.REMOVE,
    'rm': Operation.REMOVE,
    'autoremove': Operation.AUTOREMOVE,
    'autorm': Operation.AUTOREMOVE,
    'mark': Operation.MARK,
    'search': Operation.SEARCH,
    'se': Operation.SEARCH,
})

# Aliases that print a notice before running their operation
NOTICES = MappingProxyType({
    'full-upgrade': (
        "Note: 'aps upgrade' already performs a full upgrade and may remove packages,",
        "unlike 'apt upgrade'. Use 'aps soft-upgrade' to upgrade without removals.",
    ),
})


def lookup(tokens) -> Operation:
    """Select the operation for a token list.

    Returns HELP for no tokens or exactly ['help'], the aliased operation
    when tokens[0] is an alias, PASSTHROUGH otherwise.
    """
    if not tokens or list(tokens) == ['help']:
        return Operation.HELP
    return ALIASES.get(tokens[0], Operation.PASSTHROUGH)


def get_rule(operation: Operation) -> Optional[Rule]:
    """Return the execution rule, None for HELP and PASSTHROUGH."""
    return RULES.get(operation)


def aliases_for(operation: Operation) -> list:
    """Return the aliases of an operation, in table order."""
    return [alias for alias, op in ALIASES.items() if op is operation]
