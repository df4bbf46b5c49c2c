"""Caller context for aps.

Decides whether a privileged command needs the elevation prefix.
A caller already running as root (effective uid 0) gets none.
"""

import os
from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True)
class CallerContext:
    """Identity of the user running aps."""
    user_id: int

    @property
    def is_root(self) -> bool:
        return self.user_id == 0

    def elevation_prefix(self, elevate: Sequence[str]) -> Tuple[str, ...]:
        """Return the argv prefix for a privileged command.

        Args:
            elevate: Configured elevation command (e.g. ('sudo',))
        """
        if self.is_root:
            return ()
        return tuple(elevate)

    @classmethod
    def current(cls) -> 'CallerContext':
        """Create context for the current process (effective uid)."""
        return cls(user_id=os.geteuid())
