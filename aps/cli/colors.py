"""Color output support for aps CLI.

Color palette:
  - Orange: notices about behavior that differs from apt
  - Green: aliases
  - Dim: hints under the help text
"""

import os
import sys

# ANSI color codes
_COLORS = {
    'reset': '\033[0m',
    'bold': '\033[1m',
    'orange': '\033[93m',   # Yellow/orange (no true orange in ANSI)
    'green': '\033[92m',
    'dim': '\033[2m',
}

# Global state
_colors_enabled = True


def init(nocolor: bool = False, stream=None):
    """Initialize color support.

    Args:
        nocolor: If True, disable colors unconditionally
        stream: Stream checked for a terminal (default: sys.stdout)
    """
    global _colors_enabled

    if stream is None:
        stream = sys.stdout

    if nocolor:
        _colors_enabled = False
    elif os.environ.get('NO_COLOR'):
        # Respect NO_COLOR environment variable (https://no-color.org/)
        _colors_enabled = False
    elif not stream.isatty():
        _colors_enabled = False
    else:
        _colors_enabled = True


def _wrap(text: str, color: str) -> str:
    """Wrap text with color codes if colors are enabled."""
    if not _colors_enabled:
        return text
    code = _COLORS.get(color, '')
    reset = _COLORS['reset']
    return f"{code}{text}{reset}"


def warning(text: str) -> str:
    """Format text as warning (orange/yellow)."""
    return _wrap(text, 'orange')


def success(text: str) -> str:
    """Format text as success (green)."""
    return _wrap(text, 'green')


def dim(text: str) -> str:
    return _wrap(text, 'dim')


def bold(text: str) -> str:
    return _wrap(text, 'bold')
