"""
Main CLI entry point for aps

Short aliases for apt:
- aps refresh / aps ref          (sudo apt update)
- aps upgrade / aps up           (refresh, then sudo apt full-upgrade)
- aps soft-upgrade / aps sup     (refresh, then sudo apt upgrade)
- aps install / aps in           (refresh, then sudo apt install --no-install-recommends)
- aps reinstall / aps rein
- aps remove / aps rm
- aps autoremove / aps autorm
- aps mark                       (sudo apt-mark)
- aps search / aps se            (apt search --names-only)

aps takes no options of its own: everything after the alias belongs to apt.
Set APS_VERBOSE=1 to log what is being run.
"""

import logging
import os
import sys

from ..core.config import ConfigError, load_config
from . import colors
from .dispatch import Dispatcher

ENV_VERBOSE = 'APS_VERBOSE'


def _verbose_requested(environ=None) -> bool:
    if environ is None:
        environ = os.environ
    value = environ.get(ENV_VERBOSE, '')
    return value not in ('', '0')


def main(argv=None) -> int:
    """Main CLI entry point."""
    if argv is None:
        argv = sys.argv[1:]

    # Verbose logging is switched on from the environment: all arguments belong to apt
    if _verbose_requested():
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(name)s - %(levelname)s - %(message)s',
            stream=sys.stderr
        )

    colors.init()

    try:
        config = load_config()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        return Dispatcher(config).dispatch(argv)

    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
