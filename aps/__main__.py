"""Allow running as: python -m aps <alias> [args...]"""

import sys

from .cli.main import main

if __name__ == '__main__':
    sys.exit(main())
