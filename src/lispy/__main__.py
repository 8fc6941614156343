"""Allow running lispy as a module: python -m lispy."""

import sys

from lispy.cli import main

if __name__ == "__main__":
    sys.exit(main())
