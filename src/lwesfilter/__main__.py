"""Allow ``python -m lwesfilter``."""

import sys

from lwesfilter.cli import main

if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
