"""Allow ``python -m blogmd``."""

import sys

from blogmd.cli import main

sys.exit(main())
