"""Allow ``python -m pgnreader``."""

import sys

from pgnreader.cli import main

sys.exit(main())
