"""Entry point for ``python -m archipelago``."""

import sys

from .cli import main

sys.exit(main())
