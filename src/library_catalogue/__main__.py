"""Run the interactive catalogue with ``python -m library_catalogue``."""

import sys

from .cli import main

sys.exit(main())
