"""Module entry point for the modhost CLI."""

import sys

from .main import main

sys.exit(main())
