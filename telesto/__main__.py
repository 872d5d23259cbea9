"""Allow ``python -m telesto``."""

import sys

from .cli import main

sys.exit(main())
