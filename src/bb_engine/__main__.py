"""Allow running as: python -m bb_engine"""

import sys

from .cli import main

sys.exit(main())
