"""Allow running as: python -m securetree"""

import sys

from securetree.cli import main

sys.exit(main())
