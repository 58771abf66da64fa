"""Allow ``python -m pslist``."""

import sys

from pslist.cli import main

sys.exit(main())
