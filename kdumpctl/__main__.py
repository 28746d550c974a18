"""Allow running as ``python -m kdumpctl``."""

import sys

from kdumpctl.cli import main

sys.exit(main())
