"""Allow ``python -m mcp_runtime``."""

import sys

from mcp_runtime.main import main

sys.exit(main())
