"""Allow ``python -m feedback_anchoring``."""

import sys

from feedback_anchoring.cli import main

sys.exit(main())
