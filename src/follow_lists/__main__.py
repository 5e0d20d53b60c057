"""Allow ``python -m follow_lists``."""

import sys

from follow_lists.app import main

sys.exit(main())
