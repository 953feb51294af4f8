"""Allow ``python -m cadtreelib``."""

import sys

from .cli import main

sys.exit(main())
