"""
Allow ``python -m pseudocoder``.
"""

import sys

from pseudocoder.cli import main

sys.exit(main())
