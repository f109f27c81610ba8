"""
Entry point for running memoquill as a module.

Usage:
    python -m memoquill generate --to Finance --from Operations --subject Review --body-file body.html
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
