# =============================================================================
# docqa/cli/__main__.py — Package Entry Point
# =============================================================================
#
# Enables running the CLI package itself as a module:
#     python -m docqa.cli <command> ...
# =============================================================================

"""Allow ``python -m docqa.cli`` execution."""

import sys

from docqa.cli.qa import main

sys.exit(main())
