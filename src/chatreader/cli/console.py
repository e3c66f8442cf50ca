# chatreader/cli/console.py
"""
`chatreader` console script.
"""

import sys
from typing import List, Optional

from .main import main


def console_main(argv: Optional[List[str]] = None):
    """Run the CLI and exit with its status code."""
    sys.exit(main(argv))


if __name__ == '__main__':
    console_main()
