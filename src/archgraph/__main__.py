"""
Main entry point for ArchGraph.

``python -m archgraph`` behaves like the ``archgraph`` console script.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
