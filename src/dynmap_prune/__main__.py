"""Command-line interface."""
import sys

from dynmap_prune.cli import main

if __name__ == "__main__":
    sys.exit(main())
