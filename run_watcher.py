#!/usr/bin/env python3
"""Launcher script for the game log watcher.

Runs the console watcher straight from a checkout without installing the
package. Settings come from config/watcher.yaml and the GAMELOG_*
environment variables; see ``--help`` for command line overrides.
"""

import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent / "src"))


def main():
    """Main entry point."""
    try:
        from gamelog.cli import main as cli_main
    except ImportError as e:
        print(f"Import error: {e}", file=sys.stderr)
        print("Please ensure dependencies are installed:", file=sys.stderr)
        print("pip install -e .", file=sys.stderr)
        sys.exit(1)

    sys.exit(cli_main())


if __name__ == "__main__":
    main()
