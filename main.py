#!/usr/bin/env python3
"""
Multiplayer Minesweeper - Main entry point.

Usage:
    python main.py [--debug | --no-debug] [--port PORT]
                   [--size WIDTH,HEIGHT | --file FILE]
"""
import sys
from pathlib import Path

# Allow running from a checkout without installing
sys.path.insert(0, str(Path(__file__).parent / "src"))

from server.cli import main


if __name__ == "__main__":
    sys.exit(main())
