#!/usr/bin/env python3
"""
Enable running dynview as a module: python -m dynview

Usage:
    python -m dynview --help
    python -m dynview info graph.dyn
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
