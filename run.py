#!/usr/bin/env python3
"""
LEDGE_RUNNER Launcher
======================
Run this script to start the game.
"""

from ledge_runner.main import main

if __name__ == "__main__":
    main()
