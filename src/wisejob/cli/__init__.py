"""wisejob CLI module.

Builds a job from the setup file and command line export flags.

Usage:
    wisejob -BG fire1 2001-10-16T13:00:00-05:00

Or directly:
    python -m wisejob.cli.app
"""

from wisejob.cli.app import build_parser, main

__all__ = ["build_parser", "main"]
