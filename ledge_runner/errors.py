"""
Error Types
============
Construction-time validation failures. The simulation itself raises
nothing once a level has been built.
"""


class LedgeRunnerError(Exception):
    """Base class for all package errors."""


class GeometryError(LedgeRunnerError, ValueError):
    """A rectangle was built with a negative width or height."""


class LevelError(LedgeRunnerError, ValueError):
    """A level is missing terrain or has a malformed finish zone."""
