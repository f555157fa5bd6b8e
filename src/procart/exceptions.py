"""
Exceptions raised by procart.

Every failure aborts the render; nothing is retried.
"""


class Error(Exception):
    """Base class of procart errors."""


class InvalidDimensions(Error, ValueError):
    """Surface width or height is not positive."""


class InvalidConfig(Error, ValueError):
    """A generation parameter is out of range or unrecognized."""


class SurfaceUnavailable(Error, RuntimeError):
    """The drawing surface cannot be acquired."""
