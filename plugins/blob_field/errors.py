"""
Blob Field Errors

Structural problems (bad seed, bad grid size, negative stamp count) are
raised as ValueError subclasses so callers can catch either the specific
condition or plain ValueError.
"""


class BlobFieldError(ValueError):
    """Base class for all blob field errors."""


class InvalidSeed(BlobFieldError):
    """Seed component is not an integer in [1, 30000]."""


class InvalidDimensions(BlobFieldError):
    """Grid width or height is not a positive integer."""


class InvalidStampCount(BlobFieldError):
    """Negative number of stamps requested for a step."""


class EmptyGrid(BlobFieldError):
    """Reduction requested over a grid with no cells."""
