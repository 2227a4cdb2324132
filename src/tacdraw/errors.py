"""
Error taxonomy for tacdraw.

Kernel and generator failures propagate unchanged to the caller of
synthesize(). A registry miss is not an error and is reported as None.
"""


class SymbologyError(Exception):
    """Base class for all symbol synthesis failures."""


class DegenerateGeometry(SymbologyError):
    """Zero-length or zero-area input where a real shape is required."""


class InvalidParameter(SymbologyError, ValueError):
    """Non-positive width/resolution, bad subdivision count, empty argument list."""


class ConflictingDefinition(SymbologyError):
    """Two generators claim the same symbol identifier."""
