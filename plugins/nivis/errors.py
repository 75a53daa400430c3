"""
Exception types for the nivis viewer.

Engine failures pause the loop, buffer mismatches skip a single frame,
and missing surfaces or bindings abort startup.
"""


class NivisError(Exception):
    """Base class for all viewer errors."""


class EngineCallFailure(NivisError):
    """The simulation engine raised while being stepped, reset or seeded."""

    def __init__(self, operation, cause=None):
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"engine call {operation}() failed{detail}")


class InvalidBufferLength(NivisError, ValueError):
    """Pixel buffer byte count does not match width * height * 4."""

    def __init__(self, actual, width, height):
        self.actual = actual
        self.expected = width * height * 4
        super().__init__(
            f"pixel buffer has {actual} bytes, expected {self.expected} "
            f"for {width}x{height} RGBA"
        )


class MissingSurface(NivisError):
    """No display surface was supplied to the compositor."""


class MissingBoundElement(NivisError):
    """A panel binding refers to a parameter the store does not have."""


class UnknownField(NivisError, LookupError):
    """Field selector was given a tag outside the known field kinds."""
