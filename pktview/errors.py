"""
Decode error hierarchy.

Every failure raised while decoding a frame derives from DecodeError, so a
consumer can catch one type and still distinguish malformed input
(TooShort, StructuralViolation) from valid but unsupported input
(Unimplemented).
"""

from __future__ import annotations


class DecodeError(ValueError):
    """Base class for all decoding failures."""


class TooShort(DecodeError):
    """Buffer is shorter than the fixed header of the layer being decoded."""

    def __init__(self, layer: str, expected: int, actual: int):
        super().__init__(
            f"{layer} data too small, expected at least {expected}, got {actual}"
        )
        self.layer = layer
        self.expected = expected
        self.actual = actual


class StructuralViolation(DecodeError):
    """A validated header field holds an impossible value."""


class VersionMismatch(StructuralViolation):
    pass


class HeaderLengthOutOfRange(StructuralViolation):
    pass


class ReservedBitSet(StructuralViolation):
    pass


class HeaderTooLarge(StructuralViolation):
    pass


class Unimplemented(DecodeError, NotImplementedError):
    """Structurally valid input that this decoder does not support."""


class InvalidRange(DecodeError):
    """Bit range that cannot be extracted with a single integer read."""
