"""
Exceptions raised by colorkde.
"""


class DimensionMismatch(ValueError):
    """Raised when channel buffers and masks do not share the same shape."""

    def __init__(self, expected, got, what="Channel and mask"):
        self.expected = tuple(expected)
        self.got = tuple(got)
        super().__init__(f"{what} must have same shape, got {self.expected} vs {self.got}")


class InvalidChannel(ValueError):
    """Raised when a channel buffer is not made of 8-bit intensity values."""
