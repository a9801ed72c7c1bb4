"""
Errors raised by the Sazan core and its drivers.

All of them derive from SazanError, which is a ValueError so callers that
already treat bad input as ValueError keep working.
"""


class SazanError(ValueError):
    """Base class for all Sazan errors."""


class DecodeError(SazanError):
    """An input could not be interpreted as an image."""


class BoundsError(SazanError):
    """A crop or tile rectangle exceeds the dimensions of an image."""

    def __init__(self, rect, image_size):
        self.rect = rect
        self.image_size = image_size
        super().__init__(
            f"Crop rectangle {rect} is out of bounds for image of size "
            f"{image_size[0]}x{image_size[1]}"
        )


class EncodeError(SazanError):
    """An image could not be serialised."""


class SizeMismatchError(SazanError):
    """Images fed to grid composition do not share the same dimensions."""


class BufferLengthError(SazanError):
    """A raw RGBA buffer does not match its claimed dimensions."""
