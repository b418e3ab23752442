"""Exceptions raised by the resize pipeline."""

from typing_extensions import override


class ResizeError(Exception):
    """Base class for resize failures. Always fatal for the request."""


class DecodeError(ResizeError):
    """Input bytes are malformed or in an unsupported format."""


class FormatMismatchError(ResizeError):
    def __init__(self, source_format: str, requested_format: str):
        self.source_format: str = source_format
        self.requested_format: str = requested_format
        super().__init__(
            f"image format: {source_format} mismatch with request: [{requested_format}]"
        )


class TransformError(ResizeError):
    """A scale, crop, affine or blur operation failed."""

    def __init__(self, operation: str, message: str):
        self.operation: str = operation
        self.message: str = message
        super().__init__(f"{operation} failed: {message}")

    @override
    def __str__(self):
        return f"TransformError({self.operation}): {self.message}"


class EncodeError(ResizeError):
    """The transformed image could not be encoded or optimized."""


class MetadataStripWarning(UserWarning):
    """Metadata could not be removed; the output still carries it."""
