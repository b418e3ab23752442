"""
Codec protocols - the interface the resize pipeline needs from an image library.

Design goals:
- Keep the geometry decisions independent of any imaging backend
- Every transform returns an image; returning ``self`` means "unchanged"
- The caller owns disposal of every image it receives
"""

from __future__ import annotations

from typing import Final, Protocol, runtime_checkable

from .schemas import AffineMatrix, EncodeOptions, OutputFormat, Rect, ResizeFilter

ORIENTATION_PROPERTY: Final[str] = "EXIF:Orientation"


@runtime_checkable
class ImageStructure(Protocol):
    """A decoded image owned by a single resize request."""

    # ---------------------------------------------------------------------
    # Inspection
    # ---------------------------------------------------------------------

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    @property
    def format(self) -> str:
        """Decoder format name of the source bytes, e.g. "JPEG"."""
        ...

    def property(self, name: str) -> str | None:
        """Look up a metadata property such as ``EXIF:Orientation``."""
        ...

    # ---------------------------------------------------------------------
    # Transforms
    # ---------------------------------------------------------------------

    def resize(self, filter: ResizeFilter, width: int, height: int) -> ImageStructure: ...

    def crop(self, rect: Rect) -> ImageStructure: ...

    def affine_transform(self, matrix: AffineMatrix) -> ImageStructure: ...

    def gaussian_blur(self, radius: float, sigma: float) -> ImageStructure: ...

    # ---------------------------------------------------------------------
    # Metadata / output / lifecycle
    # ---------------------------------------------------------------------

    def remove_property(self, name: str) -> None: ...

    def strip_metadata(self) -> bool:
        """
        Remove all metadata.

        Returns:
            True if the metadata was removed, False otherwise.
        """
        ...

    def encode(self, output_format: OutputFormat, options: EncodeOptions) -> bytes: ...

    def dispose(self) -> None: ...


@runtime_checkable
class ImageCodec(Protocol):
    def decode(self, buf: bytes) -> ImageStructure:
        """Decode raw bytes. Raises DecodeError on malformed input."""
        ...


@runtime_checkable
class PngOptimizer(Protocol):
    def optimize(self, buf: bytes, level: int) -> bytes:
        """Recompress encoded PNG bytes at the given effort level."""
        ...
