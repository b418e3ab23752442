"""Shared test helpers: Pillow image encoders and a recording fake codec."""

from __future__ import annotations

from io import BytesIO

from PIL import ExifTags, Image

from cl_resize_tools.common.errors import TransformError
from cl_resize_tools.common.schemas import (
    AffineMatrix,
    EncodeOptions,
    OutputFormat,
    Rect,
    ResizeFilter,
)


def encode_image(
    width: int,
    height: int,
    fmt: str = "JPEG",
    color: tuple[int, ...] = (200, 120, 40),
    mode: str = "RGB",
    orientation: int | None = None,
    exif_tags: dict[int, object] | None = None,
) -> bytes:
    """Encode a solid-color image, optionally carrying EXIF tags."""
    img = Image.new(mode, (width, height), color)

    exif = Image.Exif()
    if orientation is not None:
        exif[ExifTags.Base.Orientation] = orientation
    for tag, value in (exif_tags or {}).items():
        exif[tag] = value

    out = BytesIO()
    save_kwargs: dict[str, object] = {}
    if len(exif) > 0:
        save_kwargs["exif"] = exif
    img.save(out, format=fmt, **save_kwargs)
    return out.getvalue()


def encode_split_image(width: int, height: int, orientation: int | None = None) -> bytes:
    """PNG whose left half is red and right half is blue."""
    img = Image.new("RGB", (width, height), (0, 0, 255))
    img.paste((255, 0, 0), (0, 0, width // 2, height))

    out = BytesIO()
    if orientation is not None:
        exif = Image.Exif()
        exif[ExifTags.Base.Orientation] = orientation
        img.save(out, format="PNG", exif=exif)
    else:
        img.save(out, format="PNG")
    return out.getvalue()


def encode_transparent_palette_png(width: int, height: int) -> bytes:
    """Palette PNG filled with index 0, which is marked fully transparent."""
    img = Image.new("P", (width, height), 0)

    out = BytesIO()
    img.save(out, format="PNG", transparency=0)
    return out.getvalue()


def encode_mode_image(mode: str, width: int, height: int, fmt: str) -> bytes:
    """Encode a blank image in a specific Pillow mode (I;16, CMYK, ...)."""
    img = Image.new(mode, (width, height))

    out = BytesIO()
    img.save(out, format=fmt)
    return out.getvalue()


# ============================================================================
# Recording fake codec
# ============================================================================


class FakeImage:
    """In-memory stand-in for a decoded image that records every call."""

    def __init__(
        self,
        codec: FakeCodec,
        width: int,
        height: int,
        fmt: str,
        properties: dict[str, str],
    ):
        self.codec: FakeCodec = codec
        self.width: int = width
        self.height: int = height
        self.format: str = fmt
        self.properties: dict[str, str] = properties
        self.disposed: bool = False
        codec.images.append(self)

    def _derive(self, width: int, height: int) -> FakeImage:
        return FakeImage(self.codec, width, height, self.format, dict(self.properties))

    def _check(self, operation: str) -> None:
        if self.disposed:
            raise AssertionError(f"{operation} called on disposed image")
        if operation in self.codec.fail_on:
            raise TransformError(operation, "simulated failure")

    def resize(self, filter: ResizeFilter, width: int, height: int) -> FakeImage:
        self._check("resize")
        self.codec.calls.append(("resize", filter, width, height))
        return self._derive(width, height)

    def crop(self, rect: Rect) -> FakeImage:
        self._check("crop")
        self.codec.calls.append(("crop", rect))
        return self._derive(rect.width, rect.height)

    def affine_transform(self, matrix: AffineMatrix) -> FakeImage:
        self._check("affine")
        self.codec.calls.append(("affine", matrix))
        if matrix.scale_x == 0:
            return self._derive(self.height, self.width)
        return self._derive(self.width, self.height)

    def gaussian_blur(self, radius: float, sigma: float) -> FakeImage:
        self._check("gaussian_blur")
        self.codec.calls.append(("gaussian_blur", radius, sigma))
        return self._derive(self.width, self.height)

    def remove_property(self, name: str) -> None:
        self.codec.calls.append(("remove_property", name))
        _ = self.properties.pop(name, None)

    def strip_metadata(self) -> bool:
        self.codec.calls.append(("strip_metadata",))
        if self.codec.strip_ok:
            self.properties.clear()
        return self.codec.strip_ok

    def encode(self, output_format: OutputFormat, options: EncodeOptions) -> bytes:
        self._check("encode")
        self.codec.calls.append(("encode", output_format, options))
        return f"{output_format.value}:{self.width}x{self.height}".encode()

    def dispose(self) -> None:
        self.disposed = True

    def property(self, name: str) -> str | None:
        return self.properties.get(name)


class FakeCodec:
    def __init__(
        self,
        width: int,
        height: int,
        fmt: str = "JPEG",
        properties: dict[str, str] | None = None,
        strip_ok: bool = True,
        fail_on: tuple[str, ...] = (),
    ):
        self.width: int = width
        self.height: int = height
        self.format: str = fmt
        self.properties: dict[str, str] = properties or {}
        self.strip_ok: bool = strip_ok
        self.fail_on: tuple[str, ...] = fail_on
        self.calls: list[tuple[object, ...]] = []
        self.images: list[FakeImage] = []

    def decode(self, buf: bytes) -> FakeImage:
        self.calls.append(("decode", len(buf)))
        return FakeImage(self, self.width, self.height, self.format, dict(self.properties))

    def operations(self) -> list[object]:
        return [call[0] for call in self.calls]


class FakePngOptimizer:
    def __init__(self) -> None:
        self.calls: list[tuple[bytes, int]] = []

    def optimize(self, buf: bytes, level: int) -> bytes:
        self.calls.append((buf, level))
        return b"optimized:" + buf
