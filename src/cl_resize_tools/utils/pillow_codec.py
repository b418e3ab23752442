"""Pillow implementation of the image codec protocol."""

from __future__ import annotations

from io import BytesIO
from typing import Final
from typing_extensions import override

from loguru import logger
from PIL import ExifTags, Image, ImageFilter, UnidentifiedImageError

from ..common.errors import DecodeError, EncodeError, TransformError
from ..common.image_codec import ImageCodec, ImageStructure
from ..common.schemas import AffineMatrix, EncodeOptions, OutputFormat, Rect, ResizeFilter

_RESAMPLING: Final[dict[ResizeFilter, Image.Resampling]] = {
    ResizeFilter.NEAREST: Image.Resampling.NEAREST,
    ResizeFilter.BILINEAR: Image.Resampling.BILINEAR,
    ResizeFilter.BICUBIC: Image.Resampling.BICUBIC,
    ResizeFilter.LANCZOS: Image.Resampling.LANCZOS,
}

# (scale_x, scale_y, shear_x, shear_y) -> lossless Pillow equivalent
_TRANSPOSE: Final[dict[tuple[float, float, float, float], Image.Transpose]] = {
    (-1, 1, 0, 0): Image.Transpose.FLIP_LEFT_RIGHT,
    (-1, -1, 0, 0): Image.Transpose.ROTATE_180,
    (1, -1, 0, 0): Image.Transpose.FLIP_TOP_BOTTOM,
    (0, 0, 1, 1): Image.Transpose.TRANSPOSE,
    (0, 0, 1, -1): Image.Transpose.ROTATE_270,
    (0, 0, -1, -1): Image.Transpose.TRANSVERSE,
    (0, 0, -1, 1): Image.Transpose.ROTATE_90,
}

# Modes each encoder accepts as-is; anything else is converted before saving.
# GIF and TIFF encoders handle their own conversions.
_WRITABLE_MODES: Final[dict[OutputFormat, frozenset[str]]] = {
    OutputFormat.JPEG: frozenset({"L", "RGB", "CMYK"}),
    OutputFormat.PNG: frozenset({"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"}),
    OutputFormat.WEBP: frozenset({"RGB", "RGBA"}),
}
_ALPHA_MODES: Final[frozenset[str]] = frozenset({"RGBA", "RGBa", "LA", "La", "PA"})
_WIDE_GRAYSCALE_MODES: Final[frozenset[str]] = frozenset(
    {"I", "I;16", "I;16L", "I;16B", "I;16N", "F"}
)
_GRAYSCALE_MODES: Final[frozenset[str]] = _WIDE_GRAYSCALE_MODES | {"1", "L", "LA", "La"}

# Image.info entries that affect rendering and survive metadata stripping
_RENDERING_INFO_KEYS: Final[tuple[str, ...]] = ("transparency",)

_EXIF_WRITABLE: Final[tuple[OutputFormat, ...]] = (
    OutputFormat.JPEG,
    OutputFormat.PNG,
    OutputFormat.WEBP,
)


class PillowImage(ImageStructure):
    """
    Decoded image backed by a ``PIL.Image.Image``.

    The source format and EXIF block travel with every derived image,
    since Pillow drops both on most operations.
    """

    def __init__(self, image: Image.Image, source_format: str, exif: Image.Exif):
        self._image: Image.Image = image
        self._format: str = source_format
        self._exif: Image.Exif = exif
        self._stripped: bool = False

    @property
    @override
    def width(self) -> int:
        return self._image.width

    @property
    @override
    def height(self) -> int:
        return self._image.height

    @property
    @override
    def format(self) -> str:
        return self._format

    @property
    def pil_image(self) -> Image.Image:
        return self._image

    def _derive(self, image: Image.Image) -> PillowImage:
        derived = PillowImage(image, self._format, self._exif)
        derived._stripped = self._stripped
        return derived

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    @override
    def resize(self, filter: ResizeFilter, width: int, height: int) -> PillowImage:
        try:
            resized = self._image.resize((width, height), _RESAMPLING[filter])
        except (OSError, ValueError) as exc:
            raise TransformError("resize", str(exc)) from exc
        return self._derive(resized)

    @override
    def crop(self, rect: Rect) -> PillowImage:
        box = (rect.x, rect.y, rect.x + rect.width, rect.y + rect.height)
        try:
            cropped = self._image.crop(box)
        except (OSError, ValueError) as exc:
            raise TransformError("crop", str(exc)) from exc
        return self._derive(cropped)

    @override
    def affine_transform(self, matrix: AffineMatrix) -> PillowImage:
        if matrix.is_identity:
            return self

        key = (matrix.scale_x, matrix.scale_y, matrix.shear_x, matrix.shear_y)
        try:
            method = _TRANSPOSE.get(key)
            if method is not None:
                transformed = self._image.transpose(method)
            else:
                transformed = self._general_affine(matrix)
        except (OSError, ValueError) as exc:
            raise TransformError("affine", str(exc)) from exc
        return self._derive(transformed)

    def _general_affine(self, matrix: AffineMatrix) -> Image.Image:
        sx, sy = matrix.scale_x, matrix.scale_y
        rx, ry = matrix.shear_x, matrix.shear_y

        det = sx * sy - rx * ry
        if det == 0:
            raise TransformError("affine", f"singular matrix {matrix}")

        w, h = self._image.size
        corners = [(sx * x + ry * y, rx * x + sy * y) for x, y in ((0, 0), (w, 0), (0, h), (w, h))]
        min_x = min(c[0] for c in corners)
        min_y = min(c[1] for c in corners)
        out_w = max(1, round(max(c[0] for c in corners) - min_x))
        out_h = max(1, round(max(c[1] for c in corners) - min_y))

        # Pillow maps output coordinates back onto the input
        a, b = sy / det, -ry / det
        d, e = -rx / det, sx / det
        c = a * min_x + b * min_y
        f = d * min_x + e * min_y

        return self._image.transform(
            (out_w, out_h),
            Image.Transform.AFFINE,
            (a, b, c, d, e, f),
            resample=Image.Resampling.BICUBIC,
        )

    @override
    def gaussian_blur(self, radius: float, sigma: float) -> PillowImage:
        # Pillow's GaussianBlur radius is the standard deviation; the
        # kernel extent is derived from it.
        source = self._image
        try:
            source = _blurrable(self._image)
            blurred = source.filter(ImageFilter.GaussianBlur(radius=sigma))
        except (OSError, ValueError) as exc:
            raise TransformError("gaussian_blur", str(exc)) from exc
        finally:
            if source is not self._image:
                source.close()
        return self._derive(blurred)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @override
    def remove_property(self, name: str) -> None:
        tag = _exif_tag(name)
        if tag is not None and tag in self._exif:
            # Derived images share the EXIF block until one of them edits it
            self._exif = _copy_exif(self._exif)
            del self._exif[tag]

    @override
    def strip_metadata(self) -> bool:
        self._exif = Image.Exif()
        self._image.info = {
            key: self._image.info[key] for key in _RENDERING_INFO_KEYS if key in self._image.info
        }
        self._stripped = True
        return True

    # ------------------------------------------------------------------
    # Output / lifecycle
    # ------------------------------------------------------------------

    @override
    def encode(self, output_format: OutputFormat, options: EncodeOptions) -> bytes:
        image = self._image
        save_kwargs: dict[str, object] = {}

        if output_format in (OutputFormat.JPEG, OutputFormat.WEBP):
            save_kwargs["quality"] = options.quality

        if output_format == OutputFormat.WEBP and options.lossless is not None:
            save_kwargs["lossless"] = options.lossless

        if options.image_hint is not None or options.thread_level is not None:
            logger.debug(
                f"Pillow ignores image_hint={options.image_hint} thread_level={options.thread_level}"
            )

        if not self._stripped and len(self._exif) > 0 and output_format in _EXIF_WRITABLE:
            save_kwargs["exif"] = self._exif

        out = BytesIO()
        try:
            image = _writable(self._image, output_format)
            image.save(out, format=output_format.pil_format, **save_kwargs)
        except (OSError, ValueError, KeyError) as exc:
            raise EncodeError(f"Failed to encode {output_format.value}: {exc}") from exc
        finally:
            if image is not self._image:
                image.close()

        return out.getvalue()

    @override
    def dispose(self) -> None:
        self._image.close()

    @override
    def property(self, name: str) -> str | None:
        tag = _exif_tag(name)
        if tag is not None:
            value = self._exif.get(tag)
        else:
            value = self._image.info.get(name)
        return None if value is None else str(value)


def _exif_tag(name: str) -> int | None:
    """Resolve ``EXIF:<TagName>`` to its numeric tag id."""
    namespace, _, tag_name = name.partition(":")
    if namespace.upper() != "EXIF" or not tag_name:
        return None
    try:
        return int(ExifTags.Base[tag_name])
    except KeyError:
        return None


def _copy_exif(exif: Image.Exif) -> Image.Exif:
    copied = Image.Exif()
    if len(exif) > 0:
        copied.load(exif.tobytes())
    return copied


def _has_alpha(image: Image.Image) -> bool:
    return image.mode in _ALPHA_MODES or "transparency" in image.info


def _blurrable(image: Image.Image) -> Image.Image:
    """Convert bilevel and palette images, which GaussianBlur rejects."""
    if image.mode == "1":
        return image.convert("L")
    if image.mode in ("P", "PA"):
        return image.convert("RGBA" if _has_alpha(image) else "RGB")
    return image


def _writable(image: Image.Image, output_format: OutputFormat) -> Image.Image:
    """
    Return ``image`` in a mode the encoder for ``output_format`` can write.

    Alpha is kept when the format supports it, grayscale stays grayscale
    where possible, everything else becomes RGB.
    """
    writable = _WRITABLE_MODES.get(output_format)
    if writable is None or image.mode in writable:
        return image

    if _has_alpha(image) and "RGBA" in writable:
        target = "RGBA"
    elif image.mode in _GRAYSCALE_MODES and "L" in writable:
        target = "L"
    else:
        target = "RGB"

    if image.mode in _WIDE_GRAYSCALE_MODES and target != "L":
        # no direct conversion from wide grayscale to color modes
        grey = image.convert("L")
        try:
            return grey.convert(target)
        finally:
            grey.close()
    return image.convert(target)


class PillowCodec(ImageCodec):
    @override
    def decode(self, buf: bytes) -> PillowImage:
        try:
            image = Image.open(BytesIO(buf))
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
            raise DecodeError(f"Cannot decode image: {exc}") from exc

        return PillowImage(image, image.format or "", image.getexif())
