"""Resize pipeline: decode, scale, blur, crop, orient, strip, encode."""

import warnings

from loguru import logger

from ....common.errors import FormatMismatchError, MetadataStripWarning
from ....common.image_codec import ORIENTATION_PROPERTY, ImageCodec, ImageStructure, PngOptimizer
from ....common.schemas import (
    EncodeOptions,
    ImageDimensions,
    OutputFormat,
    ResizeOptions,
    ResizerConfig,
)
from ....utils.pillow_codec import PillowCodec
from ....utils.png_optimizer import PillowPngOptimizer
from ....utils.profiling import timed
from .crop_planner import plan_crop
from .geometry import resolve_dimensions
from .orientation import affine_for


def _dimensions(image: ImageStructure) -> ImageDimensions:
    return ImageDimensions(width=image.width, height=image.height)


def _advance(current: ImageStructure, replacement: ImageStructure) -> ImageStructure:
    """Release ``current`` once a transform has produced a different image."""
    if replacement is not current:
        current.dispose()
    return replacement


class Resizer:
    """
    Runs a single resize request through the codec.

    - Geometry decisions are pure functions of the image size and options
    - Every image replaced by a transform is disposed right away
    - No partial output: any failure propagates as a ResizeError
    """

    def __init__(
        self,
        codec: ImageCodec,
        png_optimizer: PngOptimizer,
        config: ResizerConfig | None = None,
    ):
        self.codec: ImageCodec = codec
        self.png_optimizer: PngOptimizer = png_optimizer
        self.config: ResizerConfig = config or ResizerConfig()

    @timed
    def resize(self, buf: bytes, options: ResizeOptions) -> bytes:
        """
        Transform encoded image bytes according to ``options``.

        Args:
            buf: Encoded source image
            options: Resize request

        Returns:
            Encoded output image. GIF sources requested as GIF are
            returned unchanged.

        Raises:
            DecodeError: If the codec cannot read ``buf``
            FormatMismatchError: If a GIF source is requested in another format
            TransformError: If scaling, blurring, cropping or orienting fails
            EncodeError: If encoding or PNG optimization fails
        """
        image = self.codec.decode(buf)
        try:
            source_format = OutputFormat.from_format_name(image.format)
            if source_format == OutputFormat.WEBP:
                options = options.model_copy(update={"quality": 100})
            elif source_format == OutputFormat.GIF:
                if options.type != OutputFormat.GIF:
                    raise FormatMismatchError(image.format, options.type.value)
                logger.debug("GIF requested as GIF, returning source bytes")
                return buf

            image = _advance(image, self._scale(image, options))
            image = _advance(image, self._blur(image, options))

            if options.crop:
                rect = plan_crop(_dimensions(image), options)
                image = _advance(image, image.crop(rect))

            image = _advance(image, self._orient(image))

            if not image.strip_metadata():
                logger.warning("Removing image metadata failed, output keeps it")
                warnings.warn(
                    "image metadata could not be removed",
                    MetadataStripWarning,
                    stacklevel=2,
                )

            output = image.encode(options.type, self._encode_options(options))
        finally:
            image.dispose()

        if options.type == OutputFormat.PNG:
            output = self.png_optimizer.optimize(output, self.config.png_optimize_level)

        return output

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def _scale(self, image: ImageStructure, options: ResizeOptions) -> ImageStructure:
        current = _dimensions(image)
        target = resolve_dimensions(current, options)
        if target == current:
            return image
        return image.resize(self.config.resize_filter, target.width, target.height)

    def _blur(self, image: ImageStructure, options: ResizeOptions) -> ImageStructure:
        if not options.blur.enabled:
            return image
        sigma = options.blur.sigma or 1.0
        return image.gaussian_blur(options.blur.radius, sigma)

    def _orient(self, image: ImageStructure) -> ImageStructure:
        orientation = image.property(ORIENTATION_PROPERTY)
        matrix = affine_for(orientation)
        logger.debug(f"Orientation {orientation!r} -> {matrix}")

        oriented = image.affine_transform(matrix)
        oriented.remove_property(ORIENTATION_PROPERTY)
        return oriented

    def _encode_options(self, options: ResizeOptions) -> EncodeOptions:
        quality = options.quality or self.config.default_quality
        if options.type == OutputFormat.WEBP:
            return EncodeOptions(
                quality=quality,
                lossless=False,
                image_hint="photo",
                thread_level=1,
            )
        return EncodeOptions(quality=quality)


def resize(buf: bytes, options: ResizeOptions, config: ResizerConfig | None = None) -> bytes:
    """Resize ``buf`` with the Pillow backend."""
    return Resizer(PillowCodec(), PillowPngOptimizer(), config).resize(buf, options)
