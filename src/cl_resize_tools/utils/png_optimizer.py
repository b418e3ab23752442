"""Lossless PNG recompression."""

from io import BytesIO
from typing_extensions import override

from loguru import logger
from PIL import Image, UnidentifiedImageError

from ..common.errors import EncodeError
from ..common.image_codec import PngOptimizer


class PillowPngOptimizer(PngOptimizer):
    """Re-save PNG bytes with zlib effort ``level`` and keep the smaller result."""

    @override
    def optimize(self, buf: bytes, level: int) -> bytes:
        if not 0 <= level <= 9:
            raise ValueError(f"PNG compression level must be 0-9, got {level}")

        try:
            with Image.open(BytesIO(buf)) as img:
                if img.format != "PNG":
                    raise EncodeError(f"Expected PNG data, got {img.format}")

                out = BytesIO()
                img.save(out, format="PNG", compress_level=level)
        except (UnidentifiedImageError, OSError) as exc:
            raise EncodeError(f"PNG optimization failed: {exc}") from exc

        optimized = out.getvalue()
        if len(optimized) >= len(buf):
            return buf

        logger.debug(f"PNG optimized {len(buf)} -> {len(optimized)} bytes")
        return optimized
