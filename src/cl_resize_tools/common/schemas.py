"""Pydantic value objects describing a resize request and its geometry."""

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

# ─────────────────────────────────────────────────────────────
# Enumerations
# ─────────────────────────────────────────────────────────────


class OutputFormat(StrEnum):
    """Encoded output formats a resize request may ask for."""

    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    WEBP = "webp"
    TIFF = "tiff"

    @property
    def pil_format(self) -> str:
        """Format name understood by Pillow's ``Image.save``."""
        return self.value.upper()

    @classmethod
    def from_format_name(cls, name: str) -> "OutputFormat | None":
        """Map a decoder format string ("JPEG", "JPG", "WEBP", ...) to the enum."""
        normalized = name.strip().lower()
        aliases = {"jpg": "jpeg", "tif": "tiff"}
        normalized = aliases.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            return None


class ResizeMode(StrEnum):
    """Which source/target axis drives scaling."""

    EXACT = "exact"
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"
    AUTO = "auto"
    CROP = "crop"


class ResizeFilter(StrEnum):
    """Resampling filter handed to the codec's resize operation."""

    NEAREST = "nearest"
    BILINEAR = "bilinear"
    BICUBIC = "bicubic"
    LANCZOS = "lanczos"


# ─────────────────────────────────────────────────────────────
# Request options
# ─────────────────────────────────────────────────────────────


class GaussianBlur(BaseModel):
    """Gaussian blur parameters.

    Attributes:
        radius: Kernel radius in pixels (0 lets the codec pick one)
        sigma: Standard deviation of the Gaussian
    """

    radius: float = Field(default=0.0, ge=0, description="Blur kernel radius")
    sigma: float = Field(default=0.0, ge=0, description="Blur standard deviation")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @property
    def enabled(self) -> bool:
        return self.sigma > 0 or self.radius > 0


class ResizeOptions(BaseModel):
    """Declarative description of a single resize request.

    A width or height of 0 leaves that axis unconstrained. At least one
    of them must be set, and cropping needs both.
    """

    width: int = Field(default=0, ge=0, description="Target width in pixels")
    height: int = Field(default=0, ge=0, description="Target height in pixels")
    crop: bool = Field(default=False, description="Crop to the exact requested box")
    enlarge: bool = Field(default=False, description="Allow upscaling small sources")
    force: bool = Field(
        default=False,
        description="Resize to the exact requested box, ignoring aspect ratio",
    )
    type: OutputFormat = Field(default=OutputFormat.JPEG, description="Output format")
    quality: int = Field(
        default=75,
        ge=0,
        le=100,
        description="Encoder quality (0 selects the configured default)",
    )
    blur: GaussianBlur = Field(default_factory=GaussianBlur)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def validate_resolvable(self) -> "ResizeOptions":
        if self.width == 0 and self.height == 0:
            raise ValueError("At least one of width or height must be greater than 0")
        if self.crop and (self.width == 0 or self.height == 0):
            raise ValueError("Cropping requires both width and height")
        if self.force and (self.width == 0 or self.height == 0):
            raise ValueError("Forced resize requires both width and height")
        return self


# ─────────────────────────────────────────────────────────────
# Geometry values
# ─────────────────────────────────────────────────────────────


class ImageDimensions(BaseModel):
    """Width and height of an image, both strictly positive."""

    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @property
    def is_square(self) -> bool:
        return self.width == self.height

    @property
    def is_landscape(self) -> bool:
        return self.height < self.width

    @property
    def is_portrait(self) -> bool:
        return self.height > self.width


class Rect(BaseModel):
    """Crop region in pixel coordinates of the image it is applied to."""

    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    def fits_within(self, dims: ImageDimensions) -> bool:
        return self.x + self.width <= dims.width and self.y + self.height <= dims.height


class AffineMatrix(BaseModel):
    """2x2 affine coefficients.

    A point (x, y) maps to (scale_x * x + shear_y * y, shear_x * x + scale_y * y);
    the codec is responsible for translating the result back into view.
    """

    scale_x: float = 1.0
    scale_y: float = 1.0
    shear_x: float = 0.0
    shear_y: float = 0.0

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def identity(cls) -> "AffineMatrix":
        return cls()

    @property
    def is_identity(self) -> bool:
        return self == AffineMatrix.identity()


class EncodeOptions(BaseModel):
    """Encoder settings; unset fields leave the codec's defaults in place."""

    quality: int = Field(default=75, ge=0, le=100)
    lossless: bool | None = None
    image_hint: str | None = None
    thread_level: int | None = Field(default=None, ge=0)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")


class ResizerConfig(BaseModel):
    """Process-wide settings of the resize pipeline."""

    resize_filter: ResizeFilter = Field(
        default=ResizeFilter.LANCZOS,
        description="Resampling filter used when scaling",
    )
    png_optimize_level: int = Field(
        default=8,
        ge=0,
        le=9,
        description="Compression effort for the PNG post-processing pass",
    )
    default_quality: int = Field(
        default=75,
        ge=1,
        le=100,
        description="Quality used when a request asks for quality 0",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")
