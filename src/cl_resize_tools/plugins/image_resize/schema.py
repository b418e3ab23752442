"""Image resize parameters and output schemas."""

from pydantic import Field

from ...common.schema_job import BaseJobParams, TaskOutput
from ...common.schemas import GaussianBlur, OutputFormat, ResizeOptions


class ImageResizeParams(BaseJobParams):
    """Parameters for image resize task.

    Attributes:
        input_path: Absolute path to the input image
        output_path: Absolute path for the resized image
        width: Target width in pixels (0 = follow aspect ratio)
        height: Target height in pixels (0 = follow aspect ratio)
        crop: Crop to exactly width x height after scaling
        enlarge: Allow upscaling images smaller than the request
        force: Ignore aspect ratio and resize to exactly width x height
        format: Output format
        quality: Encoder quality (0 = default)
        blur_sigma: Gaussian blur standard deviation (0 = no blur)
        blur_radius: Gaussian blur kernel radius
    """

    width: int = Field(default=0, ge=0, description="Target width in pixels")
    height: int = Field(default=0, ge=0, description="Target height in pixels")
    crop: bool = False
    enlarge: bool = False
    force: bool = False
    format: OutputFormat = Field(default=OutputFormat.JPEG, description="Output format")
    quality: int = Field(default=75, ge=0, le=100, description="Encoder quality")
    blur_sigma: float = Field(default=0.0, ge=0)
    blur_radius: float = Field(default=0.0, ge=0)

    def to_options(self) -> ResizeOptions:
        return ResizeOptions(
            width=self.width,
            height=self.height,
            crop=self.crop,
            enlarge=self.enlarge,
            force=self.force,
            type=self.format,
            quality=self.quality,
            blur=GaussianBlur(radius=self.blur_radius, sigma=self.blur_sigma),
        )


class ImageResizeOutput(TaskOutput):
    width: int = Field(description="Width of the written image")
    height: int = Field(description="Height of the written image")
    format: OutputFormat = Field(description="Format of the written image")
    size_bytes: int = Field(ge=0, description="Size of the written file")
