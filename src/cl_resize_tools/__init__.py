"""cl_resize_tools - Codec-independent image resize geometry and pipeline."""

from .common.compute_module import ComputeModule
from .common.errors import (
    DecodeError,
    EncodeError,
    FormatMismatchError,
    MetadataStripWarning,
    ResizeError,
    TransformError,
)
from .common.image_codec import ImageCodec, ImageStructure, PngOptimizer
from .common.schemas import (
    AffineMatrix,
    EncodeOptions,
    GaussianBlur,
    ImageDimensions,
    OutputFormat,
    Rect,
    ResizeFilter,
    ResizeMode,
    ResizeOptions,
    ResizerConfig,
)
from .plugins.image_resize import ImageResizeOutput, ImageResizeParams, ImageResizeTask
from .plugins.image_resize.algo import Resizer, resize

__version__ = "0.1.0"

__all__ = [
    "AffineMatrix",
    "ComputeModule",
    "DecodeError",
    "EncodeError",
    "EncodeOptions",
    "FormatMismatchError",
    "GaussianBlur",
    "ImageCodec",
    "ImageDimensions",
    "ImageResizeOutput",
    "ImageResizeParams",
    "ImageResizeTask",
    "ImageStructure",
    "MetadataStripWarning",
    "OutputFormat",
    "PngOptimizer",
    "Rect",
    "ResizeError",
    "ResizeFilter",
    "ResizeMode",
    "ResizeOptions",
    "Resizer",
    "ResizerConfig",
    "TransformError",
    "__version__",
    "resize",
]
