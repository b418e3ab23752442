"""Image resize task implementation."""

from io import BytesIO
from pathlib import Path
from typing import Callable
from typing_extensions import override

from PIL import Image

from ...common.compute_module import ComputeModule
from ...common.schemas import ResizerConfig
from ...utils.pillow_codec import PillowCodec
from ...utils.png_optimizer import PillowPngOptimizer
from .algo.resizer import Resizer
from .schema import ImageResizeOutput, ImageResizeParams


class ImageResizeTask(ComputeModule[ImageResizeParams, ImageResizeOutput]):
    """Compute module for resizing a single image."""

    schema: type[ImageResizeParams] = ImageResizeParams

    def __init__(self, resizer: Resizer | None = None, config: ResizerConfig | None = None):
        self.resizer: Resizer = resizer or Resizer(PillowCodec(), PillowPngOptimizer(), config)

    @property
    @override
    def task_type(self) -> str:
        return "image_resize"

    @override
    async def run(
        self,
        params: ImageResizeParams,
        progress_callback: Callable[[int], None] | None = None,
    ) -> ImageResizeOutput:
        input_path = Path(params.input_path)
        output_path = Path(params.output_path)

        if not input_path.exists():
            raise FileNotFoundError("Input file not found: " + str(input_path))

        # Ensure parent directory exists (caller's responsibility to create)
        if not output_path.parent.exists():
            raise FileNotFoundError(f"Output directory does not exist: {output_path.parent}")

        options = params.to_options()
        output = self.resizer.resize(input_path.read_bytes(), options)
        _ = output_path.write_bytes(output)

        with Image.open(BytesIO(output)) as img:
            width, height = img.size

        if progress_callback:
            progress_callback(100)

        return ImageResizeOutput(
            width=width,
            height=height,
            format=options.type,
            size_bytes=len(output),
        )
