"""Common module - protocols, schemas, errors and base classes."""

from .compute_module import ComputeModule
from .image_codec import ImageCodec, ImageStructure, PngOptimizer
from .schema_job import BaseJobParams, TaskOutput, TaskResult

__all__ = [
    "BaseJobParams",
    "ComputeModule",
    "ImageCodec",
    "ImageStructure",
    "PngOptimizer",
    "TaskOutput",
    "TaskResult",
]
