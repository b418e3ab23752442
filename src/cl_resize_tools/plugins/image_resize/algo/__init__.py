"""Resize geometry decisions and the resize pipeline."""

from .crop_planner import optimal_crop_size, plan_crop
from .dimension_clamp import clamp_dimensions
from .geometry import resolve_dimensions, select_resize_mode
from .orientation import affine_for
from .resizer import Resizer, resize
from .sizing import is_fill_deficient, size_by_fixed_height, size_by_fixed_width

__all__ = [
    "Resizer",
    "affine_for",
    "clamp_dimensions",
    "is_fill_deficient",
    "optimal_crop_size",
    "plan_crop",
    "resize",
    "resolve_dimensions",
    "select_resize_mode",
    "size_by_fixed_height",
    "size_by_fixed_width",
]
