"""EXIF orientation tag to affine correction matrix."""

from typing import Final

from ....common.schemas import AffineMatrix

# references
# https://github.com/recurser/exif-orientation-examples
# http://magnushoff.com/jpeg-orientation.html
# http://www.imagemagick.org/Usage/distorts/affine/
ORIENTATION_MATRICES: Final[dict[str, AffineMatrix]] = {
    "1": AffineMatrix(scale_x=1, scale_y=1),
    "2": AffineMatrix(scale_x=-1, scale_y=1),
    "3": AffineMatrix(scale_x=-1, scale_y=-1),
    "4": AffineMatrix(scale_x=1, scale_y=-1),
    "5": AffineMatrix(scale_x=0, scale_y=0, shear_x=1, shear_y=1),
    "6": AffineMatrix(scale_x=0, scale_y=0, shear_x=1, shear_y=-1),
    "7": AffineMatrix(scale_x=0, scale_y=0, shear_x=-1, shear_y=-1),
    "8": AffineMatrix(scale_x=0, scale_y=0, shear_x=-1, shear_y=1),
}


def affine_for(tag: str | None) -> AffineMatrix:
    """Matrix that undoes ``tag``. Missing or unknown tags map to identity."""
    if tag is None:
        return AffineMatrix.identity()
    return ORIENTATION_MATRICES.get(tag, AffineMatrix.identity())
