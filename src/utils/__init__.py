"""
工具模組

提供並查集與像素幾何等基礎結構
"""

from .geometry import BoundingBox, PixelPoint, index_to_point, pixel_index
from .union_find import DisjointSet, OutOfRangeError

__all__ = [
    "BoundingBox",
    "DisjointSet",
    "OutOfRangeError",
    "PixelPoint",
    "index_to_point",
    "pixel_index",
]
