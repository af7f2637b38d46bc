"""
色彩分割模組

載入圖片並依選取的葉片顏色判定前景像素
"""

from .classifier import ColorTolerance, LeafColorClassifier, parse_color, rgb_to_hsb
from .image_loader import DEFAULT_PROCESS_SIZE, load_image, rescale_image

__all__ = [
    "ColorTolerance",
    "DEFAULT_PROCESS_SIZE",
    "LeafColorClassifier",
    "load_image",
    "parse_color",
    "rescale_image",
    "rgb_to_hsb",
]
