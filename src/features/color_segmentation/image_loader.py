"""
圖片載入模組
"""

import logging
from pathlib import Path
from typing import Final

from PIL import Image

from src.features.leaf_detection.errors import LeafDetectionError


logger = logging.getLogger(__name__)

DEFAULT_PROCESS_SIZE: Final[int] = 512


def load_image(
    path: Path | str,
    *,
    rescale: bool = True,
    process_size: int = DEFAULT_PROCESS_SIZE,
) -> Image.Image:
    """
    載入圖片並轉為 RGB

    縮放時維持長寬比，使較長邊等於 process_size (越小越快)

    Args:
        path: 圖片路徑
        rescale: 是否縮放
        process_size: 處理尺寸

    Returns:
        RGB 圖片

    Raises:
        LeafDetectionError: 無法開啟圖片
    """
    try:
        with Image.open(path) as img:
            image = img.convert("RGB")
    except (OSError, ValueError) as e:
        raise LeafDetectionError(f"無法開啟圖片: {path}") from e

    if rescale:
        image = rescale_image(image, process_size)

    logger.info("Loaded image: %dx%d", image.width, image.height)
    return image


def rescale_image(image: Image.Image, process_size: int) -> Image.Image:
    """
    依比例縮放圖片

    Args:
        image: 原始圖片
        process_size: 較長邊的目標像素數

    Returns:
        縮放後的圖片 (尺寸相同時回傳原圖)
    """
    scale = min(process_size / image.width, process_size / image.height)
    width = max(1, int(image.width * scale))
    height = max(1, int(image.height * scale))
    if (width, height) == image.size:
        return image
    return image.resize((width, height), Image.Resampling.LANCZOS)
