"""
葉片色彩分類模組

以 HSB 色彩空間比對使用者選取的葉片顏色，產生前景遮罩
"""

import logging
from collections.abc import Sequence
from typing import Final

import cv2
import numpy as np
from PIL import Image, ImageColor
from pydantic import BaseModel, ConfigDict, field_validator

from src.features.leaf_detection.errors import PreconditionViolationError


logger = logging.getLogger(__name__)

# 常數定義
PIXEL_MAX_VALUE: Final[int] = 255
GRAYSCALE_SATURATION: Final[float] = 0.1
HUE_CIRCLE: Final[float] = 360.0

RGB = tuple[int, int, int]


class ColorTolerance(BaseModel):
    """
    色彩比對容差

    超出範圍的值會被修正至有效範圍

    Attributes:
        hue: 色相容差（度，0-180）
        saturation: 飽和度容差 (0.0-1.0)
        brightness: 明度容差 (0.0-1.0)
    """

    model_config = ConfigDict(frozen=True)

    hue: float = 30.0
    saturation: float = 0.3
    brightness: float = 0.3

    @field_validator("hue")
    @classmethod
    def _clamp_hue(cls, value: float) -> float:
        return max(0.0, min(180.0, value))

    @field_validator("saturation", "brightness")
    @classmethod
    def _clamp_unit(cls, value: float) -> float:
        return max(0.0, min(1.0, value))


def parse_color(value: str) -> RGB:
    """
    解析顏色字串

    支援 "#ff8800"、"255,136,0" 以及顏色名稱 (如 "orange")

    Args:
        value: 顏色字串

    Returns:
        RGB 元組

    Raises:
        ValueError: 無法解析的顏色
    """
    text = value.strip()
    if "," in text:
        parts = [int(p) for p in text.split(",")]
        if len(parts) != 3 or not all(0 <= p <= PIXEL_MAX_VALUE for p in parts):
            raise ValueError(f"無效的 RGB 顏色: {value}")
        return (parts[0], parts[1], parts[2])

    rgb = ImageColor.getrgb(text)
    return (rgb[0], rgb[1], rgb[2])


def rgb_to_hsb(rgb: np.ndarray) -> np.ndarray:
    """
    RGB (uint8) 轉 HSB

    Args:
        rgb: 形狀 (..., 3) 的 uint8 陣列

    Returns:
        同形狀的 float32 陣列：色相 (度)、飽和度與明度 (0-1)
    """
    arr = np.asarray(rgb, dtype=np.float32) / PIXEL_MAX_VALUE
    flat = arr.reshape(-1, 1, 3)
    hsv = cv2.cvtColor(flat, cv2.COLOR_RGB2HSV)
    return hsv.reshape(arr.shape)


class LeafColorClassifier:
    """
    葉片色彩分類器

    像素與任一選取顏色在容差內相符即為前景
    """

    def __init__(
        self,
        image: Image.Image | np.ndarray | None,
        colors: Sequence[RGB],
        tolerance: ColorTolerance | None = None,
    ) -> None:
        """
        初始化分類器並計算前景遮罩

        Args:
            image: RGB 圖片
            colors: 葉片顏色列表
            tolerance: 比對容差，若為 None 則使用預設值

        Raises:
            PreconditionViolationError: 未提供圖片或未選取顏色
        """
        if image is None:
            raise PreconditionViolationError("尚未載入圖片")
        if not colors:
            raise PreconditionViolationError("尚未選取葉片顏色")

        self.tolerance = tolerance or ColorTolerance()
        self.colors: tuple[RGB, ...] = tuple(colors)

        rgb = np.asarray(
            image.convert("RGB") if isinstance(image, Image.Image) else image,
            dtype=np.uint8,
        )
        if rgb.ndim != 3 or rgb.shape[2] != 3:
            raise PreconditionViolationError(f"圖片必須為 RGB: shape={rgb.shape}")

        self._mask = self._compute_mask(rgb)
        logger.info(
            "Converted to B&W: %d foreground pixels (%.1f%%)",
            int(self._mask.sum()),
            self.foreground_ratio * 100,
        )

    @property
    def width(self) -> int:
        return int(self._mask.shape[1])

    @property
    def height(self) -> int:
        return int(self._mask.shape[0])

    @property
    def mask(self) -> np.ndarray:
        """前景遮罩 (height, width) 布林陣列"""
        return self._mask

    @property
    def foreground_ratio(self) -> float:
        """前景像素比例"""
        return float(self._mask.mean()) if self._mask.size else 0.0

    def is_foreground(self, x: int, y: int) -> bool:
        """座標是否為前景 (超出範圍為 False)"""
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return False
        return bool(self._mask[y, x])

    def __call__(self, x: int, y: int) -> bool:
        return self.is_foreground(x, y)

    def to_black_and_white(self) -> Image.Image:
        """前景為白、背景為黑的灰階圖片"""
        return Image.fromarray(self._mask.astype(np.uint8) * PIXEL_MAX_VALUE)

    def _compute_mask(self, rgb: np.ndarray) -> np.ndarray:
        """對所有選取顏色計算前景遮罩"""
        hsb = rgb_to_hsb(rgb)
        hue, sat, bri = hsb[..., 0], hsb[..., 1], hsb[..., 2]
        targets = rgb_to_hsb(np.array(self.colors, dtype=np.uint8))
        tol = self.tolerance

        mask = np.zeros(rgb.shape[:2], dtype=bool)
        for t_hue, t_sat, t_bri in targets:
            bri_ok = np.abs(bri - t_bri) <= tol.brightness

            # 兩者皆為灰階時只比較明度
            if t_sat < GRAYSCALE_SATURATION:
                gray = sat < GRAYSCALE_SATURATION
            else:
                gray = np.zeros_like(mask)

            hue_diff = np.abs(hue - t_hue)
            hue_diff = np.where(hue_diff > HUE_CIRCLE / 2, HUE_CIRCLE - hue_diff, hue_diff)
            color_ok = (
                (hue_diff <= tol.hue) & (np.abs(sat - t_sat) <= tol.saturation) & bri_ok
            )

            mask |= np.where(gray, bri_ok, color_ok)

        return mask
