"""
資料模型模組

提供應用程式的核心資料結構，使用 Pydantic 進行驗證
"""

from .core import (
    DEFAULT_MAX_SIZE,
    DEFAULT_MIN_SIZE,
    DetectionConfig,
    DetectionStatistics,
)

__all__ = [
    "DEFAULT_MAX_SIZE",
    "DEFAULT_MIN_SIZE",
    "DetectionConfig",
    "DetectionStatistics",
]
