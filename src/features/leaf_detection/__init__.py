"""
葉片偵測模組

以並查集進行 4-連通分量偵測、雜訊過濾與大小排序
"""

from .components import Component, ComponentAccumulator
from .detector import ConnectedComponentDetector, DetectionResult, PixelClassifier
from .errors import LeafDetectionError, PreconditionViolationError
from .noise_filter import IQRBounds, NoiseFilter, compute_iqr_bounds
from .ranking import compute_statistics, rank_components

__all__ = [
    "Component",
    "ComponentAccumulator",
    "ConnectedComponentDetector",
    "DetectionResult",
    "IQRBounds",
    "LeafDetectionError",
    "NoiseFilter",
    "PixelClassifier",
    "PreconditionViolationError",
    "compute_iqr_bounds",
    "compute_statistics",
    "rank_components",
]
