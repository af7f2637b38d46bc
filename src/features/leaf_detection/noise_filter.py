"""
雜訊過濾模組

以固定大小範圍移除雜訊分量，並可選擇以 IQR 規則移除統計離群值
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from src.data_model import DEFAULT_MAX_SIZE, DEFAULT_MIN_SIZE

from .components import Component
from .errors import PreconditionViolationError


logger = logging.getLogger(__name__)

# 常數定義
MIN_COMPONENTS_FOR_IQR: Final[int] = 4
IQR_MULTIPLIER: Final[float] = 1.5


@dataclass(frozen=True, slots=True)
class IQRBounds:
    """
    IQR 統計結果

    Attributes:
        q1: 第一四分位數
        q3: 第三四分位數
        iqr: 四分位距
        lower: 下界 (包含)
        upper: 上界 (包含)
    """

    q1: int
    q3: int
    iqr: int
    lower: float
    upper: float

    def accepts(self, size: int) -> bool:
        """大小是否落在界限內"""
        return self.lower <= size <= self.upper


def compute_iqr_bounds(sizes: Sequence[int]) -> IQRBounds | None:
    """
    計算 IQR 界限

    四分位數直接取排序後 n//4 與 3n//4 位置的值（不內插）

    Args:
        sizes: 分量大小

    Returns:
        IQR 界限，少於 4 個值時為 None
    """
    n = len(sizes)
    if n < MIN_COMPONENTS_FOR_IQR:
        return None

    ordered = sorted(sizes)
    q1 = ordered[n // 4]
    q3 = ordered[3 * n // 4]
    iqr = q3 - q1
    return IQRBounds(
        q1=q1,
        q3=q3,
        iqr=iqr,
        lower=q1 - IQR_MULTIPLIER * iqr,
        upper=q3 + IQR_MULTIPLIER * iqr,
    )


class NoiseFilter:
    """
    雜訊過濾器

    大小過濾一律套用，IQR 離群值過濾需明確啟用
    """

    def __init__(
        self,
        min_size: int = DEFAULT_MIN_SIZE,
        max_size: int = DEFAULT_MAX_SIZE,
        *,
        use_iqr: bool = False,
    ) -> None:
        """
        初始化雜訊過濾器

        Args:
            min_size: 最小像素數 (包含)
            max_size: 最大像素數 (包含)
            use_iqr: 是否在大小過濾後套用 IQR 過濾

        Raises:
            PreconditionViolationError: min_size < 1 或 max_size < min_size
        """
        if min_size < 1:
            raise PreconditionViolationError(f"min_size 必須 >= 1: {min_size}")
        if max_size < min_size:
            raise PreconditionViolationError(
                f"max_size ({max_size}) 不可小於 min_size ({min_size})"
            )
        self._min_size = min_size
        self._max_size = max_size
        self.use_iqr = use_iqr

    @property
    def min_size(self) -> int:
        return self._min_size

    @min_size.setter
    def min_size(self, value: int) -> None:
        self._min_size = max(1, value)

    @property
    def max_size(self) -> int:
        return self._max_size

    @max_size.setter
    def max_size(self, value: int) -> None:
        self._max_size = max(self._min_size, value)

    def set_size_range(self, min_size: int, max_size: int) -> None:
        """
        同時設定最小與最大值 (自動修正無效值)

        Args:
            min_size: 最小像素數
            max_size: 最大像素數
        """
        self._min_size = max(1, min_size)
        self._max_size = max(self._min_size, min_size, max_size)

    def filter_by_size(self, components: Sequence[Component]) -> list[Component]:
        """
        移除大小不在範圍內的分量

        Args:
            components: 分量列表

        Returns:
            保留的分量 (維持原順序)
        """
        kept = [c for c in components if c.is_valid_size(self._min_size, self._max_size)]
        logger.info(
            "Size filter [%d, %d]: removed %d noise clusters, %d remaining",
            self._min_size,
            self._max_size,
            len(components) - len(kept),
            len(kept),
        )
        return kept

    def filter_outliers_iqr(self, components: Sequence[Component]) -> list[Component]:
        """
        以 IQR 規則移除統計離群值

        Args:
            components: 分量列表

        Returns:
            保留的分量 (維持原順序)，少於 4 個分量時原樣回傳
        """
        bounds = compute_iqr_bounds([c.size for c in components])
        if bounds is None:
            logger.debug("IQR filter skipped: only %d components", len(components))
            return list(components)

        logger.info(
            "IQR stats: Q1=%d, Q3=%d, IQR=%d, bounds=[%.1f, %.1f]",
            bounds.q1,
            bounds.q3,
            bounds.iqr,
            bounds.lower,
            bounds.upper,
        )
        kept = [c for c in components if bounds.accepts(c.size)]
        logger.info("IQR filter: removed %d outliers", len(components) - len(kept))
        return kept

    def apply(self, components: Sequence[Component]) -> list[Component]:
        """大小過濾，啟用時再做 IQR 過濾"""
        kept = self.filter_by_size(components)
        if self.use_iqr:
            kept = self.filter_outliers_iqr(kept)
        return kept
