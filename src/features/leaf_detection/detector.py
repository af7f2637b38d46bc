"""
連通分量偵測模組

以並查集對前景像素做 4-連通標記，提取、過濾並排序葉片分量
"""

import logging
import time
from collections.abc import Callable, Iterator, Sequence
from typing import Protocol, runtime_checkable

import numpy as np

from src.data_model import DetectionConfig, DetectionStatistics
from src.utils.geometry import pixel_index
from src.utils.union_find import DisjointSet

from .components import Component, ComponentAccumulator
from .errors import PreconditionViolationError
from .noise_filter import NoiseFilter
from .ranking import compute_statistics, rank_components


logger = logging.getLogger(__name__)


@runtime_checkable
class PixelClassifier(Protocol):
    """前景像素分類器介面"""

    def is_foreground(self, x: int, y: int) -> bool: ...


ClassifierLike = PixelClassifier | Callable[[int, int], bool]


class DetectionResult:
    """
    偵測結果

    可直接解包為 (components, statistics)，並提供依序號或像素查詢分量

    Attributes:
        components: 依大小排序的分量 (rank 1 = 最大)
        statistics: 偵測統計
        disjoint_set: 本次偵測使用的並查集 (診斷用)
        width: 網格寬度
        height: 網格高度
    """

    __slots__ = (
        "components",
        "statistics",
        "disjoint_set",
        "width",
        "height",
        "_mask",
        "_by_rank",
        "_by_root",
    )

    def __init__(
        self,
        components: Sequence[Component],
        statistics: DetectionStatistics,
        disjoint_set: DisjointSet,
        *,
        width: int,
        height: int,
        mask: bytes | bytearray,
    ) -> None:
        self.components: tuple[Component, ...] = tuple(components)
        self.statistics = statistics
        self.disjoint_set = disjoint_set
        self.width = width
        self.height = height
        self._mask = mask
        self._by_rank = {c.rank: c for c in self.components}
        self._by_root = {c.root: c for c in self.components}

    def __iter__(self) -> Iterator[object]:
        yield self.components
        yield self.statistics

    def __len__(self) -> int:
        return len(self.components)

    @property
    def component_count(self) -> int:
        return len(self.components)

    def is_foreground(self, x: int, y: int) -> bool:
        """座標是否為前景 (超出範圍為 False)"""
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return False
        return bool(self._mask[pixel_index(x, y, self.width)])

    def component_by_rank(self, rank: int) -> Component | None:
        """
        依序號取得分量

        Args:
            rank: 序號 (1, 2, 3, ...)

        Returns:
            分量，超出 [1, component_count] 時為 None
        """
        return self._by_rank.get(rank)

    def root_of(self, x: int, y: int) -> int | None:
        """前景像素所屬集合的根，非前景為 None"""
        if not self.is_foreground(x, y):
            return None
        return self.disjoint_set.find(pixel_index(x, y, self.width))

    def component_at(self, x: int, y: int) -> Component | None:
        """
        取得包含指定像素的分量

        Args:
            x: 水平座標
            y: 垂直座標

        Returns:
            分量；像素非前景、超出範圍或所屬分量已被過濾時為 None
        """
        root = self.root_of(x, y)
        if root is None:
            return None
        return self._by_root.get(root)


class ConnectedComponentDetector:
    """
    連通分量偵測器

    流程：
    1. 每個像素建立一個單元素集合
    2. 合併相鄰 (右、下) 的前景像素
    3. 每個根節點提取一個分量
    4. 過濾雜訊
    5. 依大小排序並指定序號
    """

    def __init__(self, config: DetectionConfig | None = None) -> None:
        """
        初始化偵測器

        Args:
            config: 偵測設定，若為 None 則使用預設設定
        """
        self.config = config or DetectionConfig()

    def detect(
        self,
        classifier: ClassifierLike | None,
        width: int,
        height: int,
        config: DetectionConfig | None = None,
    ) -> DetectionResult:
        """
        偵測分類器定義之網格中的連通分量

        分類器每個像素只會被呼叫一次 (行優先順序)

        Args:
            classifier: 可呼叫的 (x, y) -> bool，或具 is_foreground 方法的物件
            width: 網格寬度
            height: 網格高度
            config: 本次使用的設定，若為 None 則使用偵測器的設定

        Returns:
            偵測結果

        Raises:
            PreconditionViolationError: 尺寸無效或缺少分類器
        """
        if width <= 0 or height <= 0:
            raise PreconditionViolationError(f"無效的網格尺寸: {width}x{height}")
        if classifier is None:
            raise PreconditionViolationError("缺少前景分類器")

        predicate = _as_predicate(classifier)
        mask = bytearray(width * height)
        i = 0
        for y in range(height):
            for x in range(width):
                if predicate(x, y):
                    mask[i] = 1
                i += 1

        return self._run(mask, width, height, config or self.config)

    def detect_from_mask(
        self, mask: np.ndarray, config: DetectionConfig | None = None
    ) -> DetectionResult:
        """
        從 2D 遮罩偵測連通分量

        Args:
            mask: 形狀為 (height, width) 的布林或 0/1 陣列

        Returns:
            偵測結果

        Raises:
            PreconditionViolationError: 遮罩不是非空的 2D 陣列
        """
        if mask is None or mask.ndim != 2:
            raise PreconditionViolationError("遮罩必須為 2D 陣列")
        height, width = mask.shape
        if width <= 0 or height <= 0:
            raise PreconditionViolationError(f"無效的網格尺寸: {width}x{height}")

        flat = np.ascontiguousarray(mask, dtype=bool).tobytes()
        return self._run(flat, width, height, config or self.config)

    def _run(
        self,
        mask: bytes | bytearray,
        width: int,
        height: int,
        config: DetectionConfig,
    ) -> DetectionResult:
        start = time.perf_counter()
        total = width * height

        uf = DisjointSet(total)
        logger.info("Step 1: initialized %d disjoint sets (%dx%d)", total, width, height)

        foreground, unions = _union_adjacent(mask, uf, width, height)
        logger.info(
            "Step 2: %d foreground pixels, %d union operations", len(foreground), unions
        )

        raw = _extract_components(
            foreground, uf, width, capture_pixels=config.capture_pixels
        )
        logger.info("Step 3: %d raw clusters found", len(raw))

        noise_filter = NoiseFilter(config.min_size, config.max_size)
        sized = noise_filter.filter_by_size(raw)
        kept = noise_filter.filter_outliers_iqr(sized) if config.use_iqr else sized
        logger.info("Step 4: %d valid leaves remaining", len(kept))

        ranked = rank_components(kept)
        if ranked:
            logger.debug(
                "Step 5: largest leaf %d pixels, smallest leaf %d pixels",
                ranked[0].size,
                ranked[-1].size,
            )

        statistics = compute_statistics(
            ranked,
            total_pixels=total,
            foreground_pixels=len(foreground),
            union_operations=unions,
            raw_component_count=len(raw),
            noise_removed=len(raw) - len(sized),
            outliers_removed=len(sized) - len(kept),
        )
        logger.info(
            "Detection complete in %.1f ms: %d leaves",
            (time.perf_counter() - start) * 1000,
            len(ranked),
        )

        return DetectionResult(
            ranked, statistics, uf, width=width, height=height, mask=mask
        )


# === 內部函數 ===


def _as_predicate(classifier: ClassifierLike) -> Callable[[int, int], bool]:
    """取得分類器的判斷函數"""
    if isinstance(classifier, PixelClassifier):
        return classifier.is_foreground
    if callable(classifier):
        return classifier
    raise PreconditionViolationError(f"不支援的分類器類型: {type(classifier).__name__}")


def _union_adjacent(
    mask: bytes | bytearray, uf: DisjointSet, width: int, height: int
) -> tuple[list[int], int]:
    """合併相鄰前景像素 (只檢查右、下鄰居)"""
    foreground: list[int] = []
    unions = 0
    last_row = (height - 1) * width

    for y in range(height):
        row = y * width
        for x in range(width):
            idx = row + x
            if not mask[idx]:
                continue

            foreground.append(idx)

            # 右
            if x + 1 < width and mask[idx + 1] and uf.union(idx, idx + 1):
                unions += 1
            # 下
            if row < last_row and mask[idx + width] and uf.union(idx, idx + width):
                unions += 1

    return foreground, unions


def _extract_components(
    foreground: list[int],
    uf: DisjointSet,
    width: int,
    *,
    capture_pixels: bool,
) -> list[Component]:
    """每個根節點提取一個分量 (依行優先的發現順序)"""
    accumulators: dict[int, ComponentAccumulator] = {}

    for idx in foreground:
        root = uf.find(idx)
        acc = accumulators.get(root)
        if acc is None:
            acc = ComponentAccumulator(
                root, uf.get_set_size(root), capture_pixels=capture_pixels
            )
            accumulators[root] = acc
        acc.add_pixel(idx % width, idx // width)

    return [acc.to_component() for acc in accumulators.values()]
