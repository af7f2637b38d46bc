"""
排序與統計模組
"""

from collections.abc import Sequence

from src.data_model import DetectionStatistics

from .components import Component


def rank_components(components: Sequence[Component]) -> list[Component]:
    """
    依大小遞減排序並指定序號 (1 = 最大)

    相同大小維持原本的發現順序

    Args:
        components: 分量列表

    Returns:
        排序後的新列表
    """
    ranked = sorted(components, key=lambda c: c.size, reverse=True)
    for i, component in enumerate(ranked):
        component.rank = i + 1
    return ranked


def compute_statistics(
    ranked: Sequence[Component],
    *,
    total_pixels: int,
    foreground_pixels: int,
    union_operations: int,
    raw_component_count: int = 0,
    noise_removed: int = 0,
    outliers_removed: int = 0,
) -> DetectionStatistics:
    """
    計算偵測統計

    Args:
        ranked: 已排序的分量
        total_pixels: 網格像素總數
        foreground_pixels: 前景像素數
        union_operations: 成功合併次數
        raw_component_count: 過濾前分量數
        noise_removed: 大小過濾移除數
        outliers_removed: IQR 過濾移除數

    Returns:
        偵測統計
    """
    count = len(ranked)
    average = largest = smallest = None
    if count:
        average = sum(c.size for c in ranked) // count
        largest = ranked[0].size
        smallest = ranked[-1].size

    return DetectionStatistics(
        total_pixels=total_pixels,
        foreground_pixels=foreground_pixels,
        union_operations=union_operations,
        raw_component_count=raw_component_count,
        noise_removed=noise_removed,
        outliers_removed=outliers_removed,
        component_count=count,
        average_size=average,
        largest_size=largest,
        smallest_size=smallest,
    )
