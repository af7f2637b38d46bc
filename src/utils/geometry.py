"""
幾何工具模組

提供像素索引轉換和邊界框功能
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PixelPoint:
    """
    像素座標

    Attributes:
        x: 水平座標
        y: 垂直座標
    """

    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


def pixel_index(x: int, y: int, width: int) -> int:
    """
    將 2D 座標轉換為 1D 索引 (行優先)

    例如寬度 512 時，(3, 2) -> 2 * 512 + 3 = 1027
    """
    return y * width + x


def index_to_point(index: int, width: int) -> PixelPoint:
    """將 1D 索引轉回 2D 座標"""
    return PixelPoint(x=index % width, y=index // width)


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """
    軸對齊邊界框

    所有座標皆為包含的座標（inclusive coordinates）

    Attributes:
        min_x: 左邊界
        min_y: 上邊界
        max_x: 右邊界 (包含)
        max_y: 下邊界 (包含)
    """

    min_x: int
    min_y: int
    max_x: int
    max_y: int

    def width(self) -> int:
        """計算寬度"""
        return self.max_x - self.min_x + 1

    def height(self) -> int:
        """計算高度"""
        return self.max_y - self.min_y + 1

    def area(self) -> int:
        """計算面積"""
        w = self.width()
        h = self.height()
        if w <= 0 or h <= 0:
            return 0
        return w * h

    def center(self) -> PixelPoint:
        """中心點 (整數除法)"""
        return PixelPoint(
            x=(self.min_x + self.max_x) // 2,
            y=(self.min_y + self.max_y) // 2,
        )

    def contains(self, x: int, y: int) -> bool:
        """
        檢查座標是否落在邊界框內

        Args:
            x: 水平座標
            y: 垂直座標

        Returns:
            是否在邊界框內
        """
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def as_tuple(self) -> tuple[int, int, int, int]:
        """以 (min_x, min_y, max_x, max_y) 形式回傳"""
        return (self.min_x, self.min_y, self.max_x, self.max_y)
