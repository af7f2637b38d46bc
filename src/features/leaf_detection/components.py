"""
連通分量資料模型

提供提取過程中使用的累加器，以及最終輸出的葉片分量
"""

from dataclasses import dataclass, field

from src.utils.geometry import BoundingBox, PixelPoint


UNRANKED: int = -1


@dataclass(eq=False, slots=True)
class Component:
    """
    偵測到的連通分量（葉片或葉片群）

    以並查集根節點識別，同一次偵測內唯一

    Attributes:
        root: 並查集根節點 ID
        size: 像素數量
        min_x: 左邊界 (包含)
        min_y: 上邊界 (包含)
        max_x: 右邊界 (包含)
        max_y: 下邊界 (包含)
        rank: 依大小排序的序號 (1 = 最大)，排序前為 -1
        pixels: 像素座標 (僅在啟用像素保留時)
    """

    root: int
    size: int
    min_x: int
    min_y: int
    max_x: int
    max_y: int
    rank: int = UNRANKED
    pixels: tuple[PixelPoint, ...] | None = field(default=None, repr=False)

    @property
    def bounding_box(self) -> BoundingBox:
        """邊界框"""
        return BoundingBox(
            min_x=self.min_x, min_y=self.min_y, max_x=self.max_x, max_y=self.max_y
        )

    @property
    def center(self) -> PixelPoint:
        """中心點，空分量為 (0, 0)"""
        if self.size <= 0:
            return PixelPoint(0, 0)
        return self.bounding_box.center()

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    @property
    def is_ranked(self) -> bool:
        """是否已指定序號"""
        return self.rank != UNRANKED

    def is_valid_size(self, min_size: int, max_size: int) -> bool:
        """
        檢查大小是否在有效範圍內 (兩端包含)

        Args:
            min_size: 最小像素數
            max_size: 最大像素數

        Returns:
            是否為有效葉片（非雜訊）
        """
        return min_size <= self.size <= max_size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Component):
            return NotImplemented
        return self.root == other.root

    def __hash__(self) -> int:
        return hash(self.root)

    def __str__(self) -> str:
        return (
            f"Leaf #{self.rank} [root={self.root}, size={self.size} pixels, "
            f"bounds=({self.min_x},{self.min_y})-({self.max_x},{self.max_y})]"
        )


class ComponentAccumulator:
    """
    分量累加器

    提取時每個新發現的根節點建立一個，逐像素擴展邊界框

    Attributes:
        root: 並查集根節點 ID
        size: 建立時從並查集取得的集合大小
        pixel_count: 已加入的像素數
    """

    __slots__ = (
        "root",
        "size",
        "pixel_count",
        "min_x",
        "min_y",
        "max_x",
        "max_y",
        "_pixels",
    )

    def __init__(self, root: int, size: int, *, capture_pixels: bool = False) -> None:
        self.root = root
        self.size = size
        self.pixel_count = 0
        self.min_x = 0
        self.min_y = 0
        self.max_x = -1
        self.max_y = -1
        self._pixels: list[PixelPoint] | None = [] if capture_pixels else None

    def add_pixel(self, x: int, y: int) -> None:
        """
        加入像素並更新邊界框

        Args:
            x: 水平座標
            y: 垂直座標
        """
        if self.pixel_count == 0:
            self.min_x = self.max_x = x
            self.min_y = self.max_y = y
        else:
            if x < self.min_x:
                self.min_x = x
            elif x > self.max_x:
                self.max_x = x
            if y < self.min_y:
                self.min_y = y
            elif y > self.max_y:
                self.max_y = y

        self.pixel_count += 1
        if self._pixels is not None:
            self._pixels.append(PixelPoint(x, y))

    @property
    def pixels(self) -> list[PixelPoint] | None:
        return self._pixels

    def to_component(self) -> Component:
        """轉換為未排序的分量"""
        return Component(
            root=self.root,
            size=self.size,
            min_x=self.min_x,
            min_y=self.min_y,
            max_x=self.max_x,
            max_y=self.max_y,
            pixels=tuple(self._pixels) if self._pixels is not None else None,
        )
