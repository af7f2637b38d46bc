"""
核心資料模型

使用 Pydantic 進行資料驗證和序列化，確保資料完整性
"""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.settings.app import AppSettings


# 預設雜訊過濾範圍
DEFAULT_MIN_SIZE: int = 10
DEFAULT_MAX_SIZE: int = 50000


class DetectionConfig(BaseModel):
    """
    偵測設定

    Attributes:
        min_size: 有效分量最小像素數 (包含)
        max_size: 有效分量最大像素數 (包含)
        use_iqr: 是否在大小過濾後再套用 IQR 離群值過濾
        capture_pixels: 是否保留每個分量的像素座標
    """

    model_config = ConfigDict(frozen=True)

    min_size: int = Field(default=DEFAULT_MIN_SIZE, ge=1)
    max_size: int = DEFAULT_MAX_SIZE
    use_iqr: bool = False
    capture_pixels: bool = False

    @model_validator(mode="after")
    def _check_range(self) -> Self:
        if self.max_size < self.min_size:
            msg = f"max_size ({self.max_size}) 不可小於 min_size ({self.min_size})"
            raise ValueError(msg)
        return self

    @classmethod
    def from_settings(cls, app_settings: AppSettings) -> "DetectionConfig":
        """
        從應用程式設定建立偵測設定

        Args:
            app_settings: 應用程式設定

        Returns:
            偵測設定
        """
        return cls(
            min_size=app_settings.min_leaf_size,
            max_size=app_settings.max_leaf_size,
            use_iqr=app_settings.use_iqr,
            capture_pixels=app_settings.capture_pixels,
        )


class DetectionStatistics(BaseModel):
    """
    偵測統計

    Attributes:
        total_pixels: 網格像素總數 (width * height)
        foreground_pixels: 前景像素數
        union_operations: 成功的合併次數
        raw_component_count: 過濾前的分量數
        noise_removed: 大小過濾移除的分量數
        outliers_removed: IQR 過濾移除的分量數
        component_count: 最終分量數
        average_size: 平均大小 (整數截斷，無分量時為 None)
        largest_size: 最大分量大小
        smallest_size: 最小分量大小
    """

    model_config = ConfigDict(frozen=True)

    total_pixels: int = Field(ge=0)
    foreground_pixels: int = Field(ge=0)
    union_operations: int = Field(ge=0)
    raw_component_count: int = Field(default=0, ge=0)
    noise_removed: int = Field(default=0, ge=0)
    outliers_removed: int = Field(default=0, ge=0)
    component_count: int = Field(ge=0)
    average_size: int | None = None
    largest_size: int | None = None
    smallest_size: int | None = None

    @property
    def is_empty(self) -> bool:
        """是否沒有任何分量"""
        return self.component_count == 0

    def as_dict(self) -> dict[str, int]:
        """
        轉為統計對照表

        average/largest/smallest 只在有分量時出現

        Returns:
            駝峰式鍵值的統計字典
        """
        stats = {
            "totalPixels": self.total_pixels,
            "foregroundPixels": self.foreground_pixels,
            "unionOperations": self.union_operations,
            "componentCount": self.component_count,
        }
        if self.component_count > 0:
            stats["averageSize"] = self.average_size
            stats["largestSize"] = self.largest_size
            stats["smallestSize"] = self.smallest_size
        return stats
