"""
應用程式設定

使用 Pydantic BaseSettings 管理環境變數和配置
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    應用程式設定

    從環境變數和 .env 文件讀取設定

    Attributes:
        log_level: 日誌級別 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        process_size: 處理尺寸（最長邊像素，越小越快）
        rescale: 是否縮放至處理尺寸
        min_leaf_size: 有效葉片最小像素數
        max_leaf_size: 有效葉片最大像素數
        use_iqr: 是否啟用 IQR 離群值過濾
        capture_pixels: 是否保留每個葉片的像素座標
        hue_tolerance: 色相容差（度）
        saturation_tolerance: 飽和度容差
        brightness_tolerance: 明度容差
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LEAFDET_",
        case_sensitive=False,
    )

    # 日誌設定
    log_level: str = "INFO"

    # 圖片處理設定
    process_size: int = 512
    rescale: bool = True

    # 偵測設定
    min_leaf_size: int = 10
    max_leaf_size: int = 50000
    use_iqr: bool = False
    capture_pixels: bool = False

    # 色彩比對設定
    hue_tolerance: float = 30.0  # 度 (0-180)
    saturation_tolerance: float = 0.3
    brightness_tolerance: float = 0.3


# 創建全局設定實例
settings = AppSettings()
