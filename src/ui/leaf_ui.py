"""
葉片偵測互動式使用者介面

使用 InquirerPy 收集輸入，rich 顯示偵測結果
"""

from dataclasses import dataclass
from pathlib import Path

from InquirerPy import inquirer
from rich.console import Console
from rich.table import Table

from src.data_model import DetectionConfig
from src.features.color_segmentation import ColorTolerance, parse_color
from src.features.leaf_detection import DetectionResult
from src.settings.app import AppSettings


# 結果表格最多顯示的葉片數
MAX_TABLE_ROWS = 20


@dataclass(frozen=True, slots=True)
class LeafRequest:
    """
    一次偵測的使用者輸入

    Attributes:
        image_path: 圖片路徑
        colors: 葉片顏色
        tolerance: 色彩比對容差
        config: 偵測設定
    """

    image_path: Path
    colors: tuple[tuple[int, int, int], ...]
    tolerance: ColorTolerance
    config: DetectionConfig


def _valid_colors(text: str) -> bool:
    try:
        return bool(_parse_colors(text))
    except ValueError:
        return False


def _parse_colors(text: str) -> tuple[tuple[int, int, int], ...]:
    """以 ; 分隔的顏色列表"""
    return tuple(parse_color(part) for part in text.split(";") if part.strip())


class LeafDetectionUI:
    """
    葉片偵測使用者介面

    操作流程：
    1. 輸入圖片路徑
    2. 輸入葉片顏色
    3. 設定大小範圍與 IQR 過濾
    """

    def __init__(self, app_settings: AppSettings) -> None:
        self._settings = app_settings
        self._console = Console()

    def run(self) -> LeafRequest | None:
        """
        執行互動式設定流程

        Returns:
            使用者輸入，若使用者取消則返回 None
        """
        self._console.rule("[bold green]🍂 葉片偵測工具")

        path_text = inquirer.filepath(
            message="圖片路徑:",
            validate=lambda p: Path(p).is_file(),
            invalid_message="找不到檔案",
            mandatory=False,
        ).execute()
        if not path_text:
            return None

        colors_text = inquirer.text(
            message="葉片顏色 (以 ; 分隔，如 orange;#ffc800;255,0,0):",
            default="orange;#ffc800;red",
            validate=_valid_colors,
            invalid_message="無法解析的顏色",
        ).execute()

        min_size = int(
            inquirer.number(
                message="最小葉片像素數:",
                min_allowed=1,
                default=self._settings.min_leaf_size,
            ).execute()
        )
        max_size = int(
            inquirer.number(
                message="最大葉片像素數:",
                min_allowed=min_size,
                default=max(min_size, self._settings.max_leaf_size),
            ).execute()
        )
        use_iqr = inquirer.confirm(
            message="啟用 IQR 離群值過濾?", default=self._settings.use_iqr
        ).execute()

        return LeafRequest(
            image_path=Path(path_text).expanduser(),
            colors=_parse_colors(colors_text),
            tolerance=ColorTolerance(
                hue=self._settings.hue_tolerance,
                saturation=self._settings.saturation_tolerance,
                brightness=self._settings.brightness_tolerance,
            ),
            config=DetectionConfig(
                min_size=min_size,
                max_size=max_size,
                use_iqr=use_iqr,
                capture_pixels=self._settings.capture_pixels,
            ),
        )

    def show_results(self, result: DetectionResult) -> None:
        """顯示排序後的葉片與統計"""
        table = Table(title=f"偵測到 {result.component_count} 片葉子")
        table.add_column("#", justify="right")
        table.add_column("像素", justify="right")
        table.add_column("邊界框")
        table.add_column("中心")

        for leaf in result.components[:MAX_TABLE_ROWS]:
            table.add_row(
                str(leaf.rank),
                str(leaf.size),
                f"({leaf.min_x},{leaf.min_y})-({leaf.max_x},{leaf.max_y})",
                str(leaf.center),
            )
        self._console.print(table)

        if result.component_count > MAX_TABLE_ROWS:
            self._console.print(f"... 其餘 {result.component_count - MAX_TABLE_ROWS} 片未列出")

        stats = Table(title="統計", show_header=False)
        for key, value in result.statistics.as_dict().items():
            stats.add_row(key, str(value))
        self._console.print(stats)
