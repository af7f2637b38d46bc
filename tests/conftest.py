"""
Pytest 配置和共用 fixtures
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

from src.features.leaf_detection import Component
from tests.fixtures.synthetic import BACKGROUND_GREEN, LEAF_ORANGE, LEAF_RED


@pytest.fixture
def make_component() -> Callable[..., Component]:
    """建立指定大小的分量"""

    def _make(size: int, root: int = 0) -> Component:
        return Component(root=root, size=size, min_x=0, min_y=0, max_x=0, max_y=0)

    return _make


@pytest.fixture
def components_of_sizes(
    make_component: Callable[..., Component],
) -> Callable[[list[int]], list[Component]]:
    """依大小列表建立分量 (root 為索引)"""

    def _build(sizes: list[int]) -> list[Component]:
        return [make_component(size, root=i) for i, size in enumerate(sizes)]

    return _build


@pytest.fixture(scope="session")
def test_images_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """創建測試圖片目錄"""
    return tmp_path_factory.mktemp("images")


@pytest.fixture(scope="session")
def autumn_leaves_image(test_images_dir: Path) -> Path:
    """
    生成落葉測試圖片

    綠色背景上有三片大小不同的橘色/紅色葉子，以及一個 2x2 的雜訊點
    """
    img_path = test_images_dir / "autumn_leaves.png"

    img = Image.new("RGB", (120, 80), color=BACKGROUND_GREEN)
    draw = ImageDraw.Draw(img)

    # 大葉 30x20 = 600 像素
    draw.rectangle([(5, 5), (34, 24)], fill=LEAF_ORANGE)
    # 中葉 20x10 = 200 像素
    draw.rectangle([(60, 10), (79, 19)], fill=LEAF_RED)
    # 小葉 10x5 = 50 像素
    draw.rectangle([(90, 60), (99, 64)], fill=LEAF_ORANGE)
    # 雜訊 2x2 = 4 像素
    draw.rectangle([(50, 70), (51, 71)], fill=LEAF_ORANGE)

    img.save(img_path)
    return img_path
