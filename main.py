#!/usr/bin/env python3
"""
葉片偵測工具

主程式進入點：依顏色分割圖片後，以並查集偵測葉片

使用方法:
    uv run main.py
"""

import logging
import sys

from src.features.color_segmentation import LeafColorClassifier, load_image
from src.features.leaf_detection import ConnectedComponentDetector
from src.settings.app import settings
from src.ui.leaf_ui import LeafDetectionUI


def main() -> int:
    """
    主程式

    Returns:
        退出碼 (0: 成功, 1: 失敗)
    """
    logging.basicConfig(level=settings.log_level.upper(), format="%(message)s")

    try:
        ui = LeafDetectionUI(settings)

        # 主循環 - 支援連續處理
        while True:
            request = ui.run()
            if request is None:
                print("\n👋 再見！")
                return 0

            image = load_image(
                request.image_path,
                rescale=settings.rescale,
                process_size=settings.process_size,
            )
            classifier = LeafColorClassifier(image, request.colors, request.tolerance)

            detector = ConnectedComponentDetector(request.config)
            result = detector.detect_from_mask(classifier.mask)

            ui.show_results(result)

    except KeyboardInterrupt:
        print("\n\n👋 已中斷操作，再見！")
        return 130

    except Exception as exc:
        print(f"\n❌ 錯誤: {exc}\n")
        logging.exception("處理時發生錯誤")
        return 1


if __name__ == "__main__":
    sys.exit(main())
