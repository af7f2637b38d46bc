"""
使用者介面模組
"""

from .leaf_ui import LeafDetectionUI, LeafRequest


__all__ = ["LeafDetectionUI", "LeafRequest"]
