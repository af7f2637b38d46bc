"""
葉片偵測錯誤定義
"""


class LeafDetectionError(Exception):
    """葉片偵測錯誤"""


class PreconditionViolationError(LeafDetectionError, ValueError):
    """前置條件不成立（尺寸無效、缺少分類器、大小範圍顛倒等）"""
