"""
葉片偵測工具
"""
