"""
設定模組
"""
