"""
路径模块 - 位置路径编码
"""

from .position import PositionPath

__all__ = ['PositionPath']
