"""
接口定义包
"""

from .itree import ITree

__all__ = ['ITree']
