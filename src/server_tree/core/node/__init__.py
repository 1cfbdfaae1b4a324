"""
节点模块 - 树节点实体
"""

from .entity import TreeNode

__all__ = ['TreeNode']
