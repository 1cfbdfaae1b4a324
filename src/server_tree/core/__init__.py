"""
核心模块包
包含节点、位置路径和拓扑树的核心实现
"""

# 导入节点模块
from .node import TreeNode

# 导入路径模块
from .path import PositionPath

# 导入拓扑树
from .tree import Tree

__all__ = [
    'TreeNode',
    'PositionPath',
    'Tree',
]
