"""
服务器生成树 - 网络拓扑建模与路径解析
"""

__version__ = "0.3.0"
__author__ = "zjy"

from .core import Tree, TreeNode, PositionPath
from .network import Network

__all__ = ['Tree', 'TreeNode', 'PositionPath', 'Network']
