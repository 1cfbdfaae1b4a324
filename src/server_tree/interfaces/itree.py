"""
拓扑树接口定义
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Any, Union

from ..core.node.entity import TreeNode
from ..core.path.position import PositionPath


class ITree(ABC):
    """拓扑树接口 - 定义结构修改、查询和路径解析的基本行为"""

    @property
    @abstractmethod
    def root(self) -> TreeNode:
        """隐式根节点"""
        pass

    @abstractmethod
    def insert(self, parent: Union[None, str, TreeNode], name: str,
               subtree: Any = None) -> Optional[TreeNode]:
        """
        在父节点下追加子节点

        Args:
            parent: None表示根节点，也可以是节点名称或节点句柄
            name: 新节点名称
            subtree: 预先构建的子树

        Returns:
            新节点句柄，父节点不存在时返回None
        """
        pass

    @abstractmethod
    def remove(self, name: str, start: Optional[TreeNode] = None) -> Optional[TreeNode]:
        """摘除节点及其全部后代，返回被摘下的子树"""
        pass

    @abstractmethod
    def locate_subtree(self, name: str, start: Optional[TreeNode] = None) -> Optional[TreeNode]:
        """按名称查找子树"""
        pass

    @abstractmethod
    def descendant_names(self, node_or_name: Union[str, TreeNode]) -> Optional[List[str]]:
        """前序列出节点之下所有名称（不含自身）"""
        pass

    @abstractmethod
    def resolve_position_path(self, name: str,
                              start: Optional[TreeNode] = None) -> Optional[PositionPath]:
        """广度优先搜索，返回到目标节点的位置路径"""
        pass

    @abstractmethod
    def resolve_name_path(self, path: PositionPath,
                          start: Optional[TreeNode] = None) -> List[str]:
        """按位置路径回放，读出每一跳的名称"""
        pass

    @abstractmethod
    def trace(self, name: str, start: Optional[TreeNode] = None) -> Optional[List[str]]:
        """从起点到目标（含目标）的名称序列"""
        pass

    @abstractmethod
    def as_dict(self, start: Optional[TreeNode] = None) -> Dict[str, Any]:
        """嵌套字典形式的快照"""
        pass
