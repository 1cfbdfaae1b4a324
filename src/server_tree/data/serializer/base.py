"""
序列化基类定义
"""
from abc import ABC, abstractmethod
from typing import Any, Dict

from ...core.tree import Tree


class TopologySerializer(ABC):
    """拓扑序列化器抽象基类"""

    @abstractmethod
    def serialize(self, tree: Tree) -> bytes:
        """将拓扑树序列化为字节流"""
        pass

    @abstractmethod
    def serialize_to_dict(self, tree: Any) -> Dict:
        """将拓扑树转换为嵌套字典"""
        pass

    @abstractmethod
    def deserialize(self, data: bytes) -> Tree:
        """从字节流恢复拓扑树"""
        pass

    @abstractmethod
    def deserialize_from_dict(self, data_dict: Dict) -> Tree:
        """从嵌套字典恢复拓扑树"""
        pass
