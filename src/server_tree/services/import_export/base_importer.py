"""
拓扑导入器基类
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional

from ...core.tree import Tree
from ...exceptions import TopologyImportError


class DataImporter(ABC):
    """拓扑导入器抽象基类"""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self._validate_config()

    def _validate_config(self):
        """验证配置参数"""
        pass

    @abstractmethod
    def validate_source(self, source: Any) -> bool:
        """验证数据源是否可导入"""
        pass

    @abstractmethod
    def extract_metadata(self, source: Any) -> Dict[str, Any]:
        """提取数据源元数据"""
        pass

    @abstractmethod
    def parse_data(self, source: Any) -> List[Dict[str, Any]]:
        """解析数据为标准化的节点行"""
        pass

    @abstractmethod
    def convert_to_tree(self, data: List[Dict[str, Any]]) -> Tree:
        """将节点行转换为拓扑树"""
        pass

    def import_data(self, source: Any) -> Tree:
        """
        导入数据的完整流程
        1. 验证数据源
        2. 解析数据
        3. 转换为拓扑树
        """
        if not self.validate_source(source):
            raise TopologyImportError("数据源验证失败", source=type(source).__name__)

        data = self.parse_data(source)
        return self.convert_to_tree(data)
