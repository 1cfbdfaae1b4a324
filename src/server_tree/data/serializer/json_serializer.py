"""
JSON序列化器
使用标准json模块，把拓扑树的嵌套字典快照编码为字节流
"""
import json
from typing import Any, Dict

from ...core.tree import Tree
from ...exceptions import SerializationError, ValidationError
from .base import TopologySerializer


class JSONSerializer(TopologySerializer):
    """JSON序列化器，子节点顺序在往返中保持不变"""

    def __init__(self,
                 ensure_ascii: bool = False,
                 indent: int = 2):
        """
        初始化JSON序列化器

        Args:
            ensure_ascii: 是否确保ASCII编码
            indent: 缩进空格数
        """
        self.ensure_ascii = ensure_ascii
        self.indent = indent

    def serialize(self, tree: Any) -> bytes:
        """序列化为字节流"""
        dict_data = self.serialize_to_dict(tree)
        try:
            json_str = json.dumps(
                dict_data,
                ensure_ascii=self.ensure_ascii,
                indent=self.indent
            )
        except (TypeError, ValueError) as e:
            raise SerializationError(f"JSON序列化失败: {e}", data_type="json") from e
        return json_str.encode('utf-8')

    def serialize_to_dict(self, tree: Any) -> Dict:
        """序列化为字典；也接受持有 tree 属性的 Network"""
        tree = getattr(tree, 'tree', tree)
        if not isinstance(tree, Tree):
            raise SerializationError(
                f"不支持的对象类型: {type(tree).__name__}",
                data_type=type(tree).__name__
            )
        return tree.as_dict()

    def deserialize(self, data: bytes) -> Tree:
        """从字节流反序列化"""
        try:
            dict_data = json.loads(data.decode('utf-8'))
        except (UnicodeDecodeError, ValueError) as e:
            raise SerializationError(f"JSON反序列化失败: {e}", data_type="json") from e
        return self.deserialize_from_dict(dict_data)

    def deserialize_from_dict(self, data_dict: Dict) -> Tree:
        """从字典反序列化"""
        if not isinstance(data_dict, dict):
            raise SerializationError(
                f"顶层必须是对象: {type(data_dict).__name__}",
                data_type=type(data_dict).__name__
            )
        try:
            return Tree.from_dict(data_dict)
        except ValidationError as e:
            raise SerializationError(f"拓扑结构无效: {e.message}", data_type="dict") from e


# 创建默认实例
default_json_serializer = JSONSerializer()
