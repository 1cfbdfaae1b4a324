"""
序列化模块
负责将拓扑树转换为可传输格式
"""

from .base import TopologySerializer
from .json_serializer import JSONSerializer, default_json_serializer

__all__ = [
    'TopologySerializer',
    'JSONSerializer',
    'default_json_serializer'
]
