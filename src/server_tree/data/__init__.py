"""
数据模块
包含序列化等数据相关功能
"""

from .serializer import TopologySerializer, JSONSerializer

__all__ = [
    'TopologySerializer',
    'JSONSerializer'
]
