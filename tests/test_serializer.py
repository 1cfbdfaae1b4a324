"""
测试序列化模块
"""
import sys
import os
import json

import pytest

# 添加src到路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from server_tree import Network, Tree
from server_tree.data.serializer import JSONSerializer, default_json_serializer
from server_tree.exceptions import SerializationError


def test_json_serializer(sample_tree):
    """测试JSON序列化器"""
    print("=== 测试JSON序列化器 ===")

    serializer = JSONSerializer()

    json_bytes = serializer.serialize(sample_tree)
    print(f"   序列化大小: {len(json_bytes)} 字节")
    assert json.loads(json_bytes.decode('utf-8')) == sample_tree.as_dict()

    restored = serializer.deserialize(json_bytes)
    assert isinstance(restored, Tree)
    assert restored.names() == sample_tree.names()
    assert restored.trace('leafD') == ['hubA', 'hubB', 'leafD']


def test_serialize_network(scenario_network):
    """Network 按其拓扑树序列化"""
    data = default_json_serializer.serialize_to_dict(scenario_network)
    assert list(data) == ['hubA', 'hubB']
    assert data['hubA']['lhubA'] == {'lleafA': {}, 'lleafB': {}}

    net = Network(default_json_serializer.deserialize_from_dict(data))
    assert net.trace('leafAA') == ['hubB', 'leafAA']


def test_non_ascii_names():
    """非ASCII名称原样保留"""
    serializer = JSONSerializer(ensure_ascii=False, indent=None)
    tree = Tree(['中心节点', ['边缘节点', []]])

    payload = serializer.serialize(tree)
    assert '中心节点'.encode('utf-8') in payload
    assert serializer.deserialize(payload).trace('边缘节点') == ['中心节点', '边缘节点']


def test_serializer_errors():
    """测试序列化错误"""
    serializer = JSONSerializer()

    with pytest.raises(SerializationError):
        serializer.serialize({'not': 'a tree'})
    with pytest.raises(SerializationError):
        serializer.deserialize(b'{broken')
    with pytest.raises(SerializationError):
        serializer.deserialize(b'["a", []]')
    with pytest.raises(SerializationError):
        serializer.deserialize_from_dict({'a': {'': {}}})
