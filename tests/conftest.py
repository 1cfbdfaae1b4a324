"""
pytest配置文件
用于设置测试环境和共享fixtures
"""
import sys
import os

import pytest

# 将src目录添加到Python路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from server_tree import Network, Tree  # noqa: E402


# hubA
#   leafA
#   leafB
#   hubB
#     leafC
#     leafD
SAMPLE_LITERAL = [
    'hubA', [
        'leafA', [],
        'leafB', [],
        'hubB', [
            'leafC', [],
            'leafD', [],
        ],
    ],
]


@pytest.fixture
def sample_tree():
    """六个节点的示例拓扑"""
    return Tree(SAMPLE_LITERAL)


@pytest.fixture
def scenario_network():
    """
    逐个挂载得到的网络：
        hubA
          lhubA
            lleafA
            lleafB
          leafA
        hubB
          leafAA
    """
    net = Network()
    net.attach_to_self('hubA')
    net.attach_to_name('hubA', 'lhubA')
    net.attach_to_name('hubA', 'leafA')
    net.attach_to_name('lhubA', 'lleafA')
    net.attach_to_name('lhubA', 'lleafB')
    net.attach_to_self('hubB')
    net.attach_to_name('hubB', 'leafAA')
    return net
