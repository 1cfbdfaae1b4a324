"""
测试拓扑树
"""
import sys
import os
import logging

import pytest

# 添加src到路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from server_tree import Tree, TreeNode, PositionPath
from server_tree.exceptions import ValidationError


class TestTreeConstruction:
    """构造方式测试"""

    def test_empty_tree(self):
        tree = Tree()
        assert len(tree) == 0
        assert tree.names() == []
        assert tree.as_dict() == {}
        assert tree.root.is_root

    def test_from_literal(self, sample_tree):
        assert sample_tree.names() == ['hubA', 'leafA', 'leafB', 'hubB', 'leafC', 'leafD']
        assert len(sample_tree) == 6
        assert Tree.from_literal(['x', []]).names() == ['x']

    def test_copy_is_independent(self, sample_tree):
        copy = Tree(sample_tree)
        copy.insert('hubA', 'extra')
        sample_tree.remove('hubB')

        assert 'extra' in copy
        assert 'extra' not in sample_tree
        assert 'leafD' in copy
        assert 'leafD' not in sample_tree
        assert sample_tree.copy().as_dict() == sample_tree.as_dict()

    def test_take_ownership(self):
        """接管已有节点图，不复制"""
        hub = TreeNode('hub')
        tree = Tree([hub])
        tree.insert('hub', 'leaf')

        assert hub.child_names() == ['leaf']
        assert tree.root.children[0] is hub

        # 非根节点：接管它的子节点列表
        other = TreeNode('other', [TreeNode('a')])
        adopted = Tree(other)
        assert adopted.names() == ['a']
        assert adopted.root.children is other.children
        assert 'other' not in adopted

        # 放进列表则保留节点本身
        kept = Tree([other])
        assert kept.names() == ['other', 'a']

    def test_invalid_sources(self):
        with pytest.raises(ValidationError):
            Tree(42)
        with pytest.raises(ValidationError):
            Tree(['odd'])
        with pytest.raises(ValidationError):
            Tree(['a', 'not-a-list'])

    def test_from_dict(self):
        tree = Tree.from_dict({'a': None, 'b': {'c': {}, 'd': {}}})
        assert tree.names() == ['a', 'b', 'c', 'd']
        assert tree.trace('d') == ['b', 'd']

        with pytest.raises(ValidationError):
            Tree.from_dict({'a': ['not', 'a', 'dict']})


class TestTreeMutation:
    """结构修改测试"""

    def test_insert(self, sample_tree):
        node = sample_tree.insert(None, 'hubC')
        assert node.name == 'hubC'
        assert sample_tree.root.child_names() == ['hubA', 'hubC']

        leaf = sample_tree.insert('hubB', 'leafE')
        assert sample_tree.trace('leafE') == ['hubA', 'hubB', 'leafE']

        # 返回的句柄可以继续使用
        sample_tree.insert(leaf, 'leafF')
        assert sample_tree.trace('leafF') == ['hubA', 'hubB', 'leafE', 'leafF']

    def test_insert_with_subtree(self, sample_tree):
        sample_tree.insert(None, 'hubC', ['x', ['y', []]])
        assert sample_tree.trace('y') == ['hubC', 'x', 'y']

        detached = sample_tree.remove('hubB')
        sample_tree.insert('y', 'hubB2', detached)
        assert sample_tree.trace('leafD') == ['hubC', 'x', 'y', 'hubB2', 'leafD']

    def test_insert_missing_parent(self, sample_tree, caplog):
        before = sample_tree.as_dict()
        with caplog.at_level(logging.WARNING):
            assert sample_tree.insert('nowhere', 'leafX') is None

        assert sample_tree.as_dict() == before
        assert 'nowhere' in caplog.text

    def test_remove(self, sample_tree):
        removed = sample_tree.remove('hubB')

        assert removed.name == 'hubB'
        assert removed.child_names() == ['leafC', 'leafD']
        assert sample_tree.names() == ['hubA', 'leafA', 'leafB']
        assert sample_tree.trace('leafC') is None

    def test_remove_missing(self, sample_tree, caplog):
        with caplog.at_level(logging.WARNING):
            assert sample_tree.remove('ghost') is None
        assert len(sample_tree) == 6
        assert 'ghost' in caplog.text

    def test_remove_under_start(self, sample_tree):
        hub_b = sample_tree.locate_subtree('hubB')
        assert sample_tree.remove('leafA', hub_b) is None
        assert sample_tree.remove('leafC', hub_b).name == 'leafC'
        assert hub_b.child_names() == ['leafD']

    def test_remove_at_empty_path(self, sample_tree):
        with pytest.raises(ValueError):
            sample_tree.remove_at(PositionPath())


class TestTreeQueries:
    """查询与路径解析测试"""

    def test_locate_subtree(self, sample_tree):
        hub_b = sample_tree.locate_subtree('hubB')
        assert hub_b.child_names() == ['leafC', 'leafD']
        assert sample_tree.locate_subtree('missing') is None
        assert sample_tree.locate_subtree('hubA', hub_b) is None

    def test_descendant_names(self, sample_tree):
        assert sample_tree.descendant_names('hubA') == ['leafA', 'leafB', 'hubB', 'leafC', 'leafD']
        assert sample_tree.descendant_names('leafC') == []
        assert sample_tree.descendant_names('missing') is None

        hub_b = sample_tree.locate_subtree('hubB')
        assert sample_tree.descendant_names(hub_b) == ['leafC', 'leafD']

        names = sample_tree.descendant_names(sample_tree.root)
        assert len(names) == len(set(names)) == len(sample_tree)

    def test_resolve_position_path(self, sample_tree):
        assert sample_tree.resolve_position_path('leafD') == PositionPath('0.2.1')
        assert sample_tree.resolve_position_path('hubA') == PositionPath('0')
        assert sample_tree.resolve_position_path('missing') is None

        # 起点下一层的节点返回单跳路径
        hub_a = sample_tree.locate_subtree('hubA')
        assert sample_tree.resolve_position_path('hubB', hub_a) == PositionPath('2')
        assert sample_tree.resolve_position_path('hubA', hub_a) is None

    def test_resolve_name_path(self, sample_tree):
        assert sample_tree.resolve_name_path(PositionPath('0.2.0')) == ['hubA', 'hubB', 'leafC']
        assert sample_tree.resolve_name_path([0, 1]) == ['hubA', 'leafB']
        assert sample_tree.resolve_name_path(PositionPath()) == []

        with pytest.raises(IndexError):
            sample_tree.resolve_name_path(PositionPath('0.7'))

    def test_trace(self, sample_tree):
        assert sample_tree.trace('leafD') == ['hubA', 'hubB', 'leafD']
        assert sample_tree.trace('missing') is None

        hub_a = sample_tree.locate_subtree('hubA')
        assert sample_tree.trace('leafD', hub_a) == ['hubB', 'leafD']

    def test_trace_round_trip(self, sample_tree):
        """位置路径回放与 trace 一致，最后一跳是目标本身"""
        for path, _, node in sample_tree.walk():
            resolved = sample_tree.resolve_position_path(node.name)
            names = sample_tree.resolve_name_path(resolved)

            assert resolved == path
            assert names == sample_tree.trace(node.name)
            assert names[-1] == node.name
            assert len(names) == path.depth

    def test_duplicates_shallowest_wins(self):
        """重名时最浅、最左的节点胜出，并且搜索一定终止"""
        tree = Tree(['a', ['x', [], 'b', ['x', []]], 'x', []])
        assert tree.resolve_position_path('x') == PositionPath('1')
        assert tree.trace('x') == ['x']

        tree = Tree(['a', ['x', []], 'b', ['x', []]])
        assert tree.resolve_position_path('x') == PositionPath('0.0')

    def test_deep_chain(self):
        """深层拓扑不触发递归上限"""
        literal = []
        current = literal
        for i in range(3000):
            children = []
            current.extend([f"n{i}", children])
            current = children

        tree = Tree(literal)
        assert len(tree) == 3000
        assert len(tree.trace('n2999')) == 3000
        assert len(tree.copy()) == 3000


class TestTreeSnapshots:
    """快照导出测试"""

    def test_walk(self, sample_tree):
        assert [str(path) for path, _, _ in sample_tree.walk()] == [
            '0', '0.0', '0.1', '0.2', '0.2.0', '0.2.1'
        ]
        parents = {node.name: parent.name for _, parent, node in sample_tree.walk()}
        assert parents['hubA'] is None
        assert parents['leafD'] == 'hubB'

    def test_as_dict(self, sample_tree):
        assert sample_tree.as_dict() == {
            'hubA': {
                'leafA': {},
                'leafB': {},
                'hubB': {'leafC': {}, 'leafD': {}},
            }
        }
        hub_b = sample_tree.locate_subtree('hubB')
        assert sample_tree.as_dict(hub_b) == {'leafC': {}, 'leafD': {}}
        assert list(sample_tree.as_dict()['hubA']) == ['leafA', 'leafB', 'hubB']

    def test_as_list(self, sample_tree):
        pairs = sample_tree.as_list()
        assert [name for name, _ in pairs] == ['hubA']
        assert pairs[0][1] is sample_tree.root.children[0]

    def test_render_map(self, sample_tree):
        expected = (
            " * hubA\n"
            "    ` leafA\n"
            "    ` leafB\n"
            "    * hubB\n"
            "       ` leafC\n"
            "       ` leafD\n"
        )
        assert sample_tree.render_map() == expected
        assert sample_tree.render_map(indent=1, branch_marker="+", leaf_marker="-").splitlines()[4] == \
            "   - leafC"

    def test_render_empty(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert Tree().render_map() == ""
        assert caplog.records

    def test_print_map(self, sample_tree, capsys):
        sample_tree.print_map()
        captured = capsys.readouterr()
        assert captured.out == sample_tree.render_map()

    def test_special_methods(self, sample_tree):
        assert 'leafD' in sample_tree
        assert 'missing' not in sample_tree
        assert 42 not in sample_tree
        assert repr(sample_tree) == "Tree(top=['hubA'], nodes=6)"
