"""
拓扑树模块
管理服务器生成树的结构修改、查询和广度优先路径解析
"""

import logging
from collections import deque
from typing import Optional, Dict, Any, List, Tuple, Union, Iterator, Mapping

from ..config.validator import ConfigValidator
from ..exceptions import ValidationError
from ..interfaces import ITree
from .node.entity import TreeNode
from .path.position import PositionPath

logger = logging.getLogger(__name__)

Locator = Union[None, str, TreeNode]
SubtreeLike = Union[None, TreeNode, List[TreeNode], list, tuple, 'Tree']


class Tree(ITree):
    """
    无序、有根、带标签的生成树

    根节点是隐式的（名称为None），其子节点即直接相连的对端。
    规则：
    1. 始终是一棵树（无环，每个节点只有一个父节点）
    2. 任意两个节点不能同名

    出于性能考虑，本类不校验这两条规则；名称唯一性由Network负责。

    构造方式：
        Tree()                     空树
        Tree(other_tree)           深拷贝，不与原树共享任何结构
        Tree(node) / Tree([node])  直接接管已有节点图，不复制
        Tree(['hubA', ['leafA', []], 'hubB', []])  从成对字面量构建

    注意：Tree(node) 中的 node 若不是隐式根节点，只接管它的子节点列表，
    node 自身不会成为顶层节点（与 insert 的 subtree 参数一致）。
    要保留 node 本身，请用 Tree([node])。
    """

    def __init__(self, source: Any = None):
        """
        初始化拓扑树

        Args:
            source: None、另一棵Tree、TreeNode、TreeNode列表或成对字面量
        """
        if source is None:
            self._root = TreeNode()
        elif isinstance(source, Tree):
            # 克隆，断开引用
            self._root = source.root.clone()
        elif isinstance(source, TreeNode):
            # 接管节点的子节点列表，不复制
            self._root = source if source.is_root else TreeNode(None, source.children)
        elif isinstance(source, list) and all(isinstance(item, TreeNode) for item in source):
            self._root = TreeNode(None, source)
        elif isinstance(source, (list, tuple)):
            self._root = TreeNode(None, self._nodes_from_literal(source))
        else:
            raise ValidationError(
                message=f"无法从该类型构建拓扑树: {type(source).__name__}",
                field="source",
                reason="invalid_type"
            )

    @classmethod
    def from_literal(cls, literal: Union[list, tuple]) -> 'Tree':
        """从 [name, [children...], ...] 成对字面量构建"""
        return cls(TreeNode(None, cls._nodes_from_literal(literal)))

    @classmethod
    def from_dict(cls, mapping: Mapping[str, Any]) -> 'Tree':
        """从 as_dict() 产出的嵌套字典构建，子节点顺序沿用字典顺序"""
        validator = ConfigValidator()
        root = TreeNode()
        stack = [(mapping, root)]
        while stack:
            current, parent = stack.pop()
            if current is None:
                continue
            if not isinstance(current, Mapping):
                raise ValidationError(
                    message="嵌套字典的子节点必须是字典",
                    field="children",
                    value=current,
                    reason="invalid_type"
                )
            for name, children in current.items():
                node = parent.add_child(TreeNode(validator.validate_node_name(name)))
                stack.append((children, node))
        return cls(root)

    @staticmethod
    def _nodes_from_literal(literal: Union[list, tuple]) -> List[TreeNode]:
        ConfigValidator().validate_topology_literal(literal)
        top = TreeNode()
        stack = [(literal, top)]
        while stack:
            pairs, parent = stack.pop()
            for i in range(0, len(pairs), 2):
                node = parent.add_child(TreeNode(pairs[i]))
                stack.append((pairs[i + 1], node))
        return top.children

    def coerce_subtree(self, subtree: SubtreeLike) -> List[TreeNode]:
        """把各种子树形式统一成子节点列表；句柄和节点列表按引用使用"""
        if subtree is None:
            return []
        if isinstance(subtree, Tree):
            return subtree.root.children
        if isinstance(subtree, TreeNode):
            return subtree.children
        if isinstance(subtree, list) and all(isinstance(item, TreeNode) for item in subtree):
            return subtree
        if isinstance(subtree, (list, tuple)):
            return self._nodes_from_literal(subtree)
        raise ValidationError(
            message=f"无效的子树类型: {type(subtree).__name__}",
            field="subtree",
            reason="invalid_type"
        )

    @property
    def root(self) -> TreeNode:
        """隐式根节点"""
        return self._root

    def _start(self, start: Optional[TreeNode]) -> TreeNode:
        return self._root if start is None else start

    def node_at(self, path: Union[PositionPath, List[int], Tuple[int, ...]],
                start: Optional[TreeNode] = None) -> TreeNode:
        """沿位置路径逐层下降，返回目标节点句柄；不搜索"""
        node = self._start(start)
        for index in path:
            node = node.children[index]
        return node

    # ========== 结构修改 ==========

    def insert(self, parent: Locator, name: str, subtree: SubtreeLike = None) -> Optional[TreeNode]:
        """
        在父节点下追加子节点

        Args:
            parent: None表示隐式根节点；节点句柄直接使用；名称先经广度优先查找
            name: 新节点名称（不检查唯一性）
            subtree: 可选的预构建子树，TreeNode或节点列表按引用接入

        Returns:
            新节点句柄；父节点不存在时记录告警并返回None，树保持不变
        """
        if parent is None:
            parent_node = self._root
        elif isinstance(parent, TreeNode):
            parent_node = parent
        else:
            parent_node = self.locate_subtree(parent)
            if parent_node is None:
                logger.warning(f"无法挂载到不存在的父节点: {parent} (节点 {name})")
                return None

        node = TreeNode(name, self.coerce_subtree(subtree))
        parent_node.add_child(node)
        return node

    def remove(self, name: str, start: Optional[TreeNode] = None) -> Optional[TreeNode]:
        """
        摘除节点及其全部后代

        Returns:
            被摘下的子树；节点不存在时记录告警并返回None
        """
        path = self.resolve_position_path(name, start)
        if path is None:
            logger.warning(f"无法删除不存在的节点: {name}")
            return None
        return self.remove_at(path, start)

    def remove_at(self, path: PositionPath, start: Optional[TreeNode] = None) -> TreeNode:
        """按已知位置路径摘除节点，路径必须与当前树状态一致"""
        if not path:
            raise ValueError("空路径指向起点本身，无法删除")
        parent = self.node_at(path[:-1], start)
        return parent.children.pop(path[-1])

    def copy(self) -> 'Tree':
        """深拷贝"""
        return Tree(self)

    # ========== 结构查询 ==========

    def locate_subtree(self, name: str, start: Optional[TreeNode] = None) -> Optional[TreeNode]:
        """按名称查找子树，找不到返回None"""
        path = self.resolve_position_path(name, start)
        if path is None:
            return None
        return self.node_at(path, start)

    def descendant_names(self, node_or_name: Union[str, TreeNode]) -> Optional[List[str]]:
        """
        获取节点之下所有名称（前序，不含自身）

        Args:
            node_or_name: 节点句柄（如 remove() 的返回值），或节点名称

        Returns:
            名称列表；给定名称不存在时返回None
        """
        if isinstance(node_or_name, TreeNode):
            node = node_or_name
        else:
            node = self.locate_subtree(node_or_name)
            if node is None:
                return None
        return [child.name for _, child in node.iter_preorder()]

    def names(self) -> List[str]:
        """树中全部节点名称"""
        return self.descendant_names(self._root)

    # ========== 路径解析 ==========

    def resolve_position_path(self, name: str,
                              start: Optional[TreeNode] = None) -> Optional[PositionPath]:
        """
        广度优先搜索到目标节点的位置路径

        从起点（默认整棵树）逐层访问，每个新发现的名称记录
        "父节点路径 + 自身下标"；一发现目标立即返回。
        已发现的名称不再访问，即使出现重名也保证终止（先发现者胜出，
        即最浅、最左的节点）。

        给定网络：
            hubA
              leafA
              leafB
              hubB
                leafC
                leafD

        resolve_position_path('leafD') 返回 PositionPath('0.2.1')。
        """
        start_node = self._start(start)
        queue = deque([(start_node.name, start_node, ())])
        seen = set()

        while queue:
            _, node, route = queue.popleft()
            for index, child in enumerate(node.children):
                if child.name in seen:
                    continue
                seen.add(child.name)
                child_route = route + (index,)
                if child.name == name:
                    return PositionPath(child_route)
                queue.append((child.name, child, child_route))

        return None

    def resolve_name_path(self, path: Union[PositionPath, List[int], Tuple[int, ...]],
                          start: Optional[TreeNode] = None) -> List[str]:
        """
        回放位置路径，读出每一跳的名称

        不做任何搜索；路径过期时可能得到错误名称或IndexError。
        """
        names = []
        node = self._start(start)
        for index in path:
            node = node.children[index]
            names.append(node.name)
        return names

    def trace(self, name: str, start: Optional[TreeNode] = None) -> Optional[List[str]]:
        """
        到目标节点每一跳的名称，最后一跳是目标自身

        找不到返回None。
        """
        path = self.resolve_position_path(name, start)
        if path is None:
            return None
        return self.resolve_name_path(path, start)

    # ========== 快照导出 ==========

    def walk(self, start: Optional[TreeNode] = None) -> Iterator[Tuple[PositionPath, TreeNode, TreeNode]]:
        """前序遍历，产出 (位置路径, 父节点, 节点)"""
        start_node = self._start(start)
        stack = [((index,), start_node, child)
                 for index, child in reversed(list(enumerate(start_node.children)))]
        while stack:
            route, parent, node = stack.pop()
            yield PositionPath(route), parent, node
            stack.extend((route + (index,), node, child)
                         for index, child in reversed(list(enumerate(node.children))))

    def as_dict(self, start: Optional[TreeNode] = None) -> Dict[str, Any]:
        """
        嵌套字典快照: {name: {child: {...}}}

        例如：
            tree.as_dict(tree.locate_subtree('hubA'))
        """
        start_node = self._start(start)
        result: Dict[str, Any] = {}
        mappings = {id(start_node): result}
        for _, parent, node in self.walk(start_node):
            mapping = mappings[id(parent)].setdefault(node.name, {})
            mappings[id(node)] = mapping
        return result

    def as_list(self, start: Optional[TreeNode] = None) -> List[Tuple[str, TreeNode]]:
        """顶层 (名称, 子树) 对的平铺列表"""
        return [(child.name, child) for child in self._start(start).children]

    def render_map(self, start: Optional[TreeNode] = None, indent: int = 3,
                   branch_marker: str = "*", leaf_marker: str = "`") -> str:
        """
        文本形式的网络拓扑图

        顶层节点和有子节点的节点用 branch_marker 标记，叶子用 leaf_marker。
        """
        lines = []
        for path, _, node in self.walk(start):
            depth = len(path)
            marker = branch_marker if depth == 1 or node.children else leaf_marker
            lines.append(' ' * (1 + indent * (depth - 1)) + f"{marker} {node.name}")

        if not lines:
            logger.warning("拓扑为空，没有可输出的节点")
            return ""
        return "\n".join(lines) + "\n"

    def print_map(self, start: Optional[TreeNode] = None, **kwargs) -> None:
        """打印网络拓扑图到标准输出"""
        print(self.render_map(start, **kwargs), end='')

    # ========== 特殊方法 ==========

    def __len__(self) -> int:
        return self._root.count()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve_position_path(name) is not None

    def __repr__(self) -> str:
        return f"Tree(top={self._root.child_names()}, nodes={len(self)})"
