"""
树节点实体模块
每个节点代表网络中的一台服务器
"""

from typing import Optional, List, Iterator, Tuple


class TreeNode:
    """
    树节点 - (名称, 子节点列表)

    根节点是隐式的，名称为None，其子节点即顶层节点。
    子节点顺序对树语义无意义，但保持稳定，遍历和打印可复现。
    节点不记录父节点：同一棵子树可以被整体摘下再挂到别处。
    """

    __slots__ = ('name', 'children')

    def __init__(self, name: Optional[str] = None, children: Optional[List['TreeNode']] = None):
        """
        初始化树节点

        Args:
            name: 节点名称，隐式根节点为None
            children: 子节点列表，按引用保存（不复制）
        """
        self.name = name
        self.children: List['TreeNode'] = children if children is not None else []

    @property
    def is_root(self) -> bool:
        """是否为隐式根节点"""
        return self.name is None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    # ========== 树结构管理 ==========

    def add_child(self, child: 'TreeNode') -> 'TreeNode':
        """追加子节点并返回它"""
        self.children.append(child)
        return child

    def child_names(self) -> List[str]:
        return [child.name for child in self.children]

    def iter_preorder(self) -> Iterator[Tuple[int, 'TreeNode']]:
        """
        前序遍历所有后代（不含自身），产出 (相对深度, 节点)

        使用显式栈，子节点按存储顺序产出。
        """
        stack = [(1, child) for child in reversed(self.children)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            stack.extend((depth + 1, child) for child in reversed(node.children))

    def count(self) -> int:
        """后代节点数量（不含自身）"""
        return sum(1 for _ in self.iter_preorder())

    def clone(self) -> 'TreeNode':
        """深拷贝整棵子树，与原节点不共享任何列表"""
        copy = TreeNode(self.name)
        stack = [(self, copy)]
        while stack:
            source, target = stack.pop()
            for child in source.children:
                child_copy = TreeNode(child.name)
                target.children.append(child_copy)
                stack.append((child, child_copy))
        return copy

    # ========== 特殊方法 ==========

    def __repr__(self) -> str:
        label = "<root>" if self.name is None else self.name
        return f"TreeNode({label}, children={len(self.children)})"
