"""
表格拓扑导出器
"""
from typing import Any, Optional

import pandas as pd

from ...core.node import TreeNode
from ...core.tree import Tree
from ...exceptions import SerializationError

EXPORT_COLUMNS = ['name', 'parent', 'depth', 'position']


class TableExporter:
    """把拓扑树导出为 DataFrame，每行一个节点，按前序排列"""

    def to_frame(self, source: Any, start: Optional[TreeNode] = None) -> pd.DataFrame:
        """
        导出为 DataFrame

        列: name, parent (顶层为 None), depth (顶层为 1), position (点分位置路径)
        导出结果可以直接交给 TableImporter 的父节点列布局重新导入。
        """
        tree = getattr(source, 'tree', source)
        if not isinstance(tree, Tree):
            raise SerializationError(
                f"不支持的对象类型: {type(tree).__name__}",
                data_type=type(tree).__name__
            )

        records = [
            {
                'name': node.name,
                'parent': parent.name,
                'depth': path.depth,
                'position': path.string
            }
            for path, parent, node in tree.walk(start)
        ]
        return pd.DataFrame(records, columns=EXPORT_COLUMNS)
