"""
表格拓扑导入器
从 pandas DataFrame 构建拓扑树
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Any, Optional

import pandas as pd

from ...core.node import TreeNode
from ...core.tree import Tree
from ...exceptions import TopologyImportError
from ...network import Network
from .base_importer import DataImporter

logger = logging.getLogger(__name__)


class TableImporter(DataImporter):
    """
    表格拓扑导入器

    支持两种布局：
    1. 父节点列：每行一个节点，parent 列为空表示顶层节点
    2. 缩进名称：名称前每 indent_width 个空格算一级，父节点为上方最近的更浅节点

    配置：
        name_column: 名称列，默认自动识别（含 name / 节点 / 名称 的列，否则第一列）
        parent_column: 父节点列名，默认 "parent"
        indent_width: 缩进宽度，默认 2
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.parent_column = self.config.get('parent_column', 'parent')
        self.indent_width = self.config.get('indent_width', 2)

        # 统计信息
        self.stats = {
            'rows_processed': 0,
            'nodes_parsed': 0,
            'trees_created': 0
        }

    def _validate_config(self):
        indent = self.config.get('indent_width', 2)
        if isinstance(indent, bool) or not isinstance(indent, int) or indent < 1:
            raise TopologyImportError(f"缩进宽度必须是正整数: {indent!r}", source="config")

    # ============ 抽象方法实现 ============

    def validate_source(self, source: Any) -> bool:
        """验证数据源：非空 DataFrame"""
        return isinstance(source, pd.DataFrame) and not source.empty and len(source.columns) > 0

    def extract_metadata(self, source: pd.DataFrame) -> Dict[str, Any]:
        """提取数据源元数据"""
        return {
            'rows': len(source),
            'columns': [str(col) for col in source.columns],
            'layout': self._detect_layout(source),
            'name_column': self._find_name_column(source),
            'import_time': datetime.now().isoformat(),
            'config': self.config
        }

    def parse_data(self, source: pd.DataFrame) -> List[Dict[str, Any]]:
        """
        解析表格为节点行

        Returns:
            [{'row_index', 'raw_name', 'name', 'level', 'parent_name'}, ...]
        """
        if not self.validate_source(source):
            raise TopologyImportError("无效的数据源，需要非空DataFrame", source=type(source).__name__)

        name_column = self._find_name_column(source)
        layout = self._detect_layout(source)

        parsed_nodes = []
        current_hierarchy = []  # 存储(level, name)元组

        for idx, row in source.iterrows():
            self.stats['rows_processed'] += 1
            raw_name = str(row[name_column]) if pd.notna(row[name_column]) else ''

            if not raw_name.strip():
                continue

            name = raw_name.strip()

            if layout == 'parent':
                parent_value = row[self.parent_column]
                parent_name = str(parent_value).strip() if pd.notna(parent_value) else None
                parent_name = parent_name or None
                level = None
            else:
                level = self._parse_level(raw_name)

                # 查找父节点
                parent_name = None
                for prev_level, prev_name in reversed(current_hierarchy):
                    if prev_level < level:
                        parent_name = prev_name
                        break

                # 更新层级路径
                current_hierarchy = [(l, n) for l, n in current_hierarchy if l < level]
                current_hierarchy.append((level, name))

            parsed_nodes.append({
                'row_index': idx,
                'raw_name': raw_name,
                'name': name,
                'level': level,
                'parent_name': parent_name
            })
            self.stats['nodes_parsed'] += 1

        return parsed_nodes

    def convert_to_tree(self, parsed_data: List[Dict[str, Any]]) -> Tree:
        """
        转换为拓扑树

        第一遍创建所有节点，第二遍按行顺序挂到父节点下，
        因此子节点行可以出现在父节点行之前。
        """
        nodes: Dict[str, TreeNode] = {}
        for node_data in parsed_data:
            name = node_data['name']
            if name in nodes:
                raise TopologyImportError(f"节点名称重复: {name} (第{node_data['row_index']}行)")
            nodes[name] = TreeNode(name)

        root = TreeNode()
        for node_data in parsed_data:
            parent_name = node_data['parent_name']
            if parent_name is None:
                parent = root
            elif parent_name in nodes:
                parent = nodes[parent_name]
            else:
                raise TopologyImportError(
                    f"父节点不存在: {parent_name} (节点 {node_data['name']})"
                )
            parent.add_child(nodes[node_data['name']])

        # 父节点链成环的行无法从根到达
        reachable = root.count()
        if reachable != len(nodes):
            raise TopologyImportError(f"父节点关系成环: {len(nodes) - reachable}个节点无法从根到达")

        self.stats['trees_created'] += 1
        logger.info(f"导入拓扑成功: {len(nodes)}个节点")
        return Tree(root)

    # ============ 高级方法 ============

    def read_table(self, file_path: str, sheet_name: Any = 0) -> pd.DataFrame:
        """
        读取表格文件，第0行为列名

        .csv 用 read_csv，.xlsx/.xls 用 read_excel（需要 openpyxl）。
        名称列按字符串读取，保留缩进空格。
        """
        path = Path(file_path)
        if not path.is_file():
            raise TopologyImportError(f"文件不存在: {file_path}", source=str(file_path))

        suffix = path.suffix.lower()
        if suffix == '.csv':
            return pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[''])
        if suffix in ('.xlsx', '.xls'):
            return pd.read_excel(path, sheet_name=sheet_name, dtype=str)
        raise TopologyImportError(f"不支持的文件类型: {suffix}", source=str(file_path))

    def import_file(self, file_path: str, sheet_name: Any = 0) -> Tree:
        """读取表格文件并导入为拓扑树"""
        tree = self.import_data(self.read_table(file_path, sheet_name))
        logger.info(f"从文件导入: {file_path}")
        return tree

    def import_network(self, source: pd.DataFrame, **kwargs) -> Network:
        """导入并直接创建 Network，kwargs 透传给 Network"""
        return Network(self.import_data(source), **kwargs)

    def get_import_statistics(self) -> Dict[str, Any]:
        """获取导入统计信息"""
        return self.stats.copy()

    def reset_statistics(self):
        """重置统计信息"""
        self.stats = {
            'rows_processed': 0,
            'nodes_parsed': 0,
            'trees_created': 0
        }

    # ============ 工具方法 ============

    def _detect_layout(self, source: pd.DataFrame) -> str:
        return 'parent' if self.parent_column in source.columns else 'indent'

    def _find_name_column(self, source: pd.DataFrame) -> Any:
        """查找节点名称列"""
        configured = self.config.get('name_column')
        if configured is not None:
            if configured not in source.columns:
                raise TopologyImportError(f"未找到名称列: {configured}")
            return configured

        for col in source.columns:
            label = str(col)
            if col == self.parent_column:
                continue
            if 'name' in label.lower() or '节点' in label or '名称' in label:
                return col

        return source.columns[0]

    def _parse_level(self, raw_name: str) -> int:
        """解析层级，每 indent_width 个前导空格算一级"""
        leading_spaces = len(raw_name) - len(raw_name.lstrip(' '))
        return leading_spaces // self.indent_width
