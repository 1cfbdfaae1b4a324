"""
导入导出模块
在 pandas DataFrame 与拓扑树之间转换
"""

from .base_importer import DataImporter
from .table_importer import TableImporter
from .table_exporter import TableExporter

__all__ = [
    'DataImporter',
    'TableImporter',
    'TableExporter'
]
