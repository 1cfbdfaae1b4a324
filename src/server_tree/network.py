"""
服务器网络主入口
在拓扑树之上提供对端管理、名称唯一性检查和路由缓存
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Any, Union

from .config.settings import NetworkSettings
from .config.validator import ConfigValidator
from .core.node import TreeNode
from .core.path import PositionPath
from .core.tree import Tree, SubtreeLike
from .exceptions import DuplicateNodeError, ParentNotFoundError


# ========== 注册表条目 ==========

@dataclass(frozen=True)
class Unrouted:
    """已知节点，尚未缓存路由"""


@dataclass(frozen=True)
class Routed:
    """已知节点，并缓存了从隐式根节点出发的位置路径"""
    path: PositionPath


RouteEntry = Union[Unrouted, Routed]

UNROUTED = Unrouted()


class Network:
    """
    服务器网络 - 带路由缓存和简单完整性检查的拓扑树

    Network 独占一棵 Tree。绕过 Network 直接修改 tree 会使缓存失效，
    之后必须调用 reset_registry()。
    """

    def __init__(
            self,
            tree: Any = None,
            memoize: Optional[bool] = None,
            config: Optional[Dict[str, Any]] = None
    ):
        """
        初始化网络

        Args:
            tree: 已有的 Tree（直接使用，不复制），也可以是节点图或成对字面量
            memoize: 是否缓存路由，None 表示沿用配置（默认开启）
            config: 配置字典，见 NetworkSettings

        Raises:
            DuplicateNodeError: 传入的树中存在重名节点
        """
        self.validator = ConfigValidator()
        if config:
            self.validator.validate_network_config(config)
        self.settings = NetworkSettings.from_dict(config) if config else NetworkSettings()
        if memoize is not None:
            self.settings.memoize = bool(memoize)

        # 初始化日志
        self._setup_logging()
        self.logger = logging.getLogger(__name__)

        if tree is None:
            self._tree = Tree()
        elif isinstance(tree, Tree):
            self._tree = tree
        else:
            self._tree = Tree(tree)

        self._seen: Dict[str, RouteEntry] = {}
        self._cache_hits = 0
        self._cache_misses = 0

        # 建立注册表，顺便校验名称唯一性
        self.reset_registry()

        self.logger.info(
            f"网络初始化完成: {len(self._seen)}个节点, 路由缓存={'开启' if self.memoize else '关闭'}"
        )

    def _setup_logging(self):
        """
        配置日志系统

        根日志器已有处理器时 basicConfig 不做任何事；日志文件因此
        单独挂在包日志器上，同一路径只挂一次。
        """
        if not self.settings.enable_logging:
            return
        level = getattr(logging, self.settings.log_level)
        logging.basicConfig(level=level, format=self.settings.log_format)

        if self.settings.log_file:
            self._attach_log_file(level)

    def _attach_log_file(self, level: int) -> None:
        package_logger = logging.getLogger(__package__)
        path = os.path.abspath(self.settings.log_file)
        for handler in package_logger.handlers:
            if isinstance(handler, logging.FileHandler) and handler.baseFilename == path:
                return

        handler = logging.FileHandler(path, encoding='utf-8')
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(self.settings.log_format))
        package_logger.addHandler(handler)
        if package_logger.level == logging.NOTSET or package_logger.level > level:
            package_logger.setLevel(level)

    @staticmethod
    def close_log_files() -> None:
        """关闭并移除包日志器上的日志文件处理器"""
        package_logger = logging.getLogger(__package__)
        for handler in list(package_logger.handlers):
            if isinstance(handler, logging.FileHandler):
                package_logger.removeHandler(handler)
                handler.close()
        package_logger.setLevel(logging.NOTSET)

    @property
    def tree(self) -> Tree:
        """所属的拓扑树"""
        return self._tree

    @property
    def memoize(self) -> bool:
        return self.settings.memoize

    # ========== 注册表 ==========

    def reset_registry(self) -> None:
        """
        从当前树状态重建名称注册表并清空路由缓存

        直接修改 tree 之后必须调用。

        Raises:
            DuplicateNodeError: 发现重名节点，树不可用
        """
        seen: Dict[str, RouteEntry] = {}
        for name in self._tree.names():
            if name in seen:
                raise DuplicateNodeError(name, phase="reset")
            seen[name] = UNROUTED
        self._seen = seen
        self.logger.debug(f"注册表已重建: {len(seen)}个节点")

    def has_peer(self, name: str) -> bool:
        """是否已知该节点（查注册表，不搜索树）"""
        return name in self._seen

    def _cached_route(self, name: str) -> Optional[PositionPath]:
        if not self.memoize:
            return None
        entry = self._seen.get(name)
        if isinstance(entry, Routed):
            return entry.path
        return None

    def _reject_duplicates(self, name: str, children: Optional[List[TreeNode]]) -> bool:
        """挂载前检查新名称及子树内名称；返回True表示拒绝"""
        incoming = [name]
        if children is not None:
            incoming.extend(self._tree.descendant_names(TreeNode(None, children)))

        seen_here = set()
        for candidate in incoming:
            if candidate in self._seen or candidate in seen_here:
                if self.settings.strict:
                    raise DuplicateNodeError(candidate, phase="attach")
                self.logger.warning(f"尝试挂载已存在的节点: {candidate}")
                return True
            seen_here.add(candidate)
        return False

    # ========== 对端管理 ==========

    def attach_to_self(self, name: str, subtree: SubtreeLike = None) -> Optional[TreeNode]:
        """
        把节点挂到顶层，即直接相连的对端

        Args:
            name: 对端名称，全网唯一
            subtree: 可选的已有子树；会触发一次注册表重建

        Returns:
            新节点句柄；名称重复时返回None
        """
        self.validator.validate_node_name(name)
        children = None if subtree is None else self._tree.coerce_subtree(subtree)
        if self._reject_duplicates(name, children):
            return None

        node = self._tree.insert(None, name, children)
        self._register(name, children)
        return node

    def attach_to_name(self, parent_name: str, name: str,
                       subtree: SubtreeLike = None) -> Optional[TreeNode]:
        """
        把节点挂到指定父节点之下

        Returns:
            新节点句柄；名称重复或父节点不存在时返回None
        """
        self.validator.validate_node_name(name)
        children = None if subtree is None else self._tree.coerce_subtree(subtree)
        if self._reject_duplicates(name, children):
            return None

        if not self.has_peer(parent_name):
            if self.settings.strict:
                raise ParentNotFoundError(parent_name, name)
            self.logger.warning(f"无法挂载到不存在的父节点: {parent_name} (节点 {name})")
            return None

        # 父节点路由已缓存时直接定位，省去一次搜索
        parent_path = self._cached_route(parent_name)
        parent = parent_name if parent_path is None else self._tree.node_at(parent_path)

        node = self._tree.insert(parent, name, children)
        if node is None:
            if self.settings.strict:
                raise ParentNotFoundError(parent_name, name)
            return None

        self._register(name, children)
        return node

    def _register(self, name: str, children: Optional[List[TreeNode]]) -> None:
        if children:
            # 批量导入的名称一次性重建
            self.reset_registry()
        else:
            self._seen[name] = UNROUTED

    def detach(self, name: str) -> Optional[List[str]]:
        """
        从网络中拆分节点（split）

        Returns:
            被拆下节点之下所有名称（不含自身）；未知节点返回None
        """
        if not self.has_peer(name):
            return None

        path = self._cached_route(name)
        if path is None:
            path = self._tree.resolve_position_path(name)
            if path is None:
                return None

        subtree = self._tree.remove_at(path)
        names = self._tree.descendant_names(subtree)

        del self._seen[name]
        for descendant in names:
            self._seen.pop(descendant, None)

        self._invalidate_after_removal(path)
        self.logger.debug(f"拆分节点 {name}: 共 {len(names) + 1} 个节点离开网络")
        return names

    def _invalidate_after_removal(self, removed: PositionPath) -> None:
        """删除节点后，右侧兄弟及其后代的缓存路径前移失效"""
        for peer, entry in self._seen.items():
            if isinstance(entry, Routed) and entry.path.is_shifted_by_removal_of(removed):
                self._seen[peer] = UNROUTED

    # ========== 路由 ==========

    def trace(self, name: str) -> Optional[List[str]]:
        """
        从本节点到目标的每一跳名称，最后一跳是目标自身

        开启缓存时，命中直接回放位置路径，不做搜索。
        """
        cached = self._cached_route(name)
        if cached is not None:
            self._cache_hits += 1
            self.logger.debug(f"路由缓存命中: {name} -> {cached}")
            return self._tree.resolve_name_path(cached)

        self._cache_misses += 1
        path = self._tree.resolve_position_path(name)
        if path is None:
            self.logger.debug(f"未找到节点: {name}")
            return None

        names = self._tree.resolve_name_path(path)
        if self.memoize and name in self._seen:
            self._seen[name] = Routed(path)
        return names

    def hop_count(self, name: str) -> Optional[int]:
        """
        到目标的跳数，直接相连的对端为1跳

            hubA        - 1 hop
              leafA     - 2 hops
              hubB      - 2 hops
                leafB   - 3 hops
        """
        path = self.trace(name)
        if path is None:
            return None
        return len(path)

    # ========== 输出 ==========

    def render_map(self) -> str:
        """按配置的缩进和标记输出拓扑图"""
        return self._tree.render_map(
            indent=self.settings.map_indent,
            branch_marker=self.settings.map_branch_marker,
            leaf_marker=self.settings.map_leaf_marker
        )

    def print_map(self) -> None:
        print(self.render_map(), end='')

    def get_stats(self) -> Dict[str, Any]:
        """获取网络统计信息"""
        return {
            'peers': len(self._seen),
            'routed': sum(1 for entry in self._seen.values() if isinstance(entry, Routed)),
            'cache_hits': self._cache_hits,
            'cache_misses': self._cache_misses,
            'memoize': self.memoize,
            'strict': self.settings.strict,
        }

    # ========== 特殊方法 ==========

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, name: object) -> bool:
        return name in self._seen

    def __repr__(self) -> str:
        return f"Network(peers={len(self._seen)}, memoize={self.memoize})"
