"""
位置路径 - 以子节点下标序列定位节点
"""
from typing import Iterable, Iterator, List, Optional, Tuple, Union, overload

from ...exceptions import ValidationError


class PositionPath:
    """
    位置路径，表示从起点逐层下降到目标节点所需的子节点下标

    例如拓扑：
        hubA            -> 0
          lhubA         -> 0.0
            lleafB      -> 0.0.1
        hubB            -> 1

    不可变；可以像元组一样迭代、索引、求长度。
    路径只对计算它时的树状态有效。
    """

    __slots__ = ('_hops',)

    def __init__(self, hops: Union[str, Iterable[int]] = ()):
        """
        初始化位置路径

        Args:
            hops: 下标序列，或点分字符串如 "0.2.1"

        Raises:
            ValidationError: 下标不是非负整数
        """
        if isinstance(hops, str):
            hops = self._parse(hops)
        self._hops: Tuple[int, ...] = tuple(self._check(h) for h in hops)

    @staticmethod
    def _parse(path_string: str) -> List[int]:
        if not path_string:
            return []
        parts = path_string.split('.')
        for i, part in enumerate(parts):
            if not part.isdigit():
                raise ValidationError(
                    message=f"第{i + 1}段不是数字: {part}",
                    field="position_path",
                    value=path_string,
                    reason="non_numeric_segment"
                )
        return [int(part) for part in parts]

    @staticmethod
    def _check(hop) -> int:
        if isinstance(hop, bool) or not isinstance(hop, int) or hop < 0:
            raise ValidationError(
                message=f"路径下标必须是非负整数: {hop!r}",
                field="position_path",
                value=hop,
                reason="invalid_hop"
            )
        return hop

    @property
    def hops(self) -> Tuple[int, ...]:
        """下标元组"""
        return self._hops

    @property
    def depth(self) -> int:
        """跳数，等于目标相对起点的深度"""
        return len(self._hops)

    @property
    def string(self) -> str:
        """点分字符串表示"""
        return '.'.join(str(hop) for hop in self._hops)

    def parent(self) -> Optional['PositionPath']:
        """父节点路径，起点下的直接子节点返回空路径，空路径返回None"""
        if not self._hops:
            return None
        return PositionPath(self._hops[:-1])

    def child(self, index: int) -> 'PositionPath':
        """第index个子节点的路径"""
        return PositionPath(self._hops + (index,))

    def is_descendant_of(self, other: 'PositionPath') -> bool:
        """是否位于other之下（严格后代）"""
        other_hops = other.hops
        if len(self._hops) <= len(other_hops):
            return False
        return self._hops[:len(other_hops)] == other_hops

    def is_ancestor_of(self, other: 'PositionPath') -> bool:
        return other.is_descendant_of(self)

    def is_shifted_by_removal_of(self, removed: 'PositionPath') -> bool:
        """
        判断删除removed处的节点后，本路径是否失效

        与removed同一父节点、下标更大的兄弟及其后代会整体前移一位；
        removed本身及其后代也不再可达。
        """
        if not removed.hops:
            return False
        prefix = removed.hops[:-1]
        level = len(prefix)
        if len(self._hops) <= level or self._hops[:level] != prefix:
            return False
        return self._hops[level] >= removed.hops[-1]

    # ========== 序列协议 ==========

    def __len__(self) -> int:
        return len(self._hops)

    def __iter__(self) -> Iterator[int]:
        return iter(self._hops)

    @overload
    def __getitem__(self, index: int) -> int: ...

    @overload
    def __getitem__(self, index: slice) -> 'PositionPath': ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return PositionPath(self._hops[index])
        return self._hops[index]

    def __bool__(self) -> bool:
        return bool(self._hops)

    # ========== 特殊方法 ==========

    def __str__(self) -> str:
        return self.string

    def __repr__(self) -> str:
        return f"PositionPath('{self.string}')"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PositionPath):
            return self._hops == other._hops
        if isinstance(other, (list, tuple)):
            return list(self._hops) == list(other)
        return NotImplemented

    def __lt__(self, other: 'PositionPath') -> bool:
        """逐段比较，前缀相同时短的更小"""
        return self._hops < other.hops

    def __hash__(self) -> int:
        return hash(self._hops)
