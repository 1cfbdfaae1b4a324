"""
配置与输入验证器
"""
from typing import Dict, Any, List

from ..exceptions import ValidationError, ConfigError


class ConfigValidator:
    """配置验证器"""

    _BOOL_KEYS = ('memoize', 'strict', 'enable_logging')
    _STR_KEYS = ('system_name', 'version', 'log_level', 'log_format',
                 'map_branch_marker', 'map_leaf_marker')

    def validate_network_config(self, config: Dict[str, Any]) -> bool:
        """验证网络配置字典"""
        if not isinstance(config, dict):
            raise ConfigError(f"配置必须是字典: {type(config).__name__}")

        for key in self._BOOL_KEYS:
            if key in config and not isinstance(config[key], bool):
                raise ValidationError(
                    message=f"配置项必须是布尔值: {key}",
                    field=key,
                    value=config[key],
                    reason="invalid_type"
                )

        for key in self._STR_KEYS:
            if key in config and not isinstance(config[key], str):
                raise ValidationError(
                    message=f"配置项必须是字符串: {key}",
                    field=key,
                    value=config[key],
                    reason="invalid_type"
                )

        if 'map_indent' in config:
            indent = config['map_indent']
            if isinstance(indent, bool) or not isinstance(indent, int):
                raise ValidationError(
                    message="缩进宽度必须是整数",
                    field="map_indent",
                    value=indent,
                    reason="invalid_type"
                )

        if config.get('log_file') is not None and not isinstance(config['log_file'], str):
            raise ValidationError(
                message="日志文件路径必须是字符串",
                field="log_file",
                value=config['log_file'],
                reason="invalid_type"
            )

        return True

    def validate_node_name(self, name: Any) -> str:
        """验证节点名称：非空字符串"""
        if not isinstance(name, str):
            raise ValidationError(
                message="节点名称必须是字符串",
                field="name",
                value=name,
                reason="invalid_type"
            )
        if not name or name.isspace():
            raise ValidationError(
                message="节点名称不能为空",
                field="name",
                value=name,
                reason="empty_name"
            )
        return name

    def validate_topology_literal(self, literal: Any) -> bool:
        """
        验证嵌套的名称/子列表字面量

        格式: [name, [children...], name, [children...], ...]
        使用显式栈，深层拓扑不会触发递归上限。
        """
        stack: List[Any] = [literal]
        while stack:
            current = stack.pop()
            if not isinstance(current, (list, tuple)):
                raise ValidationError(
                    message="拓扑字面量的子节点必须是列表",
                    field="children",
                    value=current,
                    reason="invalid_type"
                )
            if len(current) % 2:
                raise ValidationError(
                    message="拓扑字面量必须由 名称/子列表 成对组成",
                    field="children",
                    value=list(current),
                    reason="odd_length"
                )
            for i in range(0, len(current), 2):
                self.validate_node_name(current[i])
                stack.append(current[i + 1])

        return True
