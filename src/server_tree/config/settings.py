"""
网络拓扑配置设置
"""
from typing import Dict, Any, Optional
from dataclasses import dataclass, asdict

from ..exceptions import ConfigError


@dataclass
class NetworkSettings:
    """
    网络配置类
    使用dataclass确保配置的类型安全
    """

    # 系统基本配置
    system_name: str = "server_tree"
    version: str = "0.3.0"

    # 路由配置
    memoize: bool = True  # 缓存已解析的位置路径
    strict: bool = False  # 重复节点/父节点不存在时抛异常，而不是告警后返回None

    # 日志配置
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    enable_logging: bool = True

    # 拓扑图输出配置
    map_indent: int = 3
    map_branch_marker: str = "*"
    map_leaf_marker: str = "`"

    def __post_init__(self):
        """初始化后处理，验证配置"""
        self._validate_settings()

    def _validate_settings(self):
        """验证配置值"""
        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if not isinstance(self.log_level, str) or self.log_level.upper() not in valid_log_levels:
            raise ConfigError(
                message=f"无效的日志级别: {self.log_level}",
                config_key="log_level"
            )
        self.log_level = self.log_level.upper()

        if not isinstance(self.map_indent, int) or self.map_indent < 1 or self.map_indent > 16:
            raise ConfigError(
                message=f"缩进宽度必须在1-16之间: {self.map_indent}",
                config_key="map_indent"
            )

        for key in ("map_branch_marker", "map_leaf_marker"):
            marker = getattr(self, key)
            if not isinstance(marker, str) or len(marker) != 1:
                raise ConfigError(
                    message=f"标记必须是单个字符: {marker!r}",
                    config_key=key
                )

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'NetworkSettings':
        """从字典创建配置"""
        # 过滤无效的配置键
        valid_keys = {field.name for field in cls.__dataclass_fields__.values()}
        filtered_config = {k: v for k, v in config_dict.items() if k in valid_keys}

        return cls(**filtered_config)
