"""
服务器拓扑树异常体系
"""
from datetime import datetime
from typing import Dict, Any, Optional


class BaseError(Exception):
    """所有异常的基类"""
    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        self.context = context or {}
        self.timestamp = datetime.now()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典，便于序列化"""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


# ==================== 配置和验证异常 ====================
class ConfigError(BaseError):
    """配置错误"""
    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, code="CONFIG_ERROR", details=details, **kwargs)


class ValidationError(BaseError):
    """数据验证错误"""
    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        reason: Optional[str] = None,
        **kwargs
    ):
        details = {
            "field": field,
            "value": value,
            "reason": reason
        }
        super().__init__(message, code="VALIDATION_ERROR", details=details, **kwargs)


# ==================== 树结构相关异常 ====================
class TreeError(BaseError):
    """树结构错误基类"""
    pass


class NodeError(TreeError):
    """节点操作错误"""
    pass


class ParentNotFoundError(NodeError):
    """父节点不存在，挂载操作不会修改树"""
    def __init__(self, parent_name: str, name: Optional[str] = None, **kwargs):
        message = f"父节点不存在: {parent_name}"
        if name:
            message += f" (无法挂载 {name})"
        super().__init__(
            message=message,
            code="PARENT_NOT_FOUND",
            details={"parent_name": parent_name, "name": name},
            **kwargs
        )


class DuplicateNodeError(NodeError):
    """
    节点名称重复

    phase 为 "reset" 时表示整棵树不可用（构造/重建注册表时发现），
    为 "attach" 时仅表示本次挂载被拒绝。
    """
    def __init__(self, name: str, phase: str = "reset", **kwargs):
        if phase == "attach":
            message = f"节点已存在，拒绝重复挂载: {name}"
        else:
            message = f"拓扑树损坏，节点名称重复: {name}"
        super().__init__(
            message=message,
            code="DUPLICATE_NODE",
            details={"name": name, "phase": phase},
            **kwargs
        )
        self.name = name
        self.phase = phase


# ==================== 导入导出异常 ====================
class TopologyImportError(BaseError):
    """拓扑导入过程异常"""
    def __init__(self, message: str, source: Optional[str] = None, **kwargs):
        super().__init__(
            message=f"导入失败: {message}",
            code="IMPORT_ERROR",
            details={"source": source},
            **kwargs
        )


class SerializationError(BaseError):
    """序列化异常"""
    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(
            message=f"序列化错误: {message}",
            code="SERIALIZATION_ERROR",
            details={"data_type": data_type},
            **kwargs
        )
