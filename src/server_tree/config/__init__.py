"""
配置模块
"""

from .settings import NetworkSettings
from .validator import ConfigValidator

__all__ = ['NetworkSettings', 'ConfigValidator']
