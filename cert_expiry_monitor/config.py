"""
配置管理
"""
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging

from .exceptions import ConfigurationError


DEFAULT_DOMAINS_FILE = 'urls.txt'
DEFAULT_HOST = '127.0.0.1'
DEFAULT_PORT = 3000

# 不同前端使用不同的单域名超时时间
CLI_PROBE_TIMEOUT = 10.0
DASHBOARD_PROBE_TIMEOUT = 5.0

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

# 环境变量及其说明
ENV_VARS = {
    'DOMAINS_FILE': '域名列表文件路径',
    'HOST': '仪表盘监听地址',
    'PORT': '仪表盘监听端口',
    'PROBE_TIMEOUT': '单个域名的超时时间（秒）',
    'MAX_WORKERS': '最大并发数',
    'LOG_LEVEL': '日志级别'
}

logger = logging.getLogger(__name__)


def _env_number(name: str, convert, default):
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return convert(value.strip())
    except ValueError as e:
        raise ConfigurationError(f"环境变量 {name} 的值无效: {value!r}") from e


@dataclass
class MonitorConfig:
    """证书监控配置"""
    domains_file: str = DEFAULT_DOMAINS_FILE
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    probe_timeout: float = CLI_PROBE_TIMEOUT
    max_workers: Optional[int] = None
    log_level: str = 'INFO'
    threshold_days: int = 7

    @classmethod
    def from_env(cls, default_timeout: float = CLI_PROBE_TIMEOUT) -> 'MonitorConfig':
        """
        从环境变量读取配置

        Args:
            default_timeout: 未设置 PROBE_TIMEOUT 时使用的超时时间

        Returns:
            MonitorConfig: 配置

        Raises:
            ConfigurationError: 数值类环境变量无法解析
        """
        return cls(
            domains_file=os.getenv('DOMAINS_FILE', DEFAULT_DOMAINS_FILE),
            host=os.getenv('HOST', DEFAULT_HOST),
            port=_env_number('PORT', int, DEFAULT_PORT),
            probe_timeout=_env_number('PROBE_TIMEOUT', float, default_timeout),
            max_workers=_env_number('MAX_WORKERS', int, None),
            log_level=os.getenv('LOG_LEVEL', 'INFO')
        )

    def validate(self) -> Dict[str, Any]:
        """
        验证配置

        Returns:
            Dict[str, Any]: 验证结果
        """
        result = {
            'is_valid': True,
            'errors': [],
            'warnings': []
        }

        if not self.domains_file:
            result['errors'].append("域名列表文件路径不能为空")
        elif not os.path.isfile(self.domains_file):
            result['warnings'].append(f"域名列表文件不存在: {self.domains_file}")

        if not 0 < self.port < 65536:
            result['errors'].append(f"端口超出范围: {self.port}")

        if self.probe_timeout <= 0:
            result['errors'].append(f"超时时间必须大于0: {self.probe_timeout}")
        elif self.probe_timeout > 60:
            result['warnings'].append(f"超时时间较长({self.probe_timeout}秒)，页面响应可能很慢")

        if self.max_workers is not None and self.max_workers < 1:
            result['errors'].append(f"最大并发数必须大于0: {self.max_workers}")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            result['warnings'].append(f"未知的日志级别 {self.log_level}，将使用 INFO")

        if result['errors']:
            result['is_valid'] = False

        return result

    def ensure_valid(self) -> 'MonitorConfig':
        """验证配置，无效时抛出 ConfigurationError"""
        validation = self.validate()
        for warning in validation['warnings']:
            logger.warning(warning)
        if not validation['is_valid']:
            raise ConfigurationError("; ".join(validation['errors']))
        return self

    def as_dict(self) -> Dict[str, Any]:
        return {
            'domains_file': self.domains_file,
            'host': self.host,
            'port': self.port,
            'probe_timeout': self.probe_timeout,
            'max_workers': self.max_workers,
            'log_level': self.log_level,
            'threshold_days': self.threshold_days
        }
