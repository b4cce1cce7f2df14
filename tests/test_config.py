"""
配置测试
"""
import os
import pytest
from unittest.mock import patch

from cert_expiry_monitor.config import (
    CLI_PROBE_TIMEOUT,
    DASHBOARD_PROBE_TIMEOUT,
    MonitorConfig,
)
from cert_expiry_monitor.exceptions import ConfigurationError


class TestMonitorConfig:
    """配置测试类"""

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        """测试默认配置"""
        config = MonitorConfig.from_env()

        assert config.domains_file == "urls.txt"
        assert config.host == "127.0.0.1"
        assert config.port == 3000
        assert config.probe_timeout == CLI_PROBE_TIMEOUT
        assert config.max_workers is None
        assert config.log_level == "INFO"
        assert config.threshold_days == 7

    @patch.dict(os.environ, {}, clear=True)
    def test_dashboard_default_timeout(self):
        """测试仪表盘默认超时时间"""
        config = MonitorConfig.from_env(default_timeout=DASHBOARD_PROBE_TIMEOUT)

        assert config.probe_timeout == 5.0

    @patch.dict(os.environ, {
        'DOMAINS_FILE': '/etc/domains.txt',
        'HOST': '0.0.0.0',
        'PORT': '8080',
        'PROBE_TIMEOUT': '2.5',
        'MAX_WORKERS': '16',
        'LOG_LEVEL': 'DEBUG'
    }, clear=True)
    def test_from_env(self):
        """测试从环境变量读取"""
        config = MonitorConfig.from_env()

        assert config.domains_file == "/etc/domains.txt"
        assert config.host == "0.0.0.0"
        assert config.port == 8080
        assert config.probe_timeout == 2.5
        assert config.max_workers == 16
        assert config.log_level == "DEBUG"

    @patch.dict(os.environ, {'PORT': 'eighty'}, clear=True)
    def test_invalid_env_number(self):
        """测试无效数值"""
        with pytest.raises(ConfigurationError, match="PORT"):
            MonitorConfig.from_env()

    def test_validate_valid(self, tmp_path):
        """测试有效配置"""
        path = tmp_path / "urls.txt"
        path.write_text("example.com\n", encoding="utf-8")

        result = MonitorConfig(domains_file=str(path)).validate()

        assert result['is_valid'] is True
        assert result['errors'] == []
        assert result['warnings'] == []

    def test_validate_invalid(self, tmp_path):
        """测试无效配置"""
        config = MonitorConfig(
            domains_file=str(tmp_path / "missing.txt"),
            port=70000,
            probe_timeout=0,
            max_workers=0,
            log_level="LOUD"
        )

        result = config.validate()

        assert result['is_valid'] is False
        assert len(result['errors']) == 3
        assert any("missing.txt" in warning for warning in result['warnings'])
        assert any("LOUD" in warning for warning in result['warnings'])

    def test_ensure_valid_raises(self):
        """测试无效配置抛出异常"""
        with pytest.raises(ConfigurationError, match="超时时间"):
            MonitorConfig(probe_timeout=-1).ensure_valid()

    def test_as_dict(self):
        """测试转换为字典"""
        data = MonitorConfig(port=4000).as_dict()

        assert data['port'] == 4000
        assert set(data) == {
            'domains_file', 'host', 'port', 'probe_timeout',
            'max_workers', 'log_level', 'threshold_days'
        }
