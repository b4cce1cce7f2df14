"""
HTML 仪表盘
"""
from datetime import datetime, timezone
from typing import Optional
import logging

from flask import Flask, render_template

from ..config import DASHBOARD_PROBE_TIMEOUT, MonitorConfig
from ..exceptions import DomainSourceError
from ..monitor import CertificateExpiryMonitor


LAST_UPDATED_FORMAT = '%Y-%m-%d %H:%M:%S UTC'

logger = logging.getLogger(__name__)


def create_app(config: Optional[MonitorConfig] = None,
               monitor: Optional[CertificateExpiryMonitor] = None) -> Flask:
    """
    创建仪表盘应用

    每次请求都会重新执行完整检查，不在请求之间缓存结果。

    Args:
        config: 配置，默认从环境变量读取（超时默认5秒）
        monitor: 监控器，默认根据配置创建

    Returns:
        Flask: 应用
    """
    config = config or MonitorConfig.from_env(default_timeout=DASHBOARD_PROBE_TIMEOUT)
    monitor = monitor or CertificateExpiryMonitor(config)

    app = Flask(__name__)

    @app.route('/')
    def index():
        try:
            sites, summary = monitor.execute()
        except DomainSourceError as e:
            logger.error(f"无法生成仪表盘: {str(e)}")
            return "Failed to load domain list", 500

        last_updated = datetime.now(timezone.utc).strftime(LAST_UPDATED_FORMAT)
        return render_template('index.html', sites=sites, summary=summary,
                               last_updated=last_updated)

    return app


def run_dashboard(config: MonitorConfig):
    """启动仪表盘服务"""
    app = create_app(config)
    logger.info(f"SSL Dashboard live at http://{config.host}:{config.port}")
    app.run(host=config.host, port=config.port)
