"""
HTML 仪表盘测试
"""
import re
from unittest.mock import MagicMock

from cert_expiry_monitor.presentation.dashboard import create_app
from cert_expiry_monitor.config import MonitorConfig
from cert_expiry_monitor.exceptions import DomainSourceError
from cert_expiry_monitor.models import CheckSummary, ERROR_DAYS_LEFT, SiteResult, SiteStatus
from cert_expiry_monitor.monitor import CertificateExpiryMonitor


SITES = [
    SiteResult("stale.example", SiteStatus.EXPIRED, "2026-10-14", -5),
    SiteResult("fresh.example", SiteStatus.VALID, "2026-11-18", 30),
    SiteResult("down.example", SiteStatus.ERROR, "N/A", ERROR_DAYS_LEFT,
               error_message="connect error: Connection refused"),
]
SUMMARY = CheckSummary(total_domains=3, valid_count=1, expired_count=1, error_count=1, execution_time=0.1)


class TestDashboard:
    """仪表盘测试类"""

    def setup_method(self):
        """测试前准备"""
        self.monitor = MagicMock()
        self.monitor.execute.return_value = (SITES, SUMMARY)
        self.app = create_app(MonitorConfig(), monitor=self.monitor)
        self.client = self.app.test_client()

    def test_renders_sorted_sites(self):
        """测试渲染排序后的站点"""
        response = self.client.get('/')
        html = response.get_data(as_text=True)

        assert response.status_code == 200
        assert response.mimetype == 'text/html'
        positions = [html.index(site.domain) for site in SITES]
        assert positions == sorted(positions)
        assert html.count('<tr class="site">') == 3
        assert 'class="status-EXPIRED">EXPIRED' in html
        assert 'title="connect error: Connection refused"' in html
        assert str(ERROR_DAYS_LEFT) not in html

    def test_last_updated_timestamp(self):
        """测试最后更新时间"""
        html = self.client.get('/').get_data(as_text=True)

        assert re.search(r"Last updated: \d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} UTC", html)

    def test_reruns_batch_on_every_request(self):
        """测试每次请求都重新检查"""
        self.client.get('/')
        self.client.get('/')

        assert self.monitor.execute.call_count == 2

    def test_domain_source_failure(self):
        """测试无法读取域名列表时返回500"""
        self.monitor.execute.side_effect = DomainSourceError("无法读取")

        response = self.client.get('/')

        assert response.status_code == 500

    def test_empty_domain_list(self):
        """测试没有域名"""
        self.monitor.execute.return_value = ([], CheckSummary(0, 0, 0, 0, 0.0))

        html = self.client.get('/').get_data(as_text=True)

        assert "No domains configured." in html

    def test_with_real_monitor(self, tmp_path, static_fetcher, expiring_in):
        """测试与真实监控器配合"""
        path = tmp_path / "urls.txt"
        path.write_text("fresh.example\n# skip\nstale.example\n", encoding="utf-8")
        config = MonitorConfig(domains_file=str(path), probe_timeout=2)
        fetcher = static_fetcher({
            "fresh.example": expiring_in(30),
            "stale.example": expiring_in(2),
        })
        app = create_app(config, monitor=CertificateExpiryMonitor(config, fetcher=fetcher))

        html = app.test_client().get('/').get_data(as_text=True)

        assert html.index("stale.example") < html.index("fresh.example")
        assert "# skip" not in html
