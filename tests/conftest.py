"""
测试公共夹具
"""
import logging
import threading
from datetime import datetime, timezone, timedelta

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from cert_expiry_monitor.interfaces import CertificateFetcherInterface
from cert_expiry_monitor.models import FetchFailure, FetchSuccess


class StaticFetcher(CertificateFetcherInterface):
    """按域名返回预设结果的证书获取器"""

    def __init__(self, outcomes=None, delays=None):
        self.outcomes = outcomes or {}
        self.delays = delays or {}
        self.calls = []
        self._lock = threading.Lock()
        self.release = threading.Event()

    def fetch(self, domain):
        with self._lock:
            self.calls.append(domain)
        if domain in self.delays:
            # 模拟长时间无响应的服务器，测试结束时通过 release 释放
            self.release.wait(self.delays[domain])
        outcome = self.outcomes.get(domain)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome or FetchFailure(reason="connect error: [Errno 111] Connection refused")


@pytest.fixture(autouse=True)
def reset_package_logger():
    """每个测试后清除包日志器的处理器，避免绑定已关闭的输出流"""
    yield
    package_logger = logging.getLogger("cert_expiry_monitor")
    package_logger.handlers.clear()
    # pytest 会给非传递日志器挂载捕获处理器，恢复默认传递状态以免影响后续测试
    package_logger.propagate = True


@pytest.fixture
def make_der_certificate():
    """生成自签名 DER 证书"""
    def factory(not_after, not_before=None, common_name="example.com"):
        key = ec.generate_private_key(ec.SECP256R1())
        name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
        not_before = not_before or (not_after - timedelta(days=90))
        cert = (
            x509.CertificateBuilder()
            .subject_name(name)
            .issuer_name(name)
            .public_key(key.public_key())
            .serial_number(x509.random_serial_number())
            .not_valid_before(not_before)
            .not_valid_after(not_after)
            .sign(key, hashes.SHA256())
        )
        return cert.public_bytes(serialization.Encoding.DER)

    return factory


@pytest.fixture
def static_fetcher():
    return StaticFetcher


@pytest.fixture
def expiring_in():
    """返回距离现在指定天数过期的成功结果"""
    def factory(days, hours=12):
        now = datetime.now(timezone.utc)
        return FetchSuccess(not_after=now + timedelta(days=days, hours=hours))

    return factory
