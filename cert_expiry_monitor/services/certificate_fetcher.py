"""
证书获取服务
"""
import ssl
import socket
from datetime import datetime, timezone
from typing import Optional
import logging

from cryptography import x509

from ..interfaces import CertificateFetcherInterface
from ..models import FetchFailure, FetchOutcome, FetchSuccess
from .error_handler import FetchErrorHandler, STAGE_CONNECT, STAGE_HANDSHAKE, STAGE_PARSE


NO_CERTIFICATE_REASON = "no certificate found"


class CertificateFetcher(CertificateFetcherInterface):
    """通过 TLS 握手获取叶子证书的过期时间"""

    def __init__(self, port: int = 443, timeout: float = 10.0,
                 ssl_context: Optional[ssl.SSLContext] = None):
        """
        初始化证书获取器

        Args:
            port: SSL端口，默认443
            timeout: 单次网络操作的超时时间（秒）
            ssl_context: SSL上下文，默认使用系统受信任根证书并校验主机名
        """
        self.port = port
        self.timeout = timeout
        # 只读共享，所有并发任务共用同一个上下文
        self.ssl_context = ssl_context or ssl.create_default_context()
        self.logger = logging.getLogger(__name__)
        self.error_handler = FetchErrorHandler()

    def fetch(self, domain: str) -> FetchOutcome:
        """
        获取单个域名叶子证书的过期时间

        所有错误都转换为 FetchFailure，不会向调用方抛出异常。不做重试。

        Args:
            domain: 要检查的域名

        Returns:
            FetchOutcome: FetchSuccess 或 FetchFailure
        """
        try:
            return self._fetch(domain)
        except Exception as e:
            self.logger.exception(f"获取域名 {domain} 的证书时发生意外错误")
            return FetchFailure(reason=f"unexpected error: {e}")

    def _fetch(self, domain: str) -> FetchOutcome:
        try:
            sock = socket.create_connection((domain, self.port), timeout=self.timeout)
        except (OSError, UnicodeError, ValueError) as e:
            return self._failure(domain, STAGE_CONNECT, e)

        with sock:
            try:
                with self.ssl_context.wrap_socket(sock, server_hostname=domain) as ssock:
                    der_cert = ssock.getpeercert(binary_form=True)
            except (OSError, ValueError) as e:
                return self._failure(domain, STAGE_HANDSHAKE, e)

        if not der_cert:
            self.logger.warning(f"域名 {domain} 没有返回证书")
            return FetchFailure(reason=NO_CERTIFICATE_REASON)

        try:
            cert = x509.load_der_x509_certificate(der_cert)
        except ValueError as e:
            return self._failure(domain, STAGE_PARSE, e)

        try:
            not_after = self._parse_expiry_date(cert)
        except (ValueError, OverflowError, OSError) as e:
            return self._failure(domain, STAGE_PARSE, ValueError(f"invalid notAfter: {e}"))

        self.logger.debug(f"域名 {domain} 证书过期时间: {not_after.isoformat()}")
        return FetchSuccess(not_after=not_after)

    def _parse_expiry_date(self, cert: x509.Certificate) -> datetime:
        """
        解析证书过期时间

        Args:
            cert: 已解析的 X.509 证书

        Returns:
            datetime: UTC 过期时间
        """
        not_after = cert.not_valid_after_utc
        # 无法转换为绝对时间时抛出异常，不回退到默认值
        return datetime.fromtimestamp(not_after.timestamp(), tz=timezone.utc)

    def _failure(self, domain: str, stage: str, error: Exception) -> FetchFailure:
        reason = self.error_handler.describe(domain, stage, error)
        return FetchFailure(reason=reason)
