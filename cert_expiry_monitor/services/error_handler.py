"""
错误处理服务
"""
import socket
import ssl
import logging


# 获取证书的各个阶段，决定失败原因的前缀
STAGE_CONNECT = 'connect'
STAGE_HANDSHAKE = 'handshake'
STAGE_PARSE = 'certificate parse'


class FetchErrorHandler:
    """证书获取错误处理器"""

    def __init__(self):
        """初始化错误处理器"""
        self.logger = logging.getLogger(__name__)

    def describe(self, domain: str, stage: str, error: Exception) -> str:
        """
        记录一次获取证书的错误并生成失败原因

        Args:
            domain: 域名
            stage: 出错的阶段（connect / handshake / certificate parse）
            error: 异常对象

        Returns:
            str: 带阶段前缀的失败原因
        """
        error_message = str(error) or type(error).__name__

        self.logger.warning(
            f"域名 {domain} {stage} 阶段失败: {type(error).__name__}: {error_message}，"
            f"建议: {self._get_suggested_action(error)}"
        )

        return f"{stage} error: {error_message}"

    def _get_suggested_action(self, error: Exception) -> str:
        """
        获取错误的建议处理方案

        Args:
            error: 异常对象

        Returns:
            str: 建议的处理方案
        """
        error_message = str(error).lower()

        if isinstance(error, socket.timeout):
            return "检查网络连接，考虑增加超时时间"
        elif isinstance(error, socket.gaierror):
            return "检查域名是否正确，DNS服务器是否可用"
        elif isinstance(error, ConnectionRefusedError):
            return "检查目标服务器是否运行，端口是否正确"
        elif isinstance(error, ssl.SSLCertVerificationError):
            return "证书验证失败，可能是自签名证书、证书链不完整或主机名不匹配"
        elif isinstance(error, ssl.SSLError):
            if 'handshake failure' in error_message:
                return "SSL握手失败，检查SSL/TLS版本兼容性"
            return "SSL连接问题，检查服务器SSL配置"
        elif isinstance(error, (UnicodeError, ValueError)):
            return "域名格式无效，检查域名列表"
        elif 'network is unreachable' in error_message:
            return "网络不可达，检查网络连接和路由"
        elif 'no route to host' in error_message:
            return "无法路由到主机，检查防火墙和网络配置"
        else:
            return "检查网络连接和服务器状态"
