"""
异常定义
"""


class CertificateMonitorError(Exception):
    """证书监控基础异常"""


class DomainSourceError(CertificateMonitorError):
    """无法读取域名列表，整个批次在探测前终止"""


class ConfigurationError(CertificateMonitorError):
    """配置无效"""
