"""
服务接口定义
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from .models import CheckSummary, FetchOutcome, SiteResult


class DomainSourceInterface(ABC):
    """域名来源接口"""

    @abstractmethod
    def get_domains(self) -> List[str]:
        """获取域名列表"""
        pass


class CertificateFetcherInterface(ABC):
    """证书获取器接口"""

    @abstractmethod
    def fetch(self, domain: str) -> FetchOutcome:
        """获取单个域名叶子证书的过期时间，不抛出异常"""
        pass


class ReportRendererInterface(ABC):
    """报告渲染接口"""

    @abstractmethod
    def render(self, results: Sequence[SiteResult], summary: Optional[CheckSummary] = None) -> str:
        """把排序后的检查结果渲染为文本"""
        pass


class LoggerServiceInterface(ABC):
    """日志服务接口"""

    @abstractmethod
    def log_check_start(self, domain_count: int):
        """记录检查开始，返回本批次的统计对象"""
        pass

    @abstractmethod
    def log_site_result(self, stats, result: SiteResult):
        """记录单个站点结果"""
        pass

    @abstractmethod
    def log_check_end(self, stats):
        """记录检查结束"""
        pass
