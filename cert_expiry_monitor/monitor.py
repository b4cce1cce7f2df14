"""
证书过期监控主流程
"""
from typing import Iterable, List, Optional, Tuple
from datetime import datetime, timezone
import time

from .config import MonitorConfig
from .interfaces import CertificateFetcherInterface, DomainSourceInterface
from .models import CheckSummary, SiteResult
from .services.certificate_fetcher import CertificateFetcher
from .services.domain_source import DomainFileSource
from .services.logger import LoggerService
from .services.probe_scheduler import ProbeScheduler
from .services.result_aggregator import ResultAggregator
from .services.result_classifier import ResultClassifier


class CertificateExpiryMonitor:
    """证书过期监控器主类，文本报告和仪表盘共用"""

    def __init__(self, config: Optional[MonitorConfig] = None,
                 domain_source: Optional[DomainSourceInterface] = None,
                 fetcher: Optional[CertificateFetcherInterface] = None,
                 logger_service: Optional[LoggerService] = None):
        """
        初始化监控器

        Args:
            config: 配置，默认从环境变量读取
            domain_source: 域名来源，默认读取配置中的域名列表文件
            fetcher: 证书获取器，默认使用 CertificateFetcher
            logger_service: 日志服务
        """
        self.config = config or MonitorConfig.from_env()
        self.logger_service = logger_service or LoggerService(log_level=self.config.log_level)
        self.domain_source = domain_source or DomainFileSource(self.config.domains_file)
        # 套接字超时与单域名超时一致，被放弃的连接也会在有限时间内关闭
        self.fetcher = fetcher or CertificateFetcher(timeout=self.config.probe_timeout)
        self.scheduler = ProbeScheduler(self.fetcher, max_workers=self.config.max_workers)
        self.classifier = ResultClassifier(threshold_days=self.config.threshold_days)
        self.aggregator = ResultAggregator()

        self.logger_service.log_configuration_info(self.config.as_dict())

    def execute(self) -> Tuple[List[SiteResult], CheckSummary]:
        """
        读取域名列表并执行一次完整检查

        Returns:
            Tuple[List[SiteResult], CheckSummary]: 排序后的结果和统计

        Raises:
            DomainSourceError: 无法读取域名列表，不会开始任何探测
        """
        domains = self.domain_source.get_domains()
        return self.run_batch(domains)

    def run_batch(self, domains: Iterable[str]) -> Tuple[List[SiteResult], CheckSummary]:
        """
        并发检查一批域名

        Args:
            domains: 域名列表

        Returns:
            Tuple[List[SiteResult], CheckSummary]: 排序后的结果和统计
        """
        domains = list(domains)
        start = time.monotonic()

        # 统计只属于本批次，仪表盘的并发请求互不影响
        stats = self.logger_service.log_check_start(len(domains))

        outcomes = self.scheduler.run(domains, self.config.probe_timeout)
        now = datetime.now(timezone.utc)
        results = self.aggregator.aggregate(self.classifier.classify_all(outcomes, now))

        for result in results:
            self.logger_service.log_site_result(stats, result)

        self.logger_service.log_check_end(stats)
        self.logger_service.log_execution_summary(stats)

        summary = self.aggregator.summarize(results, time.monotonic() - start)
        return results, summary
