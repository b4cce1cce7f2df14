"""
日志服务
"""
import os
import logging
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional
from ..interfaces import LoggerServiceInterface
from ..models import SiteResult, SiteStatus


DEFAULT_LOGGER_NAME = "cert_expiry_monitor"


class BatchStats:
    """单个批次的执行统计，每次检查独立一份，并发批次之间不共享"""

    def __init__(self, total_domains: int):
        self.start_time = datetime.now(timezone.utc)
        self.end_time: Optional[datetime] = None
        self.total_domains = total_domains
        self.valid = 0
        self.expired = 0
        self.errors: List[Dict[str, Any]] = []


class LoggerService(LoggerServiceInterface):
    """日志服务实现"""

    def __init__(self, logger_name: str = DEFAULT_LOGGER_NAME, log_level: Optional[str] = None):
        """
        初始化日志服务

        Args:
            logger_name: 日志器名称，默认为包日志器，各模块的日志器都会传递到这里
            log_level: 日志级别，如果为None则从环境变量读取
        """
        self.logger_name = logger_name
        self.log_level = log_level or os.getenv('LOG_LEVEL', 'INFO')

        self.logger = logging.getLogger(logger_name)
        self._configure_logger()

    def _configure_logger(self):
        """配置日志器"""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        self.logger.setLevel(level)

        # 避免重复添加处理器
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(level)

            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            handler.setFormatter(formatter)

            self.logger.addHandler(handler)
        else:
            for handler in self.logger.handlers:
                handler.setLevel(level)

        self.logger.propagate = False

    def log_check_start(self, domain_count: int) -> BatchStats:
        """
        记录检查开始

        Args:
            domain_count: 要检查的域名数量

        Returns:
            BatchStats: 本批次的统计，后续日志调用需传入
        """
        stats = BatchStats(domain_count)
        self.logger.info(f"开始SSL证书检查，共 {domain_count} 个域名")
        return stats

    def log_site_result(self, stats: BatchStats, result: SiteResult):
        """
        记录单个站点结果

        Args:
            stats: 本批次的统计
            result: 站点结果
        """
        if result.status == SiteStatus.VALID:
            stats.valid += 1
            self.logger.info(
                f"证书正常 - 域名: {result.domain}, "
                f"过期时间: {result.expiry_display}, "
                f"剩余天数: {result.days_left} 天"
            )
        elif result.status == SiteStatus.EXPIRED:
            stats.expired += 1
            if result.is_expired:
                detail = f"已过期: {abs(result.days_left)} 天"
            else:
                detail = f"剩余天数: {result.days_left} 天"
            self.logger.warning(
                f"证书即将过期或已过期 - 域名: {result.domain}, "
                f"过期时间: {result.expiry_display}, {detail}"
            )
        else:
            stats.errors.append({
                'domain': result.domain,
                'error_message': result.error_message
            })
            self.logger.error(
                f"证书检查失败 - 域名: {result.domain}, "
                f"错误: {result.error_message}"
            )

    def log_check_end(self, stats: BatchStats):
        """记录检查结束"""
        stats.end_time = datetime.now(timezone.utc)

        summary = self.get_execution_summary(stats)

        self.logger.info(f"SSL证书检查完成，总执行时间: {summary['duration_seconds']:.2f} 秒")
        self.logger.info(
            f"检查统计: 总计 {summary['total_domains']} 个域名, "
            f"VALID {summary['valid']} 个, "
            f"EXPIRED {summary['expired']} 个, "
            f"ERROR {summary['error_count']} 个"
        )

    def log_configuration_info(self, config: Dict[str, Any]):
        """
        记录配置信息

        Args:
            config: 配置信息字典
        """
        self.logger.info("系统配置信息:")
        for key, value in config.items():
            self.logger.info(f"  {key}: {value}")

    def get_execution_summary(self, stats: BatchStats) -> Dict[str, Any]:
        """
        获取执行摘要

        Args:
            stats: 批次统计

        Returns:
            Dict[str, Any]: 执行摘要信息
        """
        duration = 0
        if stats.end_time:
            duration = (stats.end_time - stats.start_time).total_seconds()

        return {
            'start_time': stats.start_time.isoformat(),
            'end_time': stats.end_time.isoformat() if stats.end_time else None,
            'duration_seconds': duration,
            'total_domains': stats.total_domains,
            'valid': stats.valid,
            'expired': stats.expired,
            'error_count': len(stats.errors),
            'errors': stats.errors
        }

    def log_execution_summary(self, stats: BatchStats):
        """记录执行摘要，最多列出前5个错误"""
        summary = self.get_execution_summary(stats)

        if not summary['errors']:
            return

        self.logger.info(f"错误数量: {summary['error_count']}")
        for i, error in enumerate(summary['errors'][:5], 1):
            self.logger.info(f"  错误 {i}: {error['domain']} - {error['error_message']}")

        if len(summary['errors']) > 5:
            self.logger.info(f"  ... 还有 {len(summary['errors']) - 5} 个错误")
