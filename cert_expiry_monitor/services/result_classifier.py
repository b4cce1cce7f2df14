"""
结果分类服务
"""
from datetime import datetime
from typing import Iterable, List

from ..models import (
    ERROR_DAYS_LEFT,
    UNKNOWN_EXPIRY,
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    ProbeOutcome,
    SiteResult,
    SiteStatus,
)


DEFAULT_THRESHOLD_DAYS = 7
EXPIRY_DATE_FORMAT = '%Y-%m-%d'
TIMED_OUT_MESSAGE = "timed out"


class ResultClassifier:
    """把获取结果转换为带状态和剩余天数的站点结果"""

    def __init__(self, threshold_days: int = DEFAULT_THRESHOLD_DAYS):
        """
        初始化分类器

        Args:
            threshold_days: 剩余天数小于该值时标记为 EXPIRED，默认7天
        """
        self.threshold_days = threshold_days

    def calculate_days_left(self, not_after: datetime, now: datetime) -> int:
        """
        计算距离过期的天数（向下取整，负数表示已过期）

        Args:
            not_after: 过期时间
            now: 当前时间

        Returns:
            int: 剩余天数
        """
        return (not_after - now).days

    def classify(self, domain: str, outcome: FetchOutcome, now: datetime) -> SiteResult:
        """
        分类单个域名的获取结果，纯函数

        Args:
            domain: 域名
            outcome: 获取结果
            now: 当前时间（带时区）

        Returns:
            SiteResult: 站点结果
        """
        if isinstance(outcome, FetchSuccess):
            days_left = self.calculate_days_left(outcome.not_after, now)
            status = SiteStatus.EXPIRED if days_left < self.threshold_days else SiteStatus.VALID
            return SiteResult(
                domain=domain,
                status=status,
                expiry_display=outcome.not_after.strftime(EXPIRY_DATE_FORMAT),
                days_left=days_left,
                expiry_date=outcome.not_after
            )

        if isinstance(outcome, FetchFailure):
            error_message = outcome.reason
        else:
            error_message = TIMED_OUT_MESSAGE

        return SiteResult(
            domain=domain,
            status=SiteStatus.ERROR,
            expiry_display=UNKNOWN_EXPIRY,
            days_left=ERROR_DAYS_LEFT,
            error_message=error_message
        )

    def classify_all(self, outcomes: Iterable[ProbeOutcome], now: datetime) -> List[SiteResult]:
        """使用同一个当前时间分类整批结果"""
        return [self.classify(item.domain, item.outcome, now) for item in outcomes]
