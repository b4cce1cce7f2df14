"""
结果汇总服务
"""
from typing import Iterable, List

from ..models import CheckSummary, SiteResult, SiteStatus


class ResultAggregator:
    """汇总并排序站点结果"""

    def aggregate(self, results: Iterable[SiteResult]) -> List[SiteResult]:
        """
        按剩余天数升序排序（稳定排序），ERROR 结果始终排在最后

        Args:
            results: 站点结果

        Returns:
            List[SiteResult]: 排序后的新列表
        """
        return sorted(results, key=lambda result: (result.is_error, result.days_left))

    def summarize(self, results: Iterable[SiteResult], execution_time: float = 0.0) -> CheckSummary:
        """
        统计各状态的数量

        Args:
            results: 站点结果
            execution_time: 执行时间（秒）

        Returns:
            CheckSummary: 统计信息
        """
        results = list(results)
        counts = {status: 0 for status in SiteStatus}
        for result in results:
            counts[result.status] += 1

        return CheckSummary(
            total_domains=len(results),
            valid_count=counts[SiteStatus.VALID],
            expired_count=counts[SiteStatus.EXPIRED],
            error_count=counts[SiteStatus.ERROR],
            execution_time=execution_time
        )
