"""
文本报告
"""
from typing import List, Optional, Sequence

from ..interfaces import ReportRendererInterface
from ..models import CheckSummary, SiteResult


HEADERS = ('DOMAIN', 'EXPIRY', 'STATUS', 'DAYS LEFT')
COLUMN_GAP = '  '


class TextReportRenderer(ReportRendererInterface):
    """固定宽度的表格报告"""

    def __init__(self, max_error_width: int = 60):
        """
        初始化文本报告渲染器

        Args:
            max_error_width: 错误信息在 EXPIRY 列中的最大宽度，超出部分截断
        """
        self.max_error_width = max_error_width

    def render(self, results: Sequence[SiteResult], summary: Optional[CheckSummary] = None) -> str:
        """
        渲染报告

        Args:
            results: 已排序的站点结果
            summary: 统计信息，提供时在末尾追加一行摘要

        Returns:
            str: 报告文本
        """
        rows = [self._format_row(result) for result in results]
        widths = [
            max([len(HEADERS[i])] + [len(row[i]) for row in rows])
            for i in range(len(HEADERS))
        ]

        lines = [
            self._join(HEADERS, widths),
            COLUMN_GAP.join('-' * width for width in widths)
        ]
        lines.extend(self._join(row, widths) for row in rows)

        if summary is not None:
            lines.append('')
            lines.append(self.format_summary(summary))

        return '\n'.join(lines) + '\n'

    def format_summary(self, summary: CheckSummary) -> str:
        return (
            f"Total: {summary.total_domains}, "
            f"VALID: {summary.valid_count}, "
            f"EXPIRED: {summary.expired_count}, "
            f"ERROR: {summary.error_count} "
            f"({summary.execution_time:.2f}s)"
        )

    def _format_row(self, result: SiteResult) -> List[str]:
        if result.is_error:
            expiry = self._truncate(result.error_message or result.expiry_display)
            days_left = '-'
        else:
            expiry = result.expiry_display
            days_left = str(result.days_left)
        return [result.domain, expiry, result.status.value, days_left]

    def _truncate(self, text: str) -> str:
        if len(text) <= self.max_error_width:
            return text
        return text[:self.max_error_width - 3] + '...'

    @staticmethod
    def _join(cells: Sequence[str], widths: Sequence[int]) -> str:
        # 最后一列右对齐
        parts = [cell.ljust(width) for cell, width in zip(cells[:-1], widths[:-1])]
        parts.append(cells[-1].rjust(widths[-1]))
        return COLUMN_GAP.join(parts)
