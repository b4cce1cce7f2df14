"""
数据模型定义
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Union


# ERROR 状态的剩余天数占位值，升序排序时排在最后
ERROR_DAYS_LEFT = 9999

# 未知过期时间的显示值
UNKNOWN_EXPIRY = "N/A"


class SiteStatus(str, Enum):
    """站点证书状态"""
    VALID = "VALID"
    EXPIRED = "EXPIRED"
    ERROR = "ERROR"


@dataclass(frozen=True)
class FetchSuccess:
    """握手成功并解析出叶子证书的过期时间"""
    not_after: datetime


@dataclass(frozen=True)
class FetchFailure:
    """连接、握手或证书解析失败"""
    reason: str


@dataclass(frozen=True)
class FetchTimedOut:
    """在超时时间内没有得到结果（状态未知，不等同于失败）"""


FetchOutcome = Union[FetchSuccess, FetchFailure, FetchTimedOut]


@dataclass(frozen=True)
class ProbeOutcome:
    """单个域名的探测结果"""
    domain: str
    outcome: FetchOutcome


@dataclass
class SiteResult:
    """展示层使用的单个站点检查结果"""
    domain: str
    status: SiteStatus
    expiry_display: str
    days_left: int
    expiry_date: Optional[datetime] = None
    error_message: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.status == SiteStatus.ERROR

    @property
    def is_expired(self) -> bool:
        """证书已经过了 not_after 时间"""
        return not self.is_error and self.days_left < 0


@dataclass
class CheckSummary:
    """检查结果统计"""
    total_domains: int
    valid_count: int
    expired_count: int
    error_count: int
    execution_time: float

    @property
    def has_problems(self) -> bool:
        return self.expired_count > 0 or self.error_count > 0
