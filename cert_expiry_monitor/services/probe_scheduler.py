"""
并发探测调度服务
"""
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Iterable, List, Optional
import logging

from ..interfaces import CertificateFetcherInterface
from ..models import FetchOutcome, FetchTimedOut, ProbeOutcome


class ProbeScheduler:
    """把证书获取并发分发到所有域名，并为每个域名设置超时"""

    def __init__(self, fetcher: CertificateFetcherInterface, max_workers: Optional[int] = None):
        """
        初始化调度器

        Args:
            fetcher: 证书获取器
            max_workers: 最大并发数，None 表示每个域名一个并发任务
        """
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers 必须大于0")

        self.fetcher = fetcher
        self.max_workers = max_workers
        self.logger = logging.getLogger(__name__)

    def run(self, domains: Iterable[str], per_domain_timeout: float) -> List[ProbeOutcome]:
        """
        并发探测所有域名

        每个域名都会得到一个结果（成功、失败或超时），返回顺序与输入顺序一致。

        Args:
            domains: 域名列表
            per_domain_timeout: 单个域名的超时时间（秒）

        Returns:
            List[ProbeOutcome]: 每个输入域名对应一个结果，顺序与输入一致
        """
        if per_domain_timeout <= 0:
            raise ValueError("per_domain_timeout 必须大于0")

        domains = list(domains)
        if not domains:
            return []

        workers = len(domains)
        if self.max_workers is not None:
            workers = min(workers, self.max_workers)

        self.logger.debug(f"开始并发探测 {len(domains)} 个域名，并发数 {workers}")

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="probe") as executor:
            futures = [
                executor.submit(self._run_unit, domain, per_domain_timeout)
                for domain in domains
            ]
            wait(futures)

        # 按提交顺序读取结果，排序时相同天数保持输入顺序
        outcomes = []
        for domain, future in zip(domains, futures):
            try:
                outcome = future.result()
            except Exception as e:
                # 调度任务自身崩溃，结果视为未知
                self.logger.error(f"域名 {domain} 的探测任务异常: {type(e).__name__}: {str(e)}")
                outcome = FetchTimedOut()
            outcomes.append(ProbeOutcome(domain=domain, outcome=outcome))

        return outcomes

    def _run_unit(self, domain: str, timeout: float) -> FetchOutcome:
        """
        在独立线程中获取证书，并与超时竞争

        超时后放弃该线程，其最终结果被丢弃。线程的生命周期受获取器的套接字超时限制。
        """
        result = {}

        def target():
            try:
                result['outcome'] = self.fetcher.fetch(domain)
            except Exception as e:
                result['error'] = e
                self.logger.exception(f"域名 {domain} 的获取线程异常: {type(e).__name__}: {str(e)}")

        worker = threading.Thread(target=target, name=f"fetch-{domain}", daemon=True)
        worker.start()
        worker.join(timeout)

        if worker.is_alive():
            self.logger.warning(f"域名 {domain} 在 {timeout} 秒内没有完成，标记为超时")
            return FetchTimedOut()

        if 'outcome' not in result:
            error = result.get('error')
            self.logger.error(f"域名 {domain} 的获取线程异常退出，结果视为未知: {error!r}")
            return FetchTimedOut()

        return result['outcome']
