"""
域名列表读取服务
"""
from typing import Iterable, List
import logging

from ..exceptions import DomainSourceError
from ..interfaces import DomainSourceInterface


COMMENT_PREFIX = '#'


def parse_domain_lines(lines: Iterable[str]) -> List[str]:
    """
    解析域名列表文本

    每行一个域名，去掉首尾空白，跳过空行和以 # 开头的注释行。
    不做其它校验，格式错误的域名会在获取证书时失败。

    Args:
        lines: 文本行

    Returns:
        List[str]: 按原顺序排列的域名列表
    """
    domains = []
    for line in lines:
        domain = line.strip()
        if not domain or domain.startswith(COMMENT_PREFIX):
            continue
        domains.append(domain)
    return domains


class DomainFileSource(DomainSourceInterface):
    """从文本文件读取域名列表"""

    def __init__(self, path: str, encoding: str = "utf-8"):
        """
        初始化域名文件来源

        Args:
            path: 域名列表文件路径
            encoding: 文件编码
        """
        self.path = path
        self.encoding = encoding
        self.logger = logging.getLogger(__name__)

    def get_domains(self) -> List[str]:
        """
        读取域名列表

        Returns:
            List[str]: 域名列表

        Raises:
            DomainSourceError: 文件不存在或无法读取
        """
        try:
            with open(self.path, 'r', encoding=self.encoding) as f:
                domains = parse_domain_lines(f)
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error(f"读取域名列表文件 {self.path} 失败: {str(e)}")
            raise DomainSourceError(f"无法读取域名列表文件 {self.path}: {e}") from e

        if not domains:
            self.logger.warning(f"域名列表文件 {self.path} 中没有域名")
        else:
            self.logger.info(f"从 {self.path} 加载了 {len(domains)} 个域名")

        return domains
