"""
命令行入口
"""
import argparse
import sys
from typing import List, Optional

from .config import (
    CLI_PROBE_TIMEOUT,
    DASHBOARD_PROBE_TIMEOUT,
    ENV_VARS,
    MonitorConfig,
)
from .exceptions import ConfigurationError, DomainSourceError
from .monitor import CertificateExpiryMonitor
from .presentation.text_report import TextReportRenderer


EXIT_OK = 0
EXIT_PROBLEMS = 1
EXIT_FATAL = 2


def build_parser() -> argparse.ArgumentParser:
    env_help = "\n".join(f"  {name:<14} {description}" for name, description in ENV_VARS.items())
    parser = argparse.ArgumentParser(
        prog='cert-expiry-monitor',
        description="Check TLS certificate expiry for a list of domains.",
        epilog=f"environment variables:\n{env_help}",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('--log-level', help="日志级别（默认读取 LOG_LEVEL，INFO）")
    subparsers = parser.add_subparsers(dest='command', required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('-u', '--urls', help="域名列表文件（默认 urls.txt）")
    common.add_argument('-t', '--timeout', type=float, help="单个域名的超时时间（秒）")
    common.add_argument('--max-workers', type=int, help="最大并发数（默认每个域名一个）")

    subparsers.add_parser('check', parents=[common], help="打印文本报告")

    serve = subparsers.add_parser('serve', parents=[common], help="启动 HTML 仪表盘")
    serve.add_argument('-p', '--port', type=int, help="监听端口（默认 3000）")
    serve.add_argument('--host', help="监听地址（默认 127.0.0.1）")

    return parser


def load_config(args: argparse.Namespace) -> MonitorConfig:
    """读取环境变量配置，并用命令行参数覆盖"""
    default_timeout = DASHBOARD_PROBE_TIMEOUT if args.command == 'serve' else CLI_PROBE_TIMEOUT
    config = MonitorConfig.from_env(default_timeout=default_timeout)

    if args.urls:
        config.domains_file = args.urls
    if args.timeout is not None:
        config.probe_timeout = args.timeout
    if args.max_workers is not None:
        config.max_workers = args.max_workers
    if args.log_level:
        config.log_level = args.log_level
    if getattr(args, 'port', None) is not None:
        config.port = args.port
    if getattr(args, 'host', None):
        config.host = args.host

    return config.ensure_valid()


def run_check(config: MonitorConfig) -> int:
    """执行一次检查并打印报告"""
    monitor = CertificateExpiryMonitor(config)
    try:
        results, summary = monitor.execute()
    except DomainSourceError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FATAL

    sys.stdout.write(TextReportRenderer().render(results, summary))
    return EXIT_PROBLEMS if summary.has_problems else EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FATAL

    if args.command == 'serve':
        # 延迟导入，check 命令不需要加载 Flask
        from .presentation.dashboard import run_dashboard
        run_dashboard(config)
        return EXIT_OK

    return run_check(config)


if __name__ == '__main__':
    sys.exit(main())
