"""
命令行入口
读取配置与标签文件，询问安全模式，抓取并下载所有帖子
"""
import argparse
import logging
import sys
from typing import Callable, Optional

from . import __version__
from .core.config import ConfigStore
from .core.downloader import Downloader
from .core.errors import ConfigError, E6dlError
from .core.grabber import Grabber
from .core.sender import RequestSender, auth_from_env
from .core.tags import ensure_tag_file, load_tag_groups
from .utils.logging_setup import setup_logging, write_crash_log
from .utils.network import close_session
from .utils.paths import CONFIG_FILE, TAGS_FILE


logger = logging.getLogger(__name__)


def parse_yes_no(text: str) -> Optional[bool]:
    """解析是/否回答，无法识别时返回None"""
    answer = text.lower().strip()
    if answer in ("y", "yes"):
        return True
    if answer in ("n", "no"):
        return False
    return None


def ask_yes_no(message: str, read: Optional[Callable[[], str]] = None) -> bool:
    """反复询问直到得到有效的是/否回答"""
    read = read or input
    print(f"{message} (Y/N)?")
    while True:
        answer = parse_yes_no(read())
        if answer is not None:
            return answer
        print("Incorrect input!")
        print("Try again!")


def should_enter_safe_mode(sender, read: Optional[Callable[[], str]] = None) -> bool:
    """询问是否进入安全模式，确认后切换请求发送器"""
    if ask_yes_no("Should enter safe mode", read):
        sender.update_to_safe()
        return True
    return False


def emergency_exit(message: str, read: Optional[Callable[[], str]] = None):
    """显示错误并等待用户按回车后退出"""
    print(message)
    read = read or input
    print("Press ENTER to close the application...")
    try:
        read()
    except EOFError:
        pass
    sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="e6dl",
        description="Download e621 posts for every tag group in the tag file.")
    parser.add_argument("--config", default=CONFIG_FILE, help="Path to config.json.")
    parser.add_argument("--tags", default=TAGS_FILE, help="Path to tags.txt.")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--safe", action="store_true", help="Enter safe mode without asking.")
    mode.add_argument("--no-prompt", action="store_true", help="Skip the safe mode question.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(args: argparse.Namespace) -> int:
    store = ConfigStore(args.config)
    try:
        store.ensure()
        config = store.load()
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        emergency_exit(f"Configuration error: {e}")

    if ensure_tag_file(args.tags):
        return 0
    groups = load_tag_groups(args.tags)

    sender = RequestSender(auth=auth_from_env())
    if args.safe:
        sender.update_to_safe()
    elif not args.no_prompt:
        should_enter_safe_mode(sender)

    grabber = Grabber.from_tags(groups, sender, config=config)
    downloader = Downloader(sender, config.download_directory, config.create_directories)
    downloader.cleanup_temp_files([*grabber.grabbed_posts, grabber.grabbed_single_posts])
    totals = downloader.download_all(grabber.grabbed_posts, grabber.grabbed_single_posts)

    # 只有全部下载完成才记录本次运行日期
    store.save(config)
    logger.info("Finished: %d downloaded, %d skipped", totals["downloaded"], totals["skipped"])
    print(f"Done: {totals['downloaded']} downloaded, {totals['skipped']} already present.")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    try:
        return run(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except E6dlError as e:
        logger.error("%s", e)
        return 1
    except Exception:
        write_crash_log()
        raise
    finally:
        close_session()


if __name__ == '__main__':
    sys.exit(main())
