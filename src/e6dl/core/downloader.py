"""
文件下载模块
把帖子集合逐个下载到磁盘，处理目录划分、去重和进度显示
"""
import logging
import os
from typing import List

from tqdm import tqdm

from .constants import PART_SUFFIX
from .errors import WriteFailedError
from .grabber import PostSet
from ..utils.formatters import sanitize_dir_name
from ..utils.paths import get_set_dir


logger = logging.getLogger(__name__)


def save_file(file_path: str, content: bytes):
    """原子性地保存文件

    先写入 .part 临时文件，完整写入后再重命名为最终文件。

    Raises:
        WriteFailedError: 文件无法创建或写入
    """
    part_path = file_path + PART_SUFFIX
    try:
        with open(part_path, "wb") as f:
            f.write(content)
        os.replace(part_path, file_path)
    except OSError as e:
        raise WriteFailedError(f"Could not write {file_path}: {e}", path=file_path) from e


class Downloader:
    """按顺序下载所有帖子集合

    Args:
        sender: 提供 download_image(url, expected_size) 的请求发送器
        download_directory: 下载根目录（只读）
        create_directories: 是否为每个集合创建子目录
    """

    def __init__(self, sender, download_directory: str, create_directories: bool = True):
        self.sender = sender
        self.download_directory = download_directory
        self.create_directories = create_directories

    def set_directory(self, post_set: PostSet) -> str:
        """计算集合的目标目录（不修改 post_set）"""
        set_name = sanitize_dir_name(post_set.set_name) if self.create_directories else ""
        return get_set_dir(self.download_directory, set_name, post_set.category)

    def cleanup_temp_files(self, sets: List[PostSet]) -> int:
        """清理上次中断残留的 .part 临时文件

        只删除本次要下载的文件对应的 "<文件名>.part"，不触碰其他文件。

        Returns:
            删除的文件数
        """
        removed = 0
        for post_set in sets:
            file_dir = self.set_directory(post_set)
            for post in post_set.posts:
                part_path = os.path.join(file_dir, post.file_name + PART_SUFFIX)
                if not os.path.isfile(part_path):
                    continue
                try:
                    os.remove(part_path)
                    removed += 1
                except OSError as e:
                    logger.warning("Could not remove %s: %s", part_path, e)
        if removed:
            logger.info("Removed %d stale %s files", removed, PART_SUFFIX)
        return removed

    def download_posts(self, post_set: PostSet) -> dict:
        """下载单个集合

        帖子按时间从旧到新下载；目标文件已存在时跳过且不发起请求。
        任何获取或写入错误都会中止该集合剩余的下载并向上抛出。

        Returns:
            {"downloaded": 新下载数, "skipped": 重复跳过数}
        """
        label = sanitize_dir_name(post_set.set_name)
        file_dir = self.set_directory(post_set)
        stats = {"downloaded": 0, "skipped": 0}

        progress_bar = tqdm(total=len(post_set.posts), desc=f"Downloading: {label}", unit="file")
        try:
            for post in reversed(post_set.posts):
                file_path = os.path.join(file_dir, post.file_name)
                if os.path.exists(file_path):
                    progress_bar.set_postfix_str("Duplicate found: skipping...")
                    stats["skipped"] += 1
                    progress_bar.update(1)
                    continue

                if not os.path.isdir(file_dir):
                    try:
                        os.makedirs(file_dir, exist_ok=True)
                    except OSError as e:
                        raise WriteFailedError(f"Could not create {file_dir}: {e}", path=file_dir) from e

                progress_bar.set_postfix_str(post.file_name)
                content = self.sender.download_image(post.file_url, post.file_size)
                save_file(file_path, content)
                stats["downloaded"] += 1
                progress_bar.update(1)
        finally:
            progress_bar.close()

        logger.info("%s: %d downloaded, %d skipped", label, stats["downloaded"], stats["skipped"])
        return stats

    def download_all(self, sets: List[PostSet], singleton: PostSet) -> dict:
        """下载所有集合，按ID抓取的集合最后处理

        Returns:
            所有集合的下载统计之和
        """
        totals = {"downloaded": 0, "skipped": 0}
        for post_set in [*sets, singleton]:
            stats = self.download_posts(post_set)
            for key in totals:
                totals[key] += stats[key]
        return totals
