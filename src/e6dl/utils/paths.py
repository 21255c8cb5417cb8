import os
import sys

def get_program_root():
    """
    获取程序根目录（配置、标签文件、日志存储位置）

    情况1: 打包运行 - exe所在目录
    情况2: 直接运行 - 当前工作目录
    """
    if getattr(sys, 'frozen', False):
        # Nuitka/PyInstaller打包后运行：可执行文件所在目录
        return os.path.dirname(sys.executable)
    return os.getcwd()

PROGRAM_ROOT = get_program_root()

# 应用配置文件
CONFIG_FILE = os.path.join(PROGRAM_ROOT, "config.json")

# 标签文件
TAGS_FILE = os.path.join(PROGRAM_ROOT, "tags.txt")

# 日志目录（首次写日志时创建）
LOGS_DIR = os.path.join(PROGRAM_ROOT, "logs")

# 崩溃日志文件
CRASH_LOG_FILE = os.path.join(LOGS_DIR, "crash.log")

# 常规日志文件
APP_LOG_FILE = os.path.join(LOGS_DIR, "e6dl.log")

def get_set_dir(download_directory: str, set_name: str, category: str = "") -> str:
    """获取帖子集合的下载目录

    Args:
        download_directory: 下载根目录
        set_name: 已清理的集合名称（为空时不创建该层目录）
        category: 分类子目录，空字符串表示无分类

    Returns:
        以分隔符结尾的目录路径
    """
    parts = [part for part in (category, set_name) if part]
    return os.path.join(download_directory, *parts, "")
