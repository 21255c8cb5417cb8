import logging
import os
import sys
import traceback

from .paths import APP_LOG_FILE, CRASH_LOG_FILE


def setup_logging(log_file: str = APP_LOG_FILE, level: int = logging.INFO) -> logging.Logger:
    """Configure logging so that:
    - everything at INFO and above is written to the log file
    - WARNING and above also go to stderr (progress bars own stdout)
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    # Prevent duplicate handlers if setup_logging() is called multiple times
    for h in list(logger.handlers):
        logger.removeHandler(h)

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logger.addHandler(stderr_handler)

    return logging.getLogger('e6dl')


def write_crash_log(crash_file: str = CRASH_LOG_FILE):
    """把当前异常的堆栈追加到崩溃日志"""
    log_dir = os.path.dirname(crash_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    with open(crash_file, "a", encoding="utf-8") as f:
        f.write("--- CRASH LOG ---\n")
        traceback.print_exc(file=f)
