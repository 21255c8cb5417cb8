"""
工具模块
"""
from .paths import (
    PROGRAM_ROOT,
    CONFIG_FILE,
    TAGS_FILE,
    LOGS_DIR,
    CRASH_LOG_FILE,
    APP_LOG_FILE,
    get_set_dir
)
from .formatters import sanitize_dir_name, format_file_name, format_size, INVALID_DIR_CHARS

__all__ = [
    'PROGRAM_ROOT',
    'CONFIG_FILE',
    'TAGS_FILE',
    'LOGS_DIR',
    'CRASH_LOG_FILE',
    'APP_LOG_FILE',
    'get_set_dir',
    'sanitize_dir_name',
    'format_file_name',
    'format_size',
    'INVALID_DIR_CHARS',
]
