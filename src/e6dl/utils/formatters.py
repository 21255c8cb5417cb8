"""
格式化工具函数
"""
import re

# 部分平台上不能出现在目录名中的字符
INVALID_DIR_CHARS = ('?', ':', '*', '<', '>', '"', '|')

_INVALID_DIR_RE = re.compile('[' + re.escape(''.join(INVALID_DIR_CHARS)) + ']')


def sanitize_dir_name(name: str) -> str:
    """将目录名中的非法字符替换为下划线"""
    return _INVALID_DIR_RE.sub('_', name)


def format_file_name(post_id, md5: str, ext: str, part_used_as_name: str) -> str:
    """根据配置生成帖子文件名

    Args:
        post_id: 帖子ID
        md5: 文件MD5
        ext: 文件扩展名（不带点）
        part_used_as_name: "id" 或 "md5"

    Returns:
        形如 "12345.png" 的文件名
    """
    stem = str(post_id) if part_used_as_name == "id" else md5
    ext = (ext or "").lstrip('.')
    return f"{stem}.{ext}" if ext else stem


def format_size(num_bytes: int) -> str:
    """把字节数格式化为易读的字符串"""
    size = float(num_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024 or unit == "GB":
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
