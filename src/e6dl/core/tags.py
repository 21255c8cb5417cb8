"""
标签文件解析模块
把 tags.txt 解析为有序的标签组
"""
import logging
import os
from dataclasses import dataclass
from typing import List

from .constants import TagType, TAGS_TEMPLATE
from .errors import GrabError
from ..utils.paths import TAGS_FILE


logger = logging.getLogger(__name__)

_SECTION_TYPES = {tag_type.value: tag_type for tag_type in TagType}


@dataclass
class TagGroup:
    """一行标签构成的查询单元"""
    name: str
    tag_type: TagType


def ensure_tag_file(path: str = TAGS_FILE) -> bool:
    """标签文件不存在时写入模板

    Returns:
        是否新建了文件
    """
    if os.path.exists(path):
        return False

    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(TAGS_TEMPLATE)
    except OSError as e:
        raise GrabError(f"Could not create tag file {path}: {e}") from e

    print(f"{os.path.basename(path)}: created, add some tags and run again.")
    return True


def parse_tags(text: str) -> List[TagGroup]:
    """解析标签文件内容

    每个 [section] 下的每一行都是一个标签组，'#' 之后的内容视为注释。

    Raises:
        GrabError: 未知分组、分组外的标签或非数字的ID
    """
    groups = []
    current = None

    for line_no, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.split('#', 1)[0].strip()
        if not line:
            continue

        if line.startswith('[') and line.endswith(']'):
            section = line[1:-1].strip().lower()
            if section not in _SECTION_TYPES:
                raise GrabError(f"Line {line_no}: unknown section [{section}]")
            current = _SECTION_TYPES[section]
            continue

        if current is None:
            raise GrabError(f"Line {line_no}: tags must be placed under a section")

        line = " ".join(line.split())
        if current in (TagType.POOL, TagType.SINGLE) and not line.isdigit():
            raise GrabError(f"Line {line_no}: [{current.value}] expects a numeric ID, got {line!r}")

        groups.append(TagGroup(name=line, tag_type=current))

    return groups


def load_tag_groups(path: str = TAGS_FILE) -> List[TagGroup]:
    """读取并解析标签文件"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise GrabError(f"Could not read tag file {path}: {e}") from e

    groups = parse_tags(text)
    logger.info("Loaded %d tag groups from %s", len(groups), path)
    return groups
