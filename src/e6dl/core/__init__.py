"""
核心业务逻辑模块

请求发送器依赖 utils.network，需要时请直接从 e6dl.core.sender 导入。
"""
from .errors import (
    E6dlError, ConfigError, MalformedConfigError, ConfigReadError, ConfigWriteError,
    FetchError, DownloadError, WriteFailedError, GrabError
)
from .config import Config, ConfigStore
from .constants import TagType, DEFAULT_CONFIG
from .tags import TagGroup, parse_tags, load_tag_groups, ensure_tag_file
from .blacklist import Blacklist
from .grabber import GrabbedPost, PostSet, Grabber
from .downloader import Downloader, save_file

__all__ = [
    'E6dlError',
    'ConfigError',
    'MalformedConfigError',
    'ConfigReadError',
    'ConfigWriteError',
    'FetchError',
    'DownloadError',
    'WriteFailedError',
    'GrabError',
    'Config',
    'ConfigStore',
    'TagType',
    'DEFAULT_CONFIG',
    'TagGroup',
    'parse_tags',
    'load_tag_groups',
    'ensure_tag_file',
    'Blacklist',
    'GrabbedPost',
    'PostSet',
    'Grabber',
    'Downloader',
    'save_file',
]
