"""
常量定义
"""
from enum import Enum


class TagType(Enum):
    """标签文件中的分组类型"""
    GENERAL = "general"
    ARTIST = "artists"
    POOL = "pools"
    SET = "sets"
    SINGLE = "single-post"
    BLACKLIST = "blacklist"


# 默认配置（写入磁盘时的字段名）
DEFAULT_CONFIG = {
    "createDirectories": True,
    "downloadDirectory": "downloads/",
    "lastRun": {},
    "partUsedAsName": "md5",
}

# 文件命名方式
NAME_PARTS = ("id", "md5")

# 分类子目录
CATEGORY_GENERAL = "General"
CATEGORY_ARTISTS = "Artists"
CATEGORY_POOLS = "Pools"
CATEGORY_SETS = "Sets"

# 按ID单独抓取的帖子集合
SINGLE_POSTS_SET_NAME = "Single Posts"

# API 分页
POSTS_PER_PAGE = 320
MAX_PAGES = 750

# API 速率限制（每个时间窗口内的请求数，窗口单位为秒）
RATE_LIMIT_MAX_REQUESTS = 2
RATE_LIMIT_TIME_WINDOW = 1

# 超时（秒）
API_TIMEOUT_SECONDS = 30
DOWNLOAD_TIMEOUT_SECONDS = 60

# 临时文件后缀
PART_SUFFIX = ".part"

# lastRun 中使用的日期格式
LAST_RUN_DATE_FORMAT = "%Y-%m-%d"

# 首次运行时写入的标签文件模板
TAGS_TEMPLATE = """\
# Every line below a section is one tag group.
# Lines starting with '#' are ignored.

[artists]

[pools]
# pool IDs, one per line

[sets]
# set short names, one per line

[single-post]
# post IDs, one per line

[general]
# e.g. fox rating:s

[blacklist]
# e.g. gore
"""
