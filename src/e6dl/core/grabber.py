"""
帖子抓取模块
把标签组解析为按目录划分的帖子集合
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from .blacklist import Blacklist
from .config import Config
from .constants import (
    TagType, MAX_PAGES, POSTS_PER_PAGE, LAST_RUN_DATE_FORMAT, SINGLE_POSTS_SET_NAME,
    CATEGORY_GENERAL, CATEGORY_ARTISTS, CATEGORY_POOLS, CATEGORY_SETS
)
from .errors import FetchError, GrabError
from .tags import TagGroup
from ..utils.formatters import format_file_name


logger = logging.getLogger(__name__)


@dataclass
class GrabbedPost:
    """一个待下载的文件"""
    file_name: str
    file_url: str
    file_size: int = 0


@dataclass
class PostSet:
    """下载到同一目录的一组帖子"""
    set_name: str
    category: str = ""
    posts: List[GrabbedPost] = field(default_factory=list)

    def __post_init__(self):
        if not self.set_name:
            raise ValueError("PostSet.set_name must not be empty")


def post_tags(post: dict) -> List[str]:
    """合并帖子各类别下的标签"""
    tags = post.get("tags") or {}
    if isinstance(tags, dict):
        return [tag for group in tags.values() if isinstance(group, list) for tag in group]
    if isinstance(tags, str):
        return tags.split()
    return list(tags)


def to_grabbed_post(post: dict, part_used_as_name: str) -> Optional[GrabbedPost]:
    """把 API 返回的帖子转换为 GrabbedPost

    Returns:
        没有可用文件URL（已删除或需要登录）时返回None
    """
    file_info = post.get("file") or {}
    url = file_info.get("url")
    if not url:
        return None

    file_name = format_file_name(post.get("id"), file_info.get("md5") or str(post.get("id")),
                                 file_info.get("ext"), part_used_as_name)
    return GrabbedPost(file_name=file_name, file_url=url, file_size=file_info.get("size") or 0)


class Grabber:
    """根据标签组抓取帖子

    grabbed_posts 每个标签组一个集合，grabbed_single_posts 收集按ID抓取的帖子。
    """

    def __init__(self, sender, config: Config = None, blacklist: Blacklist = None, today: date = None):
        self.sender = sender
        self.config = config or Config()
        self.blacklist = blacklist or Blacklist()
        self.today = today or date.today()
        self.grabbed_posts: List[PostSet] = []
        self.grabbed_single_posts = PostSet(SINGLE_POSTS_SET_NAME)
        self.blacklisted_count = 0
        self.unavailable_count = 0

    @classmethod
    def from_tags(cls, groups: List[TagGroup], sender, config: Config = None,
                  blacklist: Blacklist = None, today: date = None) -> "Grabber":
        """抓取所有标签组

        未传入黑名单时使用标签文件中的 [blacklist] 分组。

        Raises:
            GrabError: 任意标签组抓取失败
        """
        if blacklist is None:
            blacklist = Blacklist(g.name for g in groups if g.tag_type is TagType.BLACKLIST)
        logger.info("Using %d blacklist entries", len(blacklist))

        grabber = cls(sender, config=config, blacklist=blacklist, today=today)
        try:
            for group in groups:
                grabber.grab_group(group)
        except FetchError as e:
            raise GrabError(f"Failed to grab posts: {e}") from e

        logger.info("Grabbed %d sets and %d single posts (%d blacklisted, %d unavailable)",
                    len(grabber.grabbed_posts), len(grabber.grabbed_single_posts.posts),
                    grabber.blacklisted_count, grabber.unavailable_count)
        return grabber

    def grab_group(self, group: TagGroup):
        if group.tag_type in (TagType.GENERAL, TagType.ARTIST):
            self._grab_tags(group)
        elif group.tag_type is TagType.POOL:
            self._grab_pool(group)
        elif group.tag_type is TagType.SET:
            self._grab_set(group)
        elif group.tag_type is TagType.SINGLE:
            self._grab_single(group)
        # 黑名单分组在 from_tags 中处理

    def _filter_posts(self, posts: List[dict]) -> List[GrabbedPost]:
        """去掉被拉黑、没有文件的帖子，并按文件名去重"""
        grabbed = []
        seen_names = set()
        for post in posts:
            if self.blacklist.is_blacklisted(post_tags(post), post.get("rating", "")):
                self.blacklisted_count += 1
                continue
            item = to_grabbed_post(post, self.config.part_used_as_name)
            if item is None:
                self.unavailable_count += 1
                continue
            if item.file_name in seen_names:
                continue
            seen_names.add(item.file_name)
            grabbed.append(item)
        return grabbed

    def _search_all(self, query: str) -> List[dict]:
        """逐页搜索直到最后一页"""
        posts = []
        for page in range(1, MAX_PAGES + 1):
            page_posts = self.sender.search_posts(query, page)
            posts.extend(page_posts)
            if len(page_posts) < POSTS_PER_PAGE:
                break
        return posts

    def _add_set(self, set_name: str, category: str, raw_posts: List[dict]):
        posts = self._filter_posts(raw_posts)
        if not posts:
            logger.info("No downloadable posts for %s", set_name)
            return
        self.grabbed_posts.append(PostSet(set_name, category, posts))
        logger.info("%s: %d posts", set_name, len(posts))

    def _grab_tags(self, group: TagGroup):
        query = group.name
        last_run = self.config.last_run.get(group.name)
        if last_run:
            query = f"{query} date:>={last_run}"

        category = CATEGORY_ARTISTS if group.tag_type is TagType.ARTIST else CATEGORY_GENERAL
        self._add_set(group.name, category, self._search_all(query))
        self.config.last_run[group.name] = self.today.strftime(LAST_RUN_DATE_FORMAT)

    def _grab_pool(self, group: TagGroup):
        pool = self.sender.get_pool(int(group.name))
        set_name = str(pool.get("name") or group.name).replace("_", " ")
        self._add_set(set_name, CATEGORY_POOLS, self._search_all(f"pool:{group.name}"))

    def _grab_set(self, group: TagGroup):
        post_set = self.sender.find_set(group.name)
        if post_set is None:
            logger.warning("Set %s was not found", group.name)
            return
        set_name = post_set.get("name") or group.name
        self._add_set(set_name, CATEGORY_SETS, self._search_all(f"set:{post_set.get('shortname', group.name)}"))

    def _grab_single(self, group: TagGroup):
        post = self.sender.get_post(int(group.name))
        if post is None:
            return
        posts = self._filter_posts([post])
        existing = {p.file_name for p in self.grabbed_single_posts.posts}
        self.grabbed_single_posts.posts.extend(p for p in posts if p.file_name not in existing)
