"""
API请求模块
处理与 e621/e926 API 的交互
"""
import logging
from typing import List, Optional

from .constants import API_TIMEOUT_SECONDS, POSTS_PER_PAGE
from .errors import FetchError
from ..utils.network import API_HEADERS, make_request, parse_json_response


logger = logging.getLogger(__name__)


def search_posts(tags: str, page: int, domain_config: dict, auth=None,
                 limit: int = POSTS_PER_PAGE) -> List[dict]:
    """按标签搜索帖子（最新的在前）

    Args:
        tags: 以空格分隔的搜索标签
        page: 页码，从1开始
        domain_config: 域名配置
        auth: 可选的 (用户名, API key)
        limit: 每页数量

    Returns:
        帖子字典列表
    """
    api_url = f"{domain_config['api_base']}/posts.json"
    params = {"tags": tags, "page": page, "limit": limit}

    response = make_request(api_url, API_HEADERS, params=params, auth=auth, timeout=API_TIMEOUT_SECONDS)
    data = parse_json_response(response)
    posts = data.get("posts") if isinstance(data, dict) else None
    if not isinstance(posts, list):
        raise FetchError(f"Unexpected search response for tags {tags!r}", url=api_url)
    return posts


def get_post(post_id: int, domain_config: dict, auth=None) -> Optional[dict]:
    """获取单个帖子

    Returns:
        帖子字典，帖子不存在时返回None
    """
    api_url = f"{domain_config['api_base']}/posts/{post_id}.json"
    try:
        response = make_request(api_url, API_HEADERS, auth=auth, timeout=API_TIMEOUT_SECONDS)
    except FetchError as e:
        if e.status_code == 404:
            logger.warning("Post %s does not exist", post_id)
            return None
        raise

    data = parse_json_response(response)
    post = data.get("post") if isinstance(data, dict) else None
    if not isinstance(post, dict):
        raise FetchError(f"Unexpected response for post {post_id}", url=api_url)
    return post


def get_pool(pool_id: int, domain_config: dict, auth=None) -> dict:
    """获取图池信息（名称、帖子ID列表等）"""
    api_url = f"{domain_config['api_base']}/pools/{pool_id}.json"
    response = make_request(api_url, API_HEADERS, auth=auth, timeout=API_TIMEOUT_SECONDS)
    data = parse_json_response(response)
    if not isinstance(data, dict) or "name" not in data:
        raise FetchError(f"Unexpected response for pool {pool_id}", url=api_url)
    return data


def find_set(short_name: str, domain_config: dict, auth=None) -> Optional[dict]:
    """按短名称查找帖子集合

    Returns:
        集合信息字典，找不到时返回None
    """
    api_url = f"{domain_config['api_base']}/post_sets.json"
    params = {"search[shortname]": short_name}
    response = make_request(api_url, API_HEADERS, params=params, auth=auth, timeout=API_TIMEOUT_SECONDS)
    data = parse_json_response(response)
    if not isinstance(data, list):
        # 没有结果时API返回的是对象而不是列表
        return None

    for post_set in data:
        if isinstance(post_set, dict) and post_set.get("shortname") == short_name:
            return post_set
    return None
