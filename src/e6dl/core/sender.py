"""
请求发送模块
所有 API 请求与文件下载的统一出口，负责安全模式切换、认证和限速
"""
import logging
import os
from typing import List, Optional

import requests

from . import api
from .constants import DOWNLOAD_TIMEOUT_SECONDS
from .errors import FetchError
from ..utils.formatters import format_size
from ..utils.network import COMMON_HEADERS, RateLimiter, get_domain_config, make_request


logger = logging.getLogger(__name__)


def auth_from_env() -> Optional[tuple]:
    """从环境变量读取 (用户名, API key)"""
    username = os.environ.get("E621_USERNAME")
    api_key = os.environ.get("E621_API_KEY")
    if username and api_key:
        return username, api_key
    return None


class RequestSender:
    """API 与文件下载的请求发送器"""

    def __init__(self, auth: tuple = None, rate_limiter: RateLimiter = None):
        self.auth = auth
        self.safe_mode = False
        self.domain_config = get_domain_config(safe=False)
        self.rate_limiter = rate_limiter or RateLimiter()

    def update_to_safe(self):
        """切换到安全模式，之后的所有请求都发往 e926"""
        if self.safe_mode:
            return
        self.safe_mode = True
        self.domain_config = get_domain_config(safe=True)
        logger.info("Safe mode enabled, using %s", self.domain_config['base_url'])

    # === API ===
    def search_posts(self, tags: str, page: int) -> List[dict]:
        self.rate_limiter.wait_if_needed()
        return api.search_posts(tags, page, self.domain_config, auth=self.auth)

    def get_post(self, post_id: int) -> Optional[dict]:
        self.rate_limiter.wait_if_needed()
        return api.get_post(post_id, self.domain_config, auth=self.auth)

    def get_pool(self, pool_id: int) -> dict:
        self.rate_limiter.wait_if_needed()
        return api.get_pool(pool_id, self.domain_config, auth=self.auth)

    def find_set(self, short_name: str) -> Optional[dict]:
        self.rate_limiter.wait_if_needed()
        return api.find_set(short_name, self.domain_config, auth=self.auth)

    # === 文件下载 ===
    def download_image(self, url: str, expected_size: int) -> bytes:
        """下载单个文件的全部字节

        Args:
            url: 文件URL
            expected_size: API 报告的文件大小，仅用于校验提示

        Raises:
            FetchError: 网络错误或非 200 响应
        """
        response = make_request(url, COMMON_HEADERS, timeout=DOWNLOAD_TIMEOUT_SECONDS, stream=True)
        try:
            content = response.content
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Download of {url} was interrupted: {e}", url=url) from e
        finally:
            response.close()

        if expected_size and len(content) != expected_size:
            logger.warning("Size mismatch for %s: expected %s, got %s",
                           url, format_size(expected_size), format_size(len(content)))
        return content
