"""
网络请求工具模块
处理HTTP会话、请求限速、响应解析等
"""
import gzip
import json
import logging
import time

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from fake_useragent import UserAgent

from .. import __version__
from ..core.constants import RATE_LIMIT_MAX_REQUESTS, RATE_LIMIT_TIME_WINDOW
from ..core.errors import FetchError


logger = logging.getLogger(__name__)


# === HTTP Session管理 ===
_session = None


def get_session() -> requests.Session:
    """获取配置好的Session实例"""
    global _session

    if _session is None:
        _session = requests.Session()

        # 配置重试策略
        retry_strategy = Retry(
            total=3,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "OPTIONS"],
            backoff_factor=1
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        _session.mount("http://", adapter)
        _session.mount("https://", adapter)

    return _session


def close_session():
    """关闭全局Session"""
    global _session
    if _session is not None:
        _session.close()
        _session = None


# === 域名配置 ===
DOMAINS = {
    'e621': {
        'base_url': 'https://e621.net',
        'api_base': 'https://e621.net',
    },
    'e926': {
        'base_url': 'https://e926.net',
        'api_base': 'https://e926.net',
    }
}


def get_domain_config(safe: bool = False) -> dict:
    """返回普通模式或安全模式的域名配置"""
    return DOMAINS['e926'] if safe else DOMAINS['e621']


# === 请求头配置 ===
user_agent_generator = UserAgent()
USER_AGENT = user_agent_generator.chrome

# 静态文件下载使用的请求头
COMMON_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "image/avif,image/webp,image/apng,video/*,*/*;q=0.8",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
}

# API 要求使用能标识客户端的 User-Agent
API_HEADERS = {
    "User-Agent": f"e6dl/{__version__} (tag downloader)",
    "Accept": "application/json",
}


# === 速率限制 ===
class RateLimiter:
    def __init__(self, max_requests: int = RATE_LIMIT_MAX_REQUESTS,
                 time_window: float = RATE_LIMIT_TIME_WINDOW):
        self.max_requests = max_requests
        self.time_window = time_window
        self.requests = []

    def can_proceed(self) -> bool:
        now = time.monotonic()
        self.requests = [t for t in self.requests if now - t < self.time_window]
        if len(self.requests) < self.max_requests:
            self.requests.append(now)
            return True
        return False

    def wait_if_needed(self):
        while not self.can_proceed():
            time.sleep(0.1)


# === HTTP请求 ===
def make_request(url: str, headers: dict, params: dict = None, auth=None,
                 timeout: int = 30, stream: bool = False) -> requests.Response:
    """发送 HTTP GET 请求

    传输层重试由 Session 的 Retry 策略负责。

    Raises:
        FetchError: 网络错误或非 200 响应
    """
    session = get_session()
    try:
        response = session.get(url, headers=headers, params=params, auth=auth,
                               timeout=timeout, stream=stream)
    except requests.exceptions.RequestException as e:
        raise FetchError(f"Request to {url} failed: {e}", url=url) from e

    if response.status_code != 200:
        status = response.status_code
        response.close()
        raise FetchError(f"Request to {url} returned HTTP {status}", url=url, status_code=status)

    return response


def parse_json_response(response: requests.Response):
    """解析 HTTP 响应中的 JSON 内容，处理 gzip 压缩和编码

    Raises:
        FetchError: 内容不是合法的 JSON
    """
    content = response.content

    # 服务器偶尔返回未解压的 gzip 内容
    if content.startswith(b'\x1f\x8b'):
        try:
            content = gzip.decompress(content)
        except OSError as e:
            logger.warning("gzip decompression failed: %s", e)

    try:
        return json.loads(content.decode("utf-8", errors="replace"))
    except json.JSONDecodeError as e:
        raise FetchError(f"Invalid JSON from {response.url}: {e}", url=response.url) from e
