import os

import pytest

from e6dl.core.errors import FetchError
from e6dl.core.grabber import GrabbedPost, PostSet


class FakeSender:
    """Records calls instead of talking to the network."""

    def __init__(self, fail_urls=()):
        self.fail_urls = set(fail_urls)
        self.downloads = []
        self.safe_mode = False
        self.pages = {}
        self.pools = {}
        self.sets = {}
        self.posts = {}
        self.searches = []

    def download_image(self, url, expected_size):
        self.downloads.append((url, expected_size))
        if url in self.fail_urls:
            raise FetchError(f"HTTP 500 for {url}", url=url, status_code=500)
        return f"bytes of {url}".encode()

    def update_to_safe(self):
        self.safe_mode = True

    def search_posts(self, tags, page):
        self.searches.append((tags, page))
        pages = self.pages.get(tags, [])
        return pages[page - 1] if page <= len(pages) else []

    def get_pool(self, pool_id):
        return self.pools[pool_id]

    def find_set(self, short_name):
        return self.sets.get(short_name)

    def get_post(self, post_id):
        return self.posts.get(post_id)


def make_post(post_id, md5=None, ext="jpg", url="auto", tags=(), rating="s", size=100):
    """Build a post dict shaped like the e621 API response."""
    md5 = md5 or f"md5{post_id}"
    if url == "auto":
        url = f"https://static1.e621.net/data/{md5}.{ext}"
    return {
        "id": post_id,
        "file": {"url": url, "md5": md5, "ext": ext, "size": size},
        "tags": {"general": list(tags), "artist": []},
        "rating": rating,
    }


def make_set(set_name, category="", names=("a.jpg",)):
    posts = [GrabbedPost(name, f"http://x/{name}", 100) for name in names]
    return PostSet(set_name, category, posts)


@pytest.fixture
def sender():
    return FakeSender()


@pytest.fixture
def download_dir(tmp_path):
    return os.path.join(str(tmp_path), "downloads", "")
