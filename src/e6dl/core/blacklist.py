"""
黑名单模块
"""
from typing import Iterable, List, Set


class Blacklist:
    """按标签行过滤帖子

    每一行是若干条件的与：普通标签必须存在，"-tag" 必须不存在，
    "rating:x" 匹配帖子分级。任意一行匹配即视为拉黑。
    """

    def __init__(self, lines: Iterable[str] = ()):
        self.entries: List[List[str]] = [line.lower().split() for line in lines if line.strip()]

    def __len__(self):
        return len(self.entries)

    @staticmethod
    def _token_matches(token: str, tags: Set[str], rating: str) -> bool:
        if token.startswith('-') and len(token) > 1:
            return not Blacklist._token_matches(token[1:], tags, rating)
        if token.startswith('rating:'):
            value = token[len('rating:'):]
            return bool(value) and bool(rating) and value[0] == rating[0]
        return token in tags

    def is_blacklisted(self, tags: Iterable[str], rating: str = "") -> bool:
        """帖子是否被任意黑名单行命中"""
        tag_set = {tag.lower() for tag in tags}
        rating = (rating or "").lower()
        return any(
            all(self._token_matches(token, tag_set, rating) for token in entry)
            for entry in self.entries
        )
