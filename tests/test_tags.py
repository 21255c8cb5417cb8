import pytest

from e6dl.core.blacklist import Blacklist
from e6dl.core.constants import TagType
from e6dl.core.errors import GrabError
from e6dl.core.tags import TagGroup, ensure_tag_file, load_tag_groups, parse_tags


SAMPLE = """
# comment
[artists]
some_artist

[pools]
1234  # trailing comment

[general]
fox   rating:s
wolf

[single-post]
42

[blacklist]
gore
"""


def test_sections_become_ordered_groups():
    groups = parse_tags(SAMPLE)

    assert groups == [
        TagGroup("some_artist", TagType.ARTIST),
        TagGroup("1234", TagType.POOL),
        TagGroup("fox rating:s", TagType.GENERAL),
        TagGroup("wolf", TagType.GENERAL),
        TagGroup("42", TagType.SINGLE),
        TagGroup("gore", TagType.BLACKLIST),
    ]


def test_unknown_section_is_rejected():
    with pytest.raises(GrabError, match="unknown section"):
        parse_tags("[favourites]\nfox\n")


def test_tags_outside_a_section_are_rejected():
    with pytest.raises(GrabError):
        parse_tags("fox\n")


def test_pool_ids_must_be_numeric():
    with pytest.raises(GrabError, match="numeric"):
        parse_tags("[pools]\nmy pool\n")


def test_template_is_created_once_and_parses_empty(tmp_path):
    path = str(tmp_path / "tags.txt")

    assert ensure_tag_file(path) is True
    assert ensure_tag_file(path) is False
    assert load_tag_groups(path) == []


def test_missing_tag_file_cannot_be_loaded(tmp_path):
    with pytest.raises(GrabError):
        load_tag_groups(str(tmp_path / "tags.txt"))


def test_blacklist_matches_whole_lines():
    blacklist = Blacklist(["gore", "fox -solo", "rating:e wolf", "  "])

    assert len(blacklist) == 3
    assert blacklist.is_blacklisted(["Gore", "cat"])
    assert blacklist.is_blacklisted(["fox", "duo"])
    assert not blacklist.is_blacklisted(["fox", "solo"])
    assert blacklist.is_blacklisted(["wolf"], rating="e")
    assert not blacklist.is_blacklisted(["wolf"], rating="s")


def test_empty_blacklist_rejects_nothing():
    assert not Blacklist().is_blacklisted(["anything"], rating="e")
