import gzip
import json
import logging

import pytest
import requests

from e6dl.core import api
from e6dl.core.errors import FetchError
from e6dl.core.sender import RequestSender, auth_from_env
from e6dl.utils import network


class FakeResponse:
    def __init__(self, status_code=200, content=b"", url="https://e621.net/x"):
        self.status_code = status_code
        self.content = content
        self.url = url
        self.closed = False

    def close(self):
        self.closed = True


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response


@pytest.fixture
def session(monkeypatch):
    fake = FakeSession(FakeResponse(content=b"image-bytes"))
    monkeypatch.setattr(network, "get_session", lambda: fake)
    return fake


class NoWait:
    def wait_if_needed(self):
        pass


def test_download_image_returns_bytes(session):
    sender = RequestSender(rate_limiter=NoWait())

    assert sender.download_image("https://static1.e621.net/a.png", 11) == b"image-bytes"
    url, kwargs = session.calls[0]
    assert url == "https://static1.e621.net/a.png"
    assert kwargs["headers"] is network.COMMON_HEADERS


def test_size_mismatch_only_warns(session, caplog):
    sender = RequestSender(rate_limiter=NoWait())

    with caplog.at_level(logging.WARNING):
        assert sender.download_image("https://static1.e621.net/a.png", 999) == b"image-bytes"
    assert "Size mismatch" in caplog.text


def test_http_error_status_raises_fetch_error(session):
    session.response = FakeResponse(status_code=404)

    with pytest.raises(FetchError) as exc_info:
        RequestSender(rate_limiter=NoWait()).download_image("https://static1.e621.net/a.png", 0)
    assert exc_info.value.status_code == 404
    assert session.response.closed


def test_transport_error_raises_fetch_error(session):
    session.error = requests.exceptions.ConnectionError("refused")

    with pytest.raises(FetchError) as exc_info:
        RequestSender(rate_limiter=NoWait()).download_image("https://static1.e621.net/a.png", 0)
    assert exc_info.value.url == "https://static1.e621.net/a.png"


def test_safe_mode_switches_api_host(session):
    session.response = FakeResponse(content=json.dumps({"posts": []}).encode())
    sender = RequestSender(rate_limiter=NoWait())

    sender.search_posts("fox", 1)
    sender.update_to_safe()
    sender.update_to_safe()
    sender.search_posts("fox", 1)

    assert session.calls[0][0] == "https://e621.net/posts.json"
    assert session.calls[1][0] == "https://e926.net/posts.json"
    assert session.calls[1][1]["params"] == {"tags": "fox", "page": 1, "limit": 320}
    assert sender.safe_mode is True


def test_missing_single_post_returns_none(session):
    session.response = FakeResponse(status_code=404)
    assert api.get_post(5, network.get_domain_config()) is None


def test_single_post_is_unwrapped(session):
    session.response = FakeResponse(content=json.dumps({"post": {"id": 5}}).encode())
    assert api.get_post(5, network.get_domain_config()) == {"id": 5}


def test_unknown_set_returns_none(session):
    session.response = FakeResponse(content=json.dumps({"post_sets": []}).encode())
    assert api.find_set("nope", network.get_domain_config()) is None


def test_unexpected_search_payload_raises(session):
    session.response = FakeResponse(content=b'{"success": false}')
    with pytest.raises(FetchError):
        api.search_posts("fox", 1, network.get_domain_config())


def test_parse_json_handles_raw_gzip():
    response = FakeResponse(content=gzip.compress(b'{"ok": true}'))
    assert network.parse_json_response(response) == {"ok": True}


def test_parse_json_rejects_garbage():
    with pytest.raises(FetchError):
        network.parse_json_response(FakeResponse(content=b"<html>"))


def test_rate_limiter_caps_requests_per_window():
    limiter = network.RateLimiter(max_requests=2, time_window=60)
    assert limiter.can_proceed()
    assert limiter.can_proceed()
    assert not limiter.can_proceed()


def test_auth_requires_both_variables(monkeypatch):
    monkeypatch.setenv("E621_USERNAME", "someone")
    monkeypatch.delenv("E621_API_KEY", raising=False)
    assert auth_from_env() is None

    monkeypatch.setenv("E621_API_KEY", "secret")
    assert auth_from_env() == ("someone", "secret")
