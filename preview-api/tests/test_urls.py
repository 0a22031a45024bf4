import pytest

from app.services.errors import InvalidBaseURL
from app.services.urls import origin, resolve_url

BASE = "https://site.example/page"


@pytest.mark.parametrize(
    ("candidate", "expected"),
    [
        ("/img/foo.jpg", "https://site.example/img/foo.jpg"),
        ("//cdn.example/f.ico", "https://cdn.example/f.ico"),
        ("img/foo.jpg", "https://site.example/img/foo.jpg"),
        ("https://other.example/a.png", "https://other.example/a.png"),
        ("http://other.example/a.png", "http://other.example/a.png"),
    ],
)
def test_resolve_url(candidate: str, expected: str) -> None:
    assert resolve_url(candidate, BASE) == expected


def test_protocol_relative_ignores_base() -> None:
    assert resolve_url("//cdn.example/f.ico", "not a url") == "https://cdn.example/f.ico"


def test_unparsable_base_returns_candidate_unchanged() -> None:
    assert resolve_url("/img/foo.jpg", "not a url") == "/img/foo.jpg"
    assert resolve_url("img/foo.jpg", "") == "img/foo.jpg"


def test_origin_keeps_non_default_port_and_drops_path() -> None:
    assert origin("http://Site.Example:8080/a/b?c=d") == "http://site.example:8080"
    assert origin("https://site.example:443/a") == "https://site.example"
    assert origin("https://user:pw@site.example/a") == "https://site.example"


def test_origin_brackets_ipv6_hosts() -> None:
    assert origin("http://[::1]:8000/x") == "http://[::1]:8000"


@pytest.mark.parametrize("url", ["", "site.example/page", "mailto:a@b.c", "http://x:99999/"])
def test_origin_rejects_non_absolute_urls(url: str) -> None:
    with pytest.raises(InvalidBaseURL):
        origin(url)
