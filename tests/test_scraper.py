"""Tests for URL handling, page fetching and tag extraction."""

from __future__ import annotations

import pytest
import requests

import config
from conftest import FakeResponse
from models import TagRecord
from scraper import (
    FetchError,
    InvalidURLError,
    extract_tags,
    fetch_html,
    is_valid_url,
    normalize_url,
    prepare_url,
)


# -----------------------------
# URLs
# -----------------------------
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("example.com", "https://example.com"),
        ("  example.com/path?q=1  ", "https://example.com/path?q=1"),
        ("http://example.com", "http://example.com"),
        ("HTTPS://Example.com", "HTTPS://Example.com"),
        ("", ""),
        ("   ", ""),
    ],
)
def test_normalize_url(raw: str, expected: str) -> None:
    assert normalize_url(raw) == expected


@pytest.mark.parametrize(
    ("url", "valid"),
    [
        ("https://example.com", True),
        ("http://example.com/a", True),
        ("ftp://example.com", False),
        ("https://", False),
        ("example.com", False),
    ],
)
def test_is_valid_url(url: str, valid: bool) -> None:
    assert is_valid_url(url) is valid


@pytest.mark.parametrize("raw", ["", "   ", "https://", "http:///only-a-path"])
def test_prepare_url_rejects_invalid_input(raw: str) -> None:
    with pytest.raises(InvalidURLError):
        prepare_url(raw)


def test_prepare_url_adds_scheme() -> None:
    assert prepare_url(" acme.example ") == "https://acme.example"


# -----------------------------
# Fetching
# -----------------------------
def test_fetch_direct_returns_page_text(fake_get) -> None:
    fake = fake_get(FakeResponse(text="<html></html>"))

    html = fetch_html("https://acme.example", timeout=3, relay_url="")

    assert html == "<html></html>"
    assert fake.calls[0]["url"] == "https://acme.example"
    assert fake.calls[0]["params"] is None
    assert fake.calls[0]["timeout"] == 3
    assert "Mozilla" in fake.calls[0]["headers"]["User-Agent"]


def test_fetch_uses_configured_timeout(fake_get, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "FETCH_TIMEOUT_SECONDS", 7.5)
    fake = fake_get(FakeResponse(text=""))

    fetch_html("https://acme.example")

    assert fake.calls[0]["timeout"] == 7.5


def test_fetch_through_relay_reads_contents(fake_get) -> None:
    fake = fake_get(FakeResponse(payload={"contents": "<title>Hi</title>", "status": {"http_code": 200}}))

    html = fetch_html("https://acme.example", relay_url="https://relay.example/get")

    assert html == "<title>Hi</title>"
    assert fake.calls[0]["url"] == "https://relay.example/get"
    assert fake.calls[0]["params"] == {"url": "https://acme.example"}


def test_fetch_uses_configured_relay(fake_get, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "RELAY_URL", "https://relay.example/get")
    fake = fake_get(FakeResponse(payload={"contents": ""}))

    assert fetch_html("https://acme.example") == ""
    assert fake.calls[0]["url"] == "https://relay.example/get"


def test_fetch_error_on_http_status(fake_get) -> None:
    fake_get(FakeResponse(text="nope", status_code=503))

    with pytest.raises(FetchError):
        fetch_html("https://acme.example", relay_url="")


def test_fetch_error_on_network_failure(fake_get) -> None:
    fake_get(exc=requests.ConnectionError("connection refused"))

    with pytest.raises(FetchError):
        fetch_html("https://acme.example", relay_url="")


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse(text="this is not json"),
        FakeResponse(payload={"status": {"http_code": 404}}),
        FakeResponse(payload={"contents": None}),
        FakeResponse(payload=["contents"]),
    ],
)
def test_fetch_error_on_unusable_relay_response(fake_get, response: FakeResponse) -> None:
    fake_get(response)

    with pytest.raises(FetchError):
        fetch_html("https://acme.example", relay_url="https://relay.example/get")


# -----------------------------
# Extraction
# -----------------------------
def test_extract_full_page(full_page: str) -> None:
    tags = extract_tags(full_page)

    assert tags.title == "Acme Widgets - Handmade Widgets Since 1999"
    assert tags.description == "D" * 140
    assert tags.keywords == "widgets, acme"
    assert tags.robots == "index, follow"
    assert tags.viewport == "width=device-width, initial-scale=1"
    assert tags.author == "Acme"
    assert tags.charset == "utf-8"
    assert tags.canonical == "https://acme.example/"
    assert tags.og_title == "Acme Widgets"
    assert tags.og_description == "Widgets for everyone"
    assert tags.og_image == "https://acme.example/og.png"
    assert tags.og_type == "website"
    assert tags.og_url == ""
    assert tags.twitter_card == "summary_large_image"
    assert tags.twitter_site == "@acme"
    assert tags.twitter_title == ""
    assert tags.language == "en"
    assert tags.structured_data == ({"@context": "https://schema.org", "@type": "Organization"},)


def test_extract_empty_html_gives_empty_record() -> None:
    assert extract_tags("") == TagRecord()


def test_extract_garbage_gives_empty_record() -> None:
    assert extract_tags("%%% not <<< html >>> at all") == TagRecord()


def test_first_matching_tag_wins() -> None:
    html = """
    <html><head>
      <title>First title</title>
      <meta property="og:title" content="first og">
      <meta property="og:title" content="second og">
      <meta name="description">
      <meta name="description" content="ignored, the first match has no content">
    </head><body><svg><title>Icon</title></svg></body></html>
    """

    tags = extract_tags(html)

    assert tags.title == "First title"
    assert tags.og_title == "first og"
    assert tags.description == ""


def test_attribute_lookup_is_exact() -> None:
    html = """
    <head>
      <meta name="og:title" content="wrong attribute">
      <meta property="description" content="wrong attribute">
      <meta name="twitter:cards" content="wrong name">
    </head>
    """

    tags = extract_tags(html)

    assert tags.og_title == ""
    assert tags.description == ""
    assert tags.twitter_card == ""


def test_invalid_json_ld_is_dropped() -> None:
    html = """
    <script type="application/ld+json">{"@type": "Organization"}</script>
    <script type="application/ld+json">{not valid json</script>
    <script type="application/ld+json">{"@type": "Product", "price": NaN}</script>
    <script type="application/ld+json"></script>
    <script type="application/ld+json">[{"@type": "WebSite"}, {"@type": "Person"}]</script>
    <script type="application/json">{"@type": "Ignored"}</script>
    """

    tags = extract_tags(html)

    assert tags.structured_data == (
        {"@type": "Organization"},
        [{"@type": "WebSite"}, {"@type": "Person"}],
    )


def test_charset_falls_back_to_http_equiv() -> None:
    html = '<head><meta http-equiv="Content-Type" content="text/html; charset=ISO-8859-1"></head>'

    assert extract_tags(html).charset == "text/html; charset=ISO-8859-1"


def test_values_are_stripped() -> None:
    html = '<html lang=" fr "><head><title>\n  Padded  \n</title><meta name="viewport" content="  w  "></head></html>'

    tags = extract_tags(html)

    assert tags.title == "Padded"
    assert tags.viewport == "w"
    assert tags.language == "fr"


def test_deeply_nested_json_ld_is_dropped() -> None:
    """Given a JSON-LD block nested past the recursion limit When extracted Then only that block is skipped."""

    html = (
        '<script type="application/ld+json">' + "[" * 100000 + "]" * 100000 + "</script>"
        '<script type="application/ld+json">{"@type": "Organization"}</script>'
        "<title>Still extracted</title>"
    )

    tags = extract_tags(html)

    assert tags.title == "Still extracted"
    assert tags.structured_data == ({"@type": "Organization"},)


@pytest.mark.parametrize("token", ["NaN", "Infinity", "-Infinity"])
def test_json_ld_with_non_standard_constants_is_dropped(token: str) -> None:
    html = f'<script type="application/ld+json">{{"rating": {token}}}</script>'

    assert extract_tags(html).structured_data == ()


def test_whitespace_only_values_count_as_absent() -> None:
    html = '<head><title>   </title><meta name="viewport" content="   "></head>'

    tags = extract_tags(html)

    assert tags.title == ""
    assert tags.viewport == ""
