"""Page fetcher and meta tag extractor.

Fetches one URL (directly or through a cross-origin relay) and extracts the
meta tags the scoring engine and the previews need. Does NOT crawl links
and does NOT run JavaScript.
"""

import json as _json
import logging
import re
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

import config
from models import TagRecord

logger = logging.getLogger(__name__)

_SCHEME_PATTERN = re.compile(r"^https?://", re.IGNORECASE)

# (TagRecord field, meta attribute, attribute value)
_META_FIELDS = [
    ("description", "name", "description"),
    ("keywords", "name", "keywords"),
    ("robots", "name", "robots"),
    ("viewport", "name", "viewport"),
    ("author", "name", "author"),
    ("og_title", "property", "og:title"),
    ("og_description", "property", "og:description"),
    ("og_image", "property", "og:image"),
    ("og_url", "property", "og:url"),
    ("og_type", "property", "og:type"),
    ("og_site_name", "property", "og:site_name"),
    ("twitter_card", "name", "twitter:card"),
    ("twitter_title", "name", "twitter:title"),
    ("twitter_description", "name", "twitter:description"),
    ("twitter_image", "name", "twitter:image"),
    ("twitter_site", "name", "twitter:site"),
]


class AnalyzerError(Exception):
    """Base class for failures before a report can be produced."""


class InvalidURLError(AnalyzerError):
    pass


class FetchError(AnalyzerError):
    pass


# -----------------------------
# URLs
# -----------------------------
def normalize_url(raw_url: str) -> str:
    """Strip whitespace and default to https:// when no scheme is given."""
    url = str(raw_url or "").strip()
    if url and not _SCHEME_PATTERN.match(url):
        url = "https://" + url
    return url


def is_valid_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def prepare_url(raw_url: str) -> str:
    """Normalize and validate a user supplied URL, raising InvalidURLError."""
    url = normalize_url(raw_url)
    if not url or not is_valid_url(url):
        raise InvalidURLError(f"Invalid URL: {raw_url!r}")
    return url


# -----------------------------
# Fetching
# -----------------------------
def _request_headers() -> dict[str, str]:
    return {
        "User-Agent": config.USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }


def fetch_html(url: str, timeout: float | None = None, relay_url: str | None = None) -> str:
    """
    Return the HTML of `url` with a single GET request.

    When a relay is configured the page is requested as `<relay>?url=<url>`
    and the HTML is read from the `contents` field of the relay's JSON reply.
    Any failure raises FetchError; there are no retries.
    """
    timeout = config.FETCH_TIMEOUT_SECONDS if timeout is None else timeout
    relay = config.RELAY_URL if relay_url is None else relay_url.strip()

    if relay:
        target, params = relay, {"url": url}
    else:
        target, params = url, None

    logger.info("Fetching %s%s", url, f" via {relay}" if relay else "")
    try:
        response = requests.get(target, params=params, timeout=timeout, headers=_request_headers())
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.warning("Fetch failed for %s: %s", url, exc)
        raise FetchError(f"Failed to fetch {url}") from exc

    if not relay:
        response.encoding = response.apparent_encoding or "utf-8"
        return response.text

    try:
        payload = response.json()
    except ValueError as exc:
        logger.warning("Relay returned invalid JSON for %s", url)
        raise FetchError(f"Unreadable relay response for {url}") from exc

    contents = payload.get("contents") if isinstance(payload, dict) else None
    if not isinstance(contents, str):
        logger.warning("Relay response for %s has no page contents", url)
        raise FetchError(f"Relay returned no contents for {url}")
    return contents


# -----------------------------
# Extraction
# -----------------------------
def _attr(tag, name: str) -> str:
    if tag is None:
        return ""
    value = tag.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return (value or "").strip()


def _reject_constant(token: str) -> None:
    raise ValueError(f"{token} is not valid JSON")


def _structured_data(soup: BeautifulSoup) -> tuple:
    blocks = []
    for script_tag in soup.find_all("script", attrs={"type": "application/ld+json"}):
        try:
            blocks.append(
                _json.loads(
                    script_tag.string or script_tag.get_text() or "",
                    parse_constant=_reject_constant,
                )
            )
        except (ValueError, RecursionError):
            logger.debug("Skipping invalid JSON-LD block")
    return tuple(blocks)


def extract_tags(html: str) -> TagRecord:
    """
    Extract SEO meta tags from `html`.

    The first matching element wins. A matching element without the
    expected attribute yields an empty field, it does not fall through to
    later elements. Values have surrounding whitespace stripped, so a
    whitespace-only attribute counts as absent and title length ignores
    leading and trailing blanks.
    """
    soup = BeautifulSoup(html or "", "html.parser")

    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag else ""

    values = {
        field_name: _attr(soup.find("meta", attrs={attr: value}), "content")
        for field_name, attr, value in _META_FIELDS
    }

    canonical = _attr(soup.find("link", attrs={"rel": "canonical"}), "href")

    charset = _attr(soup.find("meta", attrs={"charset": True}), "charset") or _attr(
        soup.find("meta", attrs={"http-equiv": "Content-Type"}), "content"
    )

    language = _attr(soup.find("html"), "lang")

    return TagRecord(
        title=title,
        canonical=canonical,
        charset=charset,
        language=language,
        structured_data=_structured_data(soup),
        **values,
    )
