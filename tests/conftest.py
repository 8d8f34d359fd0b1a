"""Shared fixtures: sample pages and a fake `requests.get`."""

from __future__ import annotations

import json

import pytest
import requests

import config
import scraper

FULL_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Acme Widgets - Handmade Widgets Since 1999</title>
  <meta name="description" content="{description}">
  <meta name="keywords" content="widgets, acme">
  <meta name="robots" content="index, follow">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta name="author" content="Acme">
  <link rel="canonical" href="https://acme.example/">
  <meta property="og:title" content="Acme Widgets">
  <meta property="og:description" content="Widgets for everyone">
  <meta property="og:image" content="https://acme.example/og.png">
  <meta property="og:type" content="website">
  <meta name="twitter:card" content="summary_large_image">
  <meta name="twitter:site" content="@acme">
  <script type="application/ld+json">{{"@context": "https://schema.org", "@type": "Organization"}}</script>
</head>
<body><h1>Acme</h1></body>
</html>
""".format(description="D" * 140)


class FakeResponse:
    def __init__(self, text: str = "", status_code: int = 200, payload: object = None) -> None:
        self.text = text
        self.status_code = status_code
        self.encoding = None
        self.apparent_encoding = "utf-8"
        self._payload = payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self) -> object:
        if self._payload is not None:
            return self._payload
        return json.loads(self.text)


class FakeGet:
    """Records calls and returns a canned response (or raises)."""

    def __init__(self, response: FakeResponse | None = None, exc: Exception | None = None) -> None:
        self.response = response or FakeResponse()
        self.exc = exc
        self.calls: list[dict] = []

    def __call__(self, url, params=None, timeout=None, headers=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout, "headers": headers})
        if self.exc is not None:
            raise self.exc
        return self.response


@pytest.fixture(autouse=True)
def direct_fetch(monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests never go through a relay unless they ask for one."""
    monkeypatch.setattr(config, "RELAY_URL", "")


@pytest.fixture
def fake_get(monkeypatch: pytest.MonkeyPatch):
    def install(response: FakeResponse | None = None, exc: Exception | None = None) -> FakeGet:
        fake = FakeGet(response=response, exc=exc)
        monkeypatch.setattr(scraper.requests, "get", fake)
        return fake

    return install


@pytest.fixture
def full_page() -> str:
    return FULL_PAGE
