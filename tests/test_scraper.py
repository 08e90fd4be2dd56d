"""Tests for job posting scraping, with ``requests.get`` stubbed out."""

from pathlib import Path
from types import SimpleNamespace
from typing import List

import pytest
import requests

from jobfit.infra import scraper
from jobfit.infra.scraper import ScrapeError, html_to_text, normalize_text, scrape_job_posting
from jobfit.storage import cache as cache_module
from jobfit.storage.cache import ContentCache

DESCRIPTION = (
    "We are hiring a Staff Software Engineer to lead our platform team. "
    "You will design distributed systems in Go and Rust, run Kubernetes, "
    "and mentor senior engineers across the organization."
)

JOB_HTML = f"""
<html>
  <head><title>Staff Engineer - Acme Cloud</title><script>var x = 1;</script></head>
  <body>
    <nav>Home | Jobs | About</nav>
    <div class="job-description">
      <h1>Staff Software Engineer</h1>
      <p>{DESCRIPTION}</p>
    </div>
    <footer>Copyright Acme</footer>
  </body>
</html>
"""


class _FakeResponse:
    def __init__(self, text: str, status: int = 200) -> None:
        self.text = text
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


@pytest.fixture(autouse=True)
def isolated_cache(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(cache_module, "_default_cache", ContentCache(cache_dir=tmp_path, use_redis=False))


@pytest.fixture
def fetched_urls(monkeypatch: pytest.MonkeyPatch) -> List[str]:
    urls: List[str] = []

    def fake_get(url, headers=None, timeout=None):
        urls.append(url)
        assert "User-Agent" in headers
        return _FakeResponse(JOB_HTML)

    monkeypatch.setattr(scraper.requests, "get", fake_get)
    return urls


class TestHtmlToText:
    def test_prefers_job_description_container(self) -> None:
        text, title = html_to_text(JOB_HTML)

        assert title == "Staff Engineer - Acme Cloud"
        assert DESCRIPTION in text
        assert "Home | Jobs" not in text
        assert "var x" not in text

    def test_falls_back_to_body(self) -> None:
        html = f"<html><body><p>{DESCRIPTION}</p></body></html>"

        text, title = html_to_text(html)

        assert text == DESCRIPTION
        assert title == "Untitled"

    def test_normalize_text(self) -> None:
        assert normalize_text("  a \t b\r\n   c\n\n\n\nd  ") == "a b\nc\n\nd"


class TestScrapeJobPosting:
    def test_returns_result(self, fetched_urls: List[str]) -> None:
        result = scrape_job_posting("https://jobs.example.com/1")

        assert result.url == "https://jobs.example.com/1"
        assert result.title == "Staff Engineer - Acme Cloud"
        assert result.content_length == len(result.text) >= 100

    def test_second_call_served_from_cache(self, fetched_urls: List[str]) -> None:
        first = scrape_job_posting("https://jobs.example.com/1")
        second = scrape_job_posting("https://jobs.example.com/1")

        assert first == second
        assert fetched_urls == ["https://jobs.example.com/1"]

    def test_short_page_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            scraper.requests, "get", lambda url, **kw: _FakeResponse("<html><body>Loading...</body></html>")
        )

        with pytest.raises(ScrapeError, match="too short"):
            scrape_job_posting("https://spa.example.com/job")

    def test_http_error_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(scraper.requests, "get", lambda url, **kw: _FakeResponse("", status=404))

        with pytest.raises(ScrapeError, match="Could not scrape https://gone.example.com"):
            scrape_job_posting("https://gone.example.com")

    def test_connection_error_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def refuse(url, **kw):
            raise requests.ConnectionError("refused")

        monkeypatch.setattr(scraper.requests, "get", refuse)

        with pytest.raises(ScrapeError, match="refused"):
            scrape_job_posting("https://down.example.com")
