"""
Job posting scraper.

Fetches a job posting page and extracts readable text:

1. Fetch the HTML with ``requests`` (redirects followed, browser-like headers)
2. Strip page chrome (scripts, nav, footers, ...)
3. Prefer the largest job-description-like container, else the whole body
4. Normalise whitespace

Results are cached per URL. Pages that yield fewer than 100 characters
(typically JavaScript-rendered boards) raise ``ScrapeError`` so the caller can
ask for the JD text instead.
"""
import re
from dataclasses import asdict, dataclass
from typing import Optional, Tuple

import requests
from bs4 import BeautifulSoup
from loguru import logger

from jobfit.storage.cache import get_cached, set_cache
from jobfit.utils.config import settings

MIN_CONTENT_LENGTH = 100

_DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

_CHROME_TAGS = ["script", "style", "nav", "footer", "header", "svg", "iframe", "noscript"]

_CANDIDATE_SELECTORS = [
    "main",
    "article",
    '[class*="job-description"]',
    '[class*="job-posting"]',
    '[class*="description"]',
    '[id*="job-description"]',
    '[id*="job-posting"]',
    '[id*="description"]',
]


class ScrapeError(Exception):
    """Raised when a posting cannot be fetched or yields too little text."""
    pass


@dataclass
class ScrapeResult:
    text: str
    title: str
    url: str
    content_length: int


def normalize_text(raw: str) -> str:
    text = raw.replace("\r\n", "\n")
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n[ \t]+", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def html_to_text(html: str) -> Tuple[str, str]:
    """Return ``(text, title)`` for an HTML document."""
    soup = BeautifulSoup(html, "html.parser")
    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag else ""

    for tag in soup(_CHROME_TAGS):
        tag.decompose()

    best = ""
    for selector in _CANDIDATE_SELECTORS:
        node = soup.select_one(selector)
        if node is None:
            continue
        text = normalize_text(node.get_text("\n"))
        if len(text) > len(best):
            best = text

    if len(best) < MIN_CONTENT_LENGTH:
        body = soup.body or soup
        best = normalize_text(body.get_text("\n"))

    return best, title or "Untitled"


def _fetch(url: str, timeout: Optional[int] = None) -> str:
    headers = {
        "User-Agent": settings.user_agent or _DEFAULT_USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }
    response = requests.get(url, headers=headers, timeout=timeout or settings.scrape_timeout)
    response.raise_for_status()
    return response.text


def scrape_job_posting(url: str, use_cache: bool = True) -> ScrapeResult:
    """Fetch ``url`` and return its job description text.

    Raises:
        ScrapeError: The fetch failed or the page had too little text.
    """
    logger.info(f"🌐 Scraping: {url}")

    if use_cache:
        cached = get_cached("scrape", url)
        if cached is not None:
            return ScrapeResult(**cached)

    try:
        html = _fetch(url)
    except requests.RequestException as e:
        logger.error(f"❌ Scraping failed: {e}")
        raise ScrapeError(
            f"Could not scrape {url}: {e}. Try pasting the job description text directly."
        ) from e

    logger.debug(f"Fetched {len(html)} bytes")
    text, title = html_to_text(html)

    if len(text) < MIN_CONTENT_LENGTH:
        logger.error(f"❌ Only {len(text)} chars extracted from {url}")
        raise ScrapeError(
            f"Could not scrape {url}: extracted text is too short, the page might require "
            "JavaScript rendering. Try pasting the job description text directly."
        )

    logger.info(f"✅ Extracted {len(text)} chars (title: {title[:60]!r})")
    result = ScrapeResult(text=text, title=title, url=url, content_length=len(text))
    if use_cache:
        set_cache("scrape", url, asdict(result))
    return result
