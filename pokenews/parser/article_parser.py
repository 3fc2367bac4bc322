"""
Extração de artigos da home do PokéBeach.

O HTML completo da página vem com marcação quebrada que derruba o parse
estrutural, então cada bloco <article>...</article> é recortado por regex e
parseado isoladamente com BeautifulSoup.
"""

import re
from typing import List, Optional
from urllib.parse import urljoin
from zoneinfo import ZoneInfoNotFoundError

from bs4 import BeautifulSoup
from dateutil import parser as dateparser

from pokenews.storage.models import Article
from pokenews.utils.log import create_logger
from pokenews.utils.tz_utils import DEFAULT_TIMEZONE, localize, to_utc_iso

logger = create_logger("parser")

SITE_ORIGIN = "https://www.pokebeach.com"

_ARTICLE_BLOCK_RE = re.compile(r"<article[^>]*>.*?</article>", re.DOTALL)
# "Posted on Feb 17, 2026 at 2:15 AM" (prefixo opcional)
_DATE_RE = re.compile(
    r"(?:Posted on\s*)?(\w+ \d{1,2}, \d{4}\s+at\s+\d{1,2}:\d{2}\s*[AP]M)",
    re.IGNORECASE,
)
_AT_SEPARATOR_RE = re.compile(r"\s+at\s+", re.IGNORECASE)


def split_article_blocks(html: str) -> List[str]:
    return _ARTICLE_BLOCK_RE.findall(html or "")


def parse_date(date_text: Optional[str], tz_name: str = DEFAULT_TIMEZONE) -> Optional[str]:
    """
    Normaliza "Feb 17, 2026 at 2:15 AM" para ISO-8601 em UTC.
    Datas sem fuso são interpretadas em `tz_name`. Retorna None se não parsear.
    """
    if not date_text:
        return None
    cleaned = _AT_SEPARATOR_RE.sub(" ", date_text.strip(), count=1)
    try:
        dt = localize(dateparser.parse(cleaned), tz_name)
    except (ValueError, OverflowError, ZoneInfoNotFoundError):
        return None
    return to_utc_iso(dt)


def extract_article(block: str, tz_name: str = DEFAULT_TIMEZONE) -> Optional[Article]:
    el = BeautifulSoup(block, "html.parser").find("article")
    if el is None:
        return None

    # título + link: h2.entry-title > a
    title_link = el.select_one("h2 a")
    if title_link is None:
        return None
    href = (title_link.get("href") or "").strip()
    if not href:
        return None

    title = title_link.get_text().strip()
    url = urljoin(SITE_ORIGIN + "/", href)

    author_link = el.select_one("a.article__author")
    author = author_link.get_text().strip() if author_link is not None else None

    date_text = None
    timestamp = None
    for li in el.select("ul.entry-meta li"):
        match = _DATE_RE.search(li.get_text().strip())
        if match:
            date_text = match.group(1).strip()
            timestamp = parse_date(date_text, tz_name)
            break

    img = el.select_one(".xpress_articleImage--full img")
    image = img.get("src") if img is not None else None

    return Article(
        title=title,
        url=url,
        author=author or None,
        date_text=date_text,
        timestamp=timestamp,
        image=image or None,
    )


def parse_articles(html: str, tz_name: str = DEFAULT_TIMEZONE) -> List[Article]:
    """Artigos na ordem da página (mais recente primeiro)."""
    articles: List[Article] = []
    for block in split_article_blocks(html):
        try:
            article = extract_article(block, tz_name)
        except Exception as e:
            logger.error("[parse] Failed to parse article element: %s", e)
            continue
        if article is not None:
            articles.append(article)
    return articles
