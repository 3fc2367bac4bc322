import html
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from pokenews.storage.models import Article
from pokenews.utils.tz_utils import iso_to_rfc2822, to_rfc2822

CHANNEL_TITLE = "PokéBeach News"
CHANNEL_LINK = "https://www.pokebeach.com/"
CHANNEL_DESCRIPTION = "Latest news from PokéBeach - The Largest Pokemon TCG Community"
CHANNEL_LANGUAGE = "en-us"

RSS_CONTENT_TYPE = "application/rss+xml; charset=utf-8"


def escape_xml(text: str) -> str:
    return html.escape(text, quote=True)


def build_item(article: Article) -> str:
    lines = [
        "    <item>",
        f"      <title>{escape_xml(article.title)}</title>",
        f"      <link>{escape_xml(article.url)}</link>",
        f"      <guid>{escape_xml(article.url)}</guid>",
    ]
    pub_date = iso_to_rfc2822(article.timestamp)
    if pub_date:
        lines.append(f"      <pubDate>{pub_date}</pubDate>")
    if article.author:
        lines.append(f"      <dc:creator>{escape_xml(article.author)}</dc:creator>")
    if article.image:
        lines.append(f'      <media:thumbnail url="{escape_xml(article.image)}" />')
    lines.append("    </item>")
    return "\n".join(lines)


def build_rss_xml(articles: Iterable[Article], now: Optional[datetime] = None) -> str:
    """Documento RSS 2.0 (namespaces dc e media), um <item> por artigo."""
    now = now or datetime.now(timezone.utc)
    items: List[str] = [build_item(a) for a in articles]

    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<rss version="2.0" xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:media="http://search.yahoo.com/mrss/">',
        "  <channel>",
        f"    <title>{escape_xml(CHANNEL_TITLE)}</title>",
        f"    <link>{CHANNEL_LINK}</link>",
        f"    <description>{escape_xml(CHANNEL_DESCRIPTION)}</description>",
        f"    <language>{CHANNEL_LANGUAGE}</language>",
        f"    <lastBuildDate>{to_rfc2822(now)}</lastBuildDate>",
    ]
    parts.extend(items)
    parts.extend(["  </channel>", "</rss>"])
    return "\n".join(parts)
