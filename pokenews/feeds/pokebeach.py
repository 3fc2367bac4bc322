import requests
from typing import List

from pokenews.parser.article_parser import parse_articles
from pokenews.storage.models import Article
from pokenews.utils.log import create_logger
from pokenews.utils.tz_utils import DEFAULT_TIMEZONE
from .base import BaseFeed, FetchError

logger = create_logger("feeds")

USER_AGENT = "PokeBeachNewsBot/1.0 (Discord news feed; +https://github.com/kaprestridge/Poke-discord-bot)"

# ---------- Sessão HTTP global (sem retry: falha volta direto para o chamador) ----------
_SESSION = requests.Session()
_SESSION.headers.update({"User-Agent": USER_AGENT})

class PokeBeachFeed(BaseFeed):
    TIMEOUT = 15

    def __init__(self, source_url: str, tz_name: str = DEFAULT_TIMEZONE, timeout: float = TIMEOUT):
        self.source_url: str = source_url
        self.tz_name: str = tz_name
        self.timeout: float = timeout

    def fetch_html(self) -> str:
        try:
            response = _SESSION.get(self.source_url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("[fetch] Request to %s failed: %s", self.source_url, e)
            raise FetchError(None, str(e)) from e

        if not 200 <= response.status_code < 300:
            logger.error("[fetch] Failed to fetch PokéBeach: %s %s", response.status_code, response.reason)
            raise FetchError(response.status_code, response.reason or "")
        return response.text

    def fetch(self) -> List[Article]:
        return parse_articles(self.fetch_html(), self.tz_name)
