from typing import Any, Dict, List, Optional
from threading import Lock
import time

from pokenews.feeds.base import BaseFeed, FetchError
from pokenews.notifier.news_notifier import Notifier
from pokenews.storage import repository as repo
from pokenews.storage.models import Article
from pokenews.utils.log import create_logger

logger = create_logger("tracker")


class NewsTracker:
    """Pipeline linear: fetch -> parse -> cache do feed -> dedup -> notify -> registro."""

    def __init__(self, feed: BaseFeed, notifier: Notifier, rss_enabled: bool = True):
        self.feed = feed
        self.notifier = notifier
        self.rss_enabled = rss_enabled
        self.last_updated: Optional[int] = None
        self.last_result: Optional[Dict[str, Any]] = None
        self._lock = Lock()  # uma execução de check/seed por vez neste processo

    def check_for_news(self) -> Dict[str, Any]:
        with self._lock:
            result = self._check_for_news()
        self.last_result = result
        self.last_updated = int(time.time())
        return result

    def _check_for_news(self) -> Dict[str, Any]:
        try:
            articles = self.feed.fetch()
        except FetchError as e:
            return {"error": f"Fetch failed: {e.label}", "posted": 0}

        logger.info(
            "[check] Parsed %d articles from homepage (RSS: %s, Discord: %s)",
            len(articles),
            "on" if self.rss_enabled else "off",
            "on" if self.notifier.enabled else "off",
        )

        if self.rss_enabled:
            repo.put_feed_cache(articles)

        # sem webhook configurado: só o feed funciona
        if not self.notifier.enabled:
            return {"parsed": len(articles), "new": 0, "posted": 0}

        new_articles = [a for a in articles if not repo.is_posted(a.url)]
        logger.info("[check] %d new articles to post", len(new_articles))

        # página vem do mais novo para o mais antigo; posta em ordem cronológica
        new_articles.reverse()
        posted = self.notifier.notify_all(new_articles, on_success=repo.mark_posted)

        logger.info("[check] Posted %d new articles to Discord", posted)
        return {"parsed": len(articles), "new": len(new_articles), "posted": posted}

    def seed_existing_articles(self) -> Dict[str, Any]:
        """Marca os artigos atuais como já postados, sem notificar."""
        with self._lock:
            try:
                articles = self.feed.fetch()
            except FetchError as e:
                return {"error": f"Fetch failed: {e.label}", "seeded": 0}

            seeded = 0
            for article in articles:
                repo.mark_posted(article, seeded=True)
                seeded += 1

        logger.info("[seed] Seeded %d articles into the store (no Discord posts)", seeded)
        return {"parsed": len(articles), "seeded": seeded}

    def load_feed_articles(self) -> List[Article]:
        """Artigos do cache do feed; em cache miss busca de novo e repopula."""
        cached = repo.get_feed_cache()
        if cached is not None:
            return cached

        articles = self.feed.fetch()
        repo.put_feed_cache(articles)
        return articles
