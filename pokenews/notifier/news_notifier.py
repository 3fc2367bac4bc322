# news_notifier.py
"""
Notifier: envio de artigos novos do PokéBeach para um Incoming Webhook do Discord.

- Classe Notifier encapsula configuração (webhook, atraso entre posts, cor, rodapé).
- Cada artigo vira um embed: title, url, color, footer e, quando existirem,
  author / image / timestamp.
- Métodos públicos principais:
    - build_embed(article)
    - post_article(article)
    - notify_all(articles, on_success=None)

Exemplo:
    from pokenews.notifier.news_notifier import Notifier

    notifier = Notifier.from_env()
    notifier.notify_all(novos_artigos, on_success=mark_posted)
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Optional
import os
import time

import requests
from dotenv import load_dotenv

from pokenews.storage.models import Article
from pokenews.utils.log import create_logger

logger = create_logger("notifier")

EMBED_COLOR = 0xFFCB05  # amarelo Pokémon
FOOTER_TEXT = "PokéBeach"
POST_DELAY_SECONDS = 1.0

OnSuccessFn = Callable[[Article], Any]


class Notifier:
    """Formata artigos como embeds e posta no webhook, um por vez."""

    TIMEOUT = 10

    def __init__(
        self,
        webhook_url: Optional[str] = None,
        delay_seconds: float = POST_DELAY_SECONDS,
        color: int = EMBED_COLOR,
        footer_text: str = FOOTER_TEXT,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Parameters
        ----------
        webhook_url : str, optional
            URL do webhook. Sem ela a fase de notificação é pulada.
        delay_seconds : float
            Pausa entre posts consecutivos (limite de taxa do Discord).
        color : int
            Cor de destaque do embed.
        footer_text : str
            Texto fixo do rodapé.
        session : requests.Session, optional
            Sessão HTTP; por padrão uma nova sessão é criada.
        """
        self.webhook_url = webhook_url
        self.delay_seconds = delay_seconds
        self.color = color
        self.footer_text = footer_text
        self._session = session or requests.Session()

    # ---------- Fábrica baseada em .env ----------
    @classmethod
    def from_env(cls, load_env: bool = True, dotenv_override: bool = True) -> "Notifier":
        """Cria Notifier lendo DISCORD_WEBHOOK_URL e POST_DELAY_SECONDS do .env."""
        if load_env:
            load_dotenv(override=dotenv_override)
        return cls(
            webhook_url=os.getenv("DISCORD_WEBHOOK_URL") or None,
            delay_seconds=float(os.getenv("POST_DELAY_SECONDS", str(POST_DELAY_SECONDS))),
        )

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    # ---------- Formatação ----------
    def build_embed(self, article: Article) -> Dict[str, Any]:
        embed: Dict[str, Any] = {
            "title": article.title,
            "url": article.url,
            "color": self.color,
            "footer": {"text": self.footer_text},
        }
        if article.author:
            embed["author"] = {"name": article.author}
        if article.image:
            embed["image"] = {"url": article.image}
        if article.timestamp:
            embed["timestamp"] = article.timestamp
        return embed

    def build_payload(self, article: Article) -> Dict[str, Any]:
        return {"embeds": [self.build_embed(article)]}

    # ---------- Envios ----------
    def post_article(self, article: Article) -> bool:
        """Posta um artigo. True só quando o webhook confirma (2xx)."""
        if not self.webhook_url:
            return False

        try:
            resp = self._session.post(
                self.webhook_url,
                json=self.build_payload(article),
                timeout=self.TIMEOUT,
            )
        except requests.RequestException as e:
            logger.error("[notify] Discord webhook request failed for '%s': %s", article.title, e)
            return False

        if not 200 <= resp.status_code < 300:
            logger.error("[notify] Discord webhook failed (%s): %s", resp.status_code, resp.text)
            return False

        logger.info("[notify] Posted: %s", article.title)
        return True

    def notify_all(self, articles: Iterable[Article], on_success: Optional[OnSuccessFn] = None) -> int:
        """
        Posta os artigos na ordem recebida, com pausa entre posts consecutivos
        (nunca depois do último). Uma falha não interrompe os demais.
        Retorna quantos foram confirmados.
        """
        pending = list(articles)
        posted = 0
        for i, article in enumerate(pending):
            if self.post_article(article):
                posted += 1
                if on_success is not None:
                    on_success(article)

            if i < len(pending) - 1:
                time.sleep(self.delay_seconds)
        return posted
