# pokenews/tests/conftest.py
from types import SimpleNamespace
from typing import List, Optional

import pytest

from pokenews.feeds.base import BaseFeed, FetchError
from pokenews.notifier.news_notifier import Notifier
from pokenews.parser.article_parser import parse_articles
from pokenews.tracker.news_tracker import NewsTracker

WEBHOOK_URL = "https://discord.test/api/webhooks/1/abc"


def article_block(title, href, author=None, date=None, image=None, extra_meta=None):
    meta = ""
    if author:
        meta += f'<li><a class="article__author" href="/author">{author}</a></li>'
    if extra_meta:
        meta += f"<li>{extra_meta}</li>"
    if date:
        meta += f"<li>Posted on {date}</li>"
    img = ""
    if image:
        img = f'<div class="xpress_articleImage--full"><img src="{image}" alt=""></div>'
    link = f'<a href="{href}">{title}</a>' if href is not None else f"<a>{title}</a>"
    return (
        '<article class="post type-post">'
        f'<h2 class="entry-title">{link}</h2>'
        f'<ul class="entry-meta">{meta}</ul>'
        f"{img}"
        "</article>"
    )


# Página com marcação quebrada fora dos <article>, mais novo primeiro
SAMPLE_HTML = (
    "<html><head><title>PokéBeach</title></head><body><div class='wrap'><table><tr><td>"
    + article_block("Third Post", "/articles/third", author="Jane", date="Jan 7, 2024 at 9:00 AM", image="/img/3.png")
    + article_block("Second Post", "/articles/second", date="Jan 6, 2024 at 11:15 PM")
    + "<div><span></div></p>"
    + article_block("Broken Post", None)
    + article_block("First Post", "https://www.pokebeach.com/articles/first", author="Bob")
    + "</td></body>"
)


class FakeFeed(BaseFeed):
    """Feed em memória: parseia `html` ou levanta FetchError(status)."""

    def __init__(self, html: str = SAMPLE_HTML, status: Optional[int] = None):
        self.html = html
        self.status = status
        self.calls = 0

    def fetch(self):
        self.calls += 1
        if self.status is not None:
            raise FetchError(self.status, "Internal Server Error")
        return parse_articles(self.html)


class FakeResponse:
    def __init__(self, status_code: int = 204, text: str = ""):
        self.status_code = status_code
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class LenientResponse(FakeResponse):
    """Como requests.Response: `ok` vale para qualquer status < 400."""

    reason = "OK"

    @property
    def ok(self) -> bool:
        return self.status_code < 400


class FakeSession:
    """Grava os POSTs do webhook; `fail_titles` devolvem 500."""

    def __init__(self, fail_titles=()):
        self.fail_titles = set(fail_titles)
        self.posts: List[dict] = []

    def post(self, url, json=None, timeout=None):
        self.posts.append({"url": url, "json": json})
        title = json["embeds"][0]["title"]
        if title in self.fail_titles:
            return FakeResponse(500, "boom")
        return FakeResponse(204)

    @property
    def posted_titles(self):
        return [p["json"]["embeds"][0]["title"] for p in self.posts]


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    # Redireciona o store para arquivo temporário vazio
    from pokenews.storage import repository as repo
    db_file = tmp_path / "kv_store.json"
    db_file.write_text("{}", encoding="utf-8")
    monkeypatch.setattr(repo, "DB_PATH", str(db_file), raising=True)
    return str(db_file)


@pytest.fixture()
def sleeps(monkeypatch):
    # Sem pausas reais entre posts; registra os atrasos pedidos
    from pokenews.notifier import news_notifier
    calls = []
    monkeypatch.setattr(news_notifier, "time", SimpleNamespace(sleep=calls.append), raising=True)
    return calls


@pytest.fixture()
def session():
    return FakeSession()


@pytest.fixture()
def feed():
    return FakeFeed()


@pytest.fixture()
def tracker(temp_db, sleeps, feed, session):
    notifier = Notifier(webhook_url=WEBHOOK_URL, delay_seconds=1.0, session=session)
    return NewsTracker(feed=feed, notifier=notifier, rss_enabled=True)


@pytest.fixture()
def app(monkeypatch, tracker):
    # Patches para impedir network/scheduler no startup
    from pokenews.api import main as api_main

    class DummyScheduler:
        def add_job(self, *a, **k): pass
        def start(self): pass
        def shutdown(self, wait=False): pass
    monkeypatch.setattr(api_main, "scheduler", DummyScheduler(), raising=True)
    monkeypatch.setattr(api_main, "tracker", tracker, raising=True)

    return api_main.app


@pytest.fixture()
def client(app):
    from fastapi.testclient import TestClient
    # Usa contexto para garantir lifespan mas com patches aplicados
    with TestClient(app) as c:
        yield c
