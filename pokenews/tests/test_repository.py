# pokenews/tests/test_repository.py
import time

from pokenews.storage import repository as repo
from pokenews.storage.models import Article

ARTICLE = Article(title="T1", url="https://www.pokebeach.com/articles/t1")


def test_kv_roundtrip_and_delete(temp_db):
    assert repo.kv_get("missing") is None
    repo.kv_put("k", {"a": 1}, ttl_seconds=60)
    assert repo.kv_get("k") == {"a": 1}
    assert repo.kv_delete("k") is True
    assert repo.kv_delete("k") is False
    assert repo.kv_get("k") is None


def test_entries_expire(temp_db, monkeypatch):
    now = time.time()
    monkeypatch.setattr(repo.time, "time", lambda: now)
    repo.mark_posted(ARTICLE)
    assert repo.is_posted(ARTICLE.url)

    monkeypatch.setattr(repo.time, "time", lambda: now + repo.ARTICLE_TTL_SECONDS + 1)
    assert not repo.is_posted(ARTICLE.url)


def test_expired_entries_are_purged_on_write(temp_db, monkeypatch):
    now = time.time()
    monkeypatch.setattr(repo.time, "time", lambda: now)
    repo.kv_put("short", 1, ttl_seconds=10)
    monkeypatch.setattr(repo.time, "time", lambda: now + 11)
    repo.kv_put("other", 2, ttl_seconds=10)
    assert "short" not in repo.load_db()


def test_posted_record_layout(temp_db):
    repo.mark_posted(ARTICLE)
    raw = repo.kv_get("article:https://www.pokebeach.com/articles/t1")
    assert set(raw) == {"title", "posted_at"}

    repo.mark_posted(ARTICLE, seeded=True)
    raw = repo.kv_get(repo.article_key(ARTICLE.url))
    assert raw["seeded"] is True


def test_feed_cache_roundtrip_and_ttl(temp_db, monkeypatch):
    assert repo.get_feed_cache() is None
    now = time.time()
    monkeypatch.setattr(repo.time, "time", lambda: now)
    repo.put_feed_cache([ARTICLE])
    assert repo.get_feed_cache() == [ARTICLE]

    monkeypatch.setattr(repo.time, "time", lambda: now + repo.FEED_CACHE_TTL_SECONDS + 1)
    assert repo.get_feed_cache() is None


def test_corrupted_file_is_treated_as_empty(temp_db):
    with open(temp_db, "w", encoding="utf-8") as f:
        f.write("{not json")
    assert repo.load_db() == {}
    repo.kv_put("k", "v")
    assert repo.kv_get("k") == "v"


def test_zero_ttl_expires_immediately(temp_db):
    repo.kv_put("gone", "v", ttl_seconds=0)
    assert repo.kv_get("gone") is None
    assert repo.load_db()["gone"]["expires_at"] is not None
