import os, json, time
from threading import Lock
from typing import Any, Dict, List, Optional

from pokenews.storage.models import Article, PostedRecord
from pokenews.utils.log import create_logger
from pokenews.utils.tz_utils import utc_now_iso

logger = create_logger("storage")

DB_PATH = os.getenv("KV_STORE_PATH") or os.path.join(os.path.dirname(__file__), "data", "kv_store.json")
db_lock = Lock()

ARTICLE_TTL_SECONDS = 30 * 24 * 60 * 60  # 30 dias
FEED_CACHE_KEY = "rss:feed-cache"
FEED_CACHE_TTL_SECONDS = 30 * 60  # 30 min, mesmo intervalo do agendamento

def load_db() -> Dict[str, Dict[str, Any]]:
    if not os.path.exists(DB_PATH):
        return {}
    try:
        with open(DB_PATH, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, ValueError):
        logger.warning("[kv] %s is empty or corrupted, starting from scratch.", DB_PATH)
        return {}
    if not isinstance(raw, dict):
        logger.warning("[kv] %s has an unexpected layout, starting from scratch.", DB_PATH)
        return {}
    return raw

def save_db(db: Dict[str, Dict[str, Any]]):
    os.makedirs(os.path.dirname(DB_PATH) or ".", exist_ok=True)
    with open(DB_PATH, "w", encoding="utf-8") as f:
        json.dump(db, f, ensure_ascii=False, indent=2)

def _is_live(entry: Dict[str, Any], now: float) -> bool:
    expires_at = entry.get("expires_at")
    return expires_at is None or expires_at > now

def kv_get(key: str) -> Optional[Any]:
    with db_lock:
        entry = load_db().get(key)
    if not entry or not _is_live(entry, time.time()):
        return None
    return entry.get("value")

def kv_put(key: str, value: Any, ttl_seconds: Optional[int] = None):
    now = time.time()
    with db_lock:
        db = load_db()
        # aproveita a escrita para podar entradas expiradas
        db = {k: e for k, e in db.items() if _is_live(e, now)}
        db[key] = {
            "value": value,
            "expires_at": now + ttl_seconds if ttl_seconds is not None else None,
        }
        save_db(db)

def kv_delete(key: str) -> bool:
    with db_lock:
        db = load_db()
        if key not in db:
            return False
        del db[key]
        save_db(db)
        return True

# ---------- Registros de artigos já anunciados ----------
def article_key(url: str) -> str:
    return f"article:{url}"

def is_posted(url: str) -> bool:
    return kv_get(article_key(url)) is not None

def get_posted_record(url: str) -> Optional[PostedRecord]:
    value = kv_get(article_key(url))
    return PostedRecord(**value) if value else None

def mark_posted(article: Article, seeded: bool = False):
    record = PostedRecord(
        title=article.title,
        posted_at=utc_now_iso(),
        seeded=True if seeded else None,
    )
    kv_put(article_key(article.url), record.model_dump(exclude_none=True), ARTICLE_TTL_SECONDS)

# ---------- Cache do feed RSS ----------
def get_feed_cache() -> Optional[List[Article]]:
    value = kv_get(FEED_CACHE_KEY)
    if value is None:
        return None
    return [Article(**item) for item in value]

def put_feed_cache(articles: List[Article]):
    kv_put(FEED_CACHE_KEY, [a.model_dump() for a in articles], FEED_CACHE_TTL_SECONDS)
