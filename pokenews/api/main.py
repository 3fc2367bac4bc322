import time
from fastapi import FastAPI, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from apscheduler.schedulers.background import BackgroundScheduler
from contextlib import asynccontextmanager

from pokenews.feeds import PokeBeachFeed, FetchError
from pokenews.rss.rss_builder import build_rss_xml, RSS_CONTENT_TYPE
from pokenews.notifier.news_notifier import Notifier
from pokenews.tracker.news_tracker import NewsTracker
from pokenews.utils.config import Settings
from pokenews.utils.log import create_logger

logger = create_logger("api")

# Carrega variáveis do .env
settings = Settings.from_env()

tracker = NewsTracker(
    feed=PokeBeachFeed(
        settings.news_source_url,
        tz_name=settings.source_timezone,
        timeout=settings.fetch_timeout_seconds,
    ),
    notifier=Notifier(
        webhook_url=settings.discord_webhook_url,
        delay_seconds=settings.post_delay_seconds,
    ),
    rss_enabled=settings.rss_enabled,
)

# Scheduler com configurações para evitar empilhamento de jobs
scheduler = BackgroundScheduler(
    job_defaults={
        "coalesce": True,         # junta execuções atrasadas
        "max_instances": 1,       # não roda dois iguais ao mesmo tempo
        "misfire_grace_time": 30, # 30s de tolerância
    }
)

@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler.add_job(scheduled_check, "interval", minutes=settings.check_interval_minutes, id="check_for_news")
    scheduler.start()
    yield
    scheduler.shutdown(wait=False)


def scheduled_check():
    try:
        result = tracker.check_for_news()
    except Exception:
        logger.exception("[check] scheduled run failed")
        return
    if "error" in result:
        logger.error("[check] scheduled run aborted: %s", result["error"])

#%% APP

app = FastAPI(lifespan=lifespan)

@app.get("/", response_class=PlainTextResponse)
def index():
    return "PokéBeach News Worker is running."

@app.get("/health")
def health():
    return {"status": "ok", "ts": int(time.time())}

@app.get("/status")
def status():
    return {"status": "success", "last_update": tracker.last_updated, "last_result": tracker.last_result}

@app.get("/feed")
def feed():
    if not tracker.rss_enabled:
        return PlainTextResponse("RSS feed is disabled", status_code=404)
    try:
        articles = tracker.load_feed_articles()
    except FetchError:
        return PlainTextResponse("Failed to fetch articles", status_code=502)
    return Response(content=build_rss_xml(articles), media_type=RSS_CONTENT_TYPE)

# POST
@app.post("/trigger")
def trigger():
    result = tracker.check_for_news()
    return JSONResponse(result, status_code=502 if "error" in result else 200)

@app.post("/seed")
def seed():
    result = tracker.seed_existing_articles()
    return JSONResponse(result, status_code=502 if "error" in result else 200)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("pokenews.api.main:app", host="0.0.0.0", port=8000, reload=True)
