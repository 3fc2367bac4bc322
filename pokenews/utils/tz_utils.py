from datetime import datetime, timezone
from email.utils import format_datetime
from zoneinfo import ZoneInfo
from typing import Optional

DEFAULT_TIMEZONE = "UTC"

def localize(dt: datetime, tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Anexa o fuso `tz_name` a um datetime ingênuo (sem tzinfo)."""
    if dt.tzinfo is not None:
        return dt
    return dt.replace(tzinfo=ZoneInfo(tz_name))

def to_utc_iso(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat()

def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()

def to_rfc2822(dt: datetime) -> str:
    """Formato de data do RSS (RFC 2822, GMT)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return format_datetime(dt.astimezone(timezone.utc), usegmt=True)

def iso_to_rfc2822(iso_ts: Optional[str]) -> Optional[str]:
    if not iso_ts:
        return None
    try:
        return to_rfc2822(datetime.fromisoformat(iso_ts))
    except ValueError:
        return None
