from typing import Optional
from pydantic import BaseModel, ConfigDict

class Article(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    url: str  # absoluta, usada como chave única
    author: Optional[str] = None
    date_text: Optional[str] = None  # texto cru, ex.: "Feb 17, 2026 at 2:15 AM"
    timestamp: Optional[str] = None  # ISO-8601 (UTC)
    image: Optional[str] = None

class PostedRecord(BaseModel):
    title: str
    posted_at: str
    seeded: Optional[bool] = None  # só presente em registros de seed
