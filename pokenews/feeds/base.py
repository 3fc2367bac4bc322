from abc import ABC, abstractmethod
from typing import List, Optional

from pokenews.storage.models import Article

class FetchError(Exception):
    """Falha ao buscar a página de origem (status HTTP quando houver)."""

    def __init__(self, status_code: Optional[int], reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"{status_code} {reason}".strip() if status_code else reason)

    @property
    def label(self) -> str:
        return str(self.status_code) if self.status_code is not None else self.reason

class BaseFeed(ABC):
    @abstractmethod
    def fetch(self) -> List[Article]:
        pass
