from .pokebeach import PokeBeachFeed, USER_AGENT

# Exporta também a base e o erro de fetch:
from .base import BaseFeed, FetchError

__all__ = ["PokeBeachFeed", "USER_AGENT", "BaseFeed", "FetchError"]
