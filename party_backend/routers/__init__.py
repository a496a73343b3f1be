"""API routers."""
from party_backend.routers import demo, health, party, songs, themes

__all__ = [
    "demo",
    "health",
    "party",
    "songs",
    "themes",
]
