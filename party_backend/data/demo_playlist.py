"""Curated tracks auto-submitted in demo mode."""

from __future__ import annotations

# Placeholder track ids; expected_score is the average a demo run tends toward.
DEMO_PLAYLIST = [
    {
        "track_id": 1001,
        "title": "Summer Vibes",
        "artist": "Demo Artist 1",
        "artwork_url": "https://via.placeholder.com/500x500?text=Summer+Vibes",
        "duration_ms": 180000,
        "permalink_url": "https://soundcloud.com/demo/summer-vibes",
        "expected_score": 7.5,
    },
    {
        "track_id": 1002,
        "title": "Midnight Drive",
        "artist": "Demo Artist 2",
        "artwork_url": "https://via.placeholder.com/500x500?text=Midnight+Drive",
        "duration_ms": 210000,
        "permalink_url": "https://soundcloud.com/demo/midnight-drive",
        "expected_score": 8.0,
    },
    {
        "track_id": 1003,
        "title": "Electric Dreams",
        "artist": "Demo Artist 3",
        "artwork_url": "https://via.placeholder.com/500x500?text=Electric+Dreams",
        "duration_ms": 195000,
        "permalink_url": "https://soundcloud.com/demo/electric-dreams",
        "expected_score": 6.5,
    },
    {
        "track_id": 1004,
        "title": "Neon Nights",
        "artist": "Demo Artist 4",
        "artwork_url": "https://via.placeholder.com/500x500?text=Neon+Nights",
        "duration_ms": 225000,
        "permalink_url": "https://soundcloud.com/demo/neon-nights",
        "expected_score": 7.0,
    },
    {
        "track_id": 1005,
        "title": "Ocean Waves",
        "artist": "Demo Artist 1",
        "artwork_url": "https://via.placeholder.com/500x500?text=Ocean+Waves",
        "duration_ms": 200000,
        "permalink_url": "https://soundcloud.com/demo/ocean-waves",
        "expected_score": 8.5,
    },
    {
        "track_id": 1006,
        "title": "City Lights",
        "artist": "Demo Artist 2",
        "artwork_url": "https://via.placeholder.com/500x500?text=City+Lights",
        "duration_ms": 185000,
        "permalink_url": "https://soundcloud.com/demo/city-lights",
        "expected_score": 7.2,
    },
    {
        "track_id": 1007,
        "title": "Stargazer",
        "artist": "Demo Artist 3",
        "artwork_url": "https://via.placeholder.com/500x500?text=Stargazer",
        "duration_ms": 240000,
        "permalink_url": "https://soundcloud.com/demo/stargazer",
        "expected_score": 6.8,
    },
    {
        "track_id": 1008,
        "title": "Rhythm & Soul",
        "artist": "Demo Artist 4",
        "artwork_url": "https://via.placeholder.com/500x500?text=Rhythm+Soul",
        "duration_ms": 215000,
        "permalink_url": "https://soundcloud.com/demo/rhythm-soul",
        "expected_score": 7.8,
    },
]
