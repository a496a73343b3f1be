"""Static catalog of predefined themes and the curated demo playlist."""
from dataclasses import dataclass
from typing import List, Optional, Protocol

from party_backend.data.demo_playlist import DEMO_PLAYLIST
from party_backend.data.themes import PARTY_THEMES, ROUND_THEMES
from party_backend.schemas.theme import ThemeConstraints


@dataclass(frozen=True)
class DemoTrack:
    """A track the demo auto-submits."""
    track_id: int
    title: str
    artist: str
    artwork_url: str
    duration_ms: int
    permalink_url: str
    expected_score: float


@dataclass(frozen=True)
class RoundThemeDefinition:
    theme_id: str
    name: str
    prompt: str
    voting_prompt: str
    icon: str
    bonus_multiplier: float = 1.0


@dataclass(frozen=True)
class PartyThemeDefinition:
    theme_id: str
    name: str
    description: str
    icon: str
    constraints: ThemeConstraints
    is_custom: bool = False


class Catalog(Protocol):
    """Read-only source of predefined content."""

    def predefined_party_themes(self) -> List[PartyThemeDefinition]: ...

    def predefined_round_themes(self) -> List[RoundThemeDefinition]: ...

    def curated_demo_tracks(self) -> List[DemoTrack]: ...


class StaticCatalog:
    """Catalog backed by the lists in ``party_backend.data``."""

    def __init__(self):
        self._party_themes = [
            PartyThemeDefinition(
                theme_id=theme["theme_id"],
                name=theme["name"],
                description=theme["description"],
                icon=theme["icon"],
                constraints=ThemeConstraints.model_validate(theme["constraints"]),
            )
            for theme in PARTY_THEMES
        ]
        self._round_themes = [RoundThemeDefinition(**theme) for theme in ROUND_THEMES]
        self._demo_tracks = [DemoTrack(**track) for track in DEMO_PLAYLIST]

    def predefined_party_themes(self) -> List[PartyThemeDefinition]:
        return list(self._party_themes)

    def predefined_round_themes(self) -> List[RoundThemeDefinition]:
        return list(self._round_themes)

    def curated_demo_tracks(self) -> List[DemoTrack]:
        return list(self._demo_tracks)

    def find_party_theme(self, theme_id: str) -> Optional[PartyThemeDefinition]:
        return next((t for t in self._party_themes if t.theme_id == theme_id), None)

    def find_round_theme(self, theme_id: str) -> Optional[RoundThemeDefinition]:
        return next((t for t in self._round_themes if t.theme_id == theme_id), None)
