"""Demo mode: simulated parties, auto-submitted songs and personality-driven votes."""
from dataclasses import dataclass
from datetime import timedelta
from typing import List, Optional, Sequence
from uuid import UUID
import logging
import random
import string
import uuid

from party_backend.config import Settings, get_settings
from party_backend.models import EntityType, Party, PartyStatus, Player, PlayerStatus, Song, Vote
from party_backend.schemas.party import PartySettings
from party_backend.services.catalog import DemoTrack, StaticCatalog
from party_backend.services.identity_service import IdentityService
from party_backend.services.party_lifecycle_service import PartyLifecycleService
from party_backend.services.store import Store
from party_backend.services.voter_personality import (
    DEMO_PERSONALITIES,
    DemoTimingConfig,
    VoterPersonality,
    generate_rating,
    personality_for_position,
)
from party_backend.utils.datetime_helpers import utc_now
from party_backend.utils.exceptions import (
    InvalidTransitionError,
    PartyCodeUnavailableError,
    VoteLockedError,
    party_not_found,
    player_not_found,
    song_not_found,
)

logger = logging.getLogger(__name__)

DEMO_PLAYER_NAMES = ["Demo Alex", "Demo Blake", "Demo Casey", "Demo Drew"]

DEMO_PARTY_SETTINGS = PartySettings(
    songs_per_player=2,
    play_duration=30,
    enable_confidence_betting=True,
    enable_progressive_weighting=True,
    bonus_category_count=2,
)

DEMO_CODE_ALPHABET = string.ascii_uppercase + string.digits
DEMO_CODE_LENGTH = 4

# Confidence wagers per player position, indexed by song number
CONFIDENCE_PATTERNS = [
    [3, 4, 5],  # increasing
    [5, 3, 2],  # decreasing
    [2, 5, 3],  # mixed
    [4, 2, 4],  # u-shape
]

NORMAL_FINALE_ANIMATION_SPEED = 1.0


@dataclass(frozen=True)
class DemoParty:
    party: Party
    players: List[Player]


def varied_confidence(player_position: int, song_number: int) -> int:
    """Confidence wager for a demo player's Nth song (1-based)."""
    pattern = CONFIDENCE_PATTERNS[player_position % len(CONFIDENCE_PATTERNS)]
    return pattern[(song_number - 1) % len(pattern)]


class DemoService:
    """Drives unattended demo parties through the normal lifecycle."""

    def __init__(
        self,
        store: Store,
        lifecycle: PartyLifecycleService,
        identity_service: IdentityService,
        catalog: StaticCatalog,
        settings: Optional[Settings] = None,
    ):
        self.store = store
        self.lifecycle = lifecycle
        self.identity_service = identity_service
        self.catalog = catalog
        self.settings = settings or get_settings()

    async def _generate_demo_code(self, rng: random.Random) -> str:
        for _ in range(self.settings.demo_code_max_attempts):
            code = "".join(rng.choice(DEMO_CODE_ALPHABET) for _ in range(DEMO_CODE_LENGTH))
            if not await self.store.code_in_use(code):
                return code

        logger.error(f"No unused demo code after {self.settings.demo_code_max_attempts} attempts")
        raise PartyCodeUnavailableError("Unable to generate unique demo party code")

    async def create_demo_party(self, rng: Optional[random.Random] = None) -> DemoParty:
        """Create a demo party in LOBBY with four simulated players.

        The first player is the host. Every player receives a unique
        anonymous identity.

        Args:
            rng: Random source for the join code and identities

        Returns:
            DemoParty: The party and its players, host first

        Raises:
            PartyCodeUnavailableError: If no unused code could be found
            IdentityPoolExhaustedError: If identities cannot be assigned
        """
        rng = rng or random.Random()
        code = await self._generate_demo_code(rng)

        party_id = uuid.uuid4()
        player_ids = [uuid.uuid4() for _ in DEMO_PLAYER_NAMES]
        host_id = player_ids[0]
        joined_at = utc_now()

        items = [(EntityType.PARTY, {
            "party_id": party_id,
            "code": code,
            "host_id": host_id,
            "status": PartyStatus.LOBBY.value,
            "is_demo_mode": True,
            "settings": DEMO_PARTY_SETTINGS,
        })]
        for position, (player_id, name) in enumerate(zip(player_ids, DEMO_PLAYER_NAMES)):
            items.append((EntityType.PLAYER, {
                "player_id": player_id,
                "party_id": party_id,
                "name": name,
                "status": PlayerStatus.CONNECTED.value,
                "is_host": player_id == host_id,
                # Distinct join times keep the host-first ordering stable
                "joined_at": joined_at + timedelta(microseconds=position),
            }))

        _, identity_items = self.identity_service.plan(party_id, player_ids, rng)
        items.extend(identity_items)

        created = await self.store.create_many(items)
        party, players = created[0], created[1:len(player_ids) + 1]

        logger.info(f"Created demo party {party_id} with code {code}")
        return DemoParty(party=party, players=players)

    async def run_demo_party(self, rng: Optional[random.Random] = None) -> DemoParty:
        """Start a demo party; alias of :meth:`create_demo_party`."""
        return await self.create_demo_party(rng)

    async def get_party(self, party_id: UUID) -> Party:
        party = await self.store.get(EntityType.PARTY, party_id)
        if not party:
            raise party_not_found(party_id)
        return party

    async def populate_demo_songs(self, party_id: UUID) -> List[Song]:
        """Auto-submit songs for every player of a demo party in LOBBY.

        Each player, in join order, submits ``songs_per_player`` tracks from
        the curated playlist (cycling when it runs out) with varied confidence
        wagers. The songs and the LOBBY -> SUBMITTING transition are written
        in one transaction. A party without players is left untouched.

        Raises:
            NotFoundError: If the party doesn't exist (PARTY_NOT_FOUND)
            InvalidTransitionError: If the party is not in LOBBY, or changed
                state concurrently
        """
        party = await self.get_party(party_id)
        status = PartyStatus(party.status)
        if status != PartyStatus.LOBBY:
            logger.warning(f"Refusing to populate songs for party {party_id} in {status.value}")
            raise InvalidTransitionError(
                f"Demo songs can only be submitted from LOBBY (party is {status.value})"
            )

        players = await self.store.list_players_for_party(party_id)
        if not players:
            logger.warning(f"Demo party {party_id} has no players; no songs submitted")
            return []

        tracks = self.catalog.curated_demo_tracks()
        songs_per_player = party.settings.songs_per_player

        items = []
        track_index = 0
        for position, player in enumerate(players):
            for song_number in range(1, songs_per_player + 1):
                track: DemoTrack = tracks[track_index % len(tracks)]
                track_index += 1
                items.append((EntityType.SONG, {
                    "party_id": party_id,
                    "submitter_id": player.player_id,
                    "round_number": song_number,
                    "confidence": varied_confidence(position, song_number),
                    "track_id": track.track_id,
                    "title": track.title,
                    "artist": track.artist,
                    "duration_ms": track.duration_ms,
                    "artwork_url": track.artwork_url,
                    "permalink_url": track.permalink_url,
                }))

        _, songs = await self.lifecycle.advance_with_entities(
            party_id, items, expected_status=PartyStatus.LOBBY
        )
        logger.info(f"Submitted {len(songs)} demo songs for party {party_id}")
        return songs

    async def simulate_voting(
        self,
        song_id: UUID,
        voter_ids: Sequence[UUID],
        rng: Optional[random.Random] = None,
    ) -> List[Vote]:
        """Cast one personality-driven vote per voter on a song.

        Personalities are assigned by the voter's position in ``voter_ids``.
        The song's submitter is skipped. All votes are created together and
        locked on creation.

        Raises:
            NotFoundError: SONG_NOT_FOUND or PLAYER_NOT_FOUND
            VoteLockedError: If a voter already voted on the song
        """
        song = await self.store.get(EntityType.SONG, song_id)
        if not song:
            raise song_not_found(song_id)

        rng = rng or random.Random()
        now = utc_now()
        seen = set()
        items = []

        for position, voter_id in enumerate(voter_ids):
            if voter_id == song.submitter_id:
                logger.debug(f"Skipping submitter {voter_id} when simulating votes on song {song_id}")
                continue

            if not await self.store.get(EntityType.PLAYER, voter_id):
                raise player_not_found(voter_id)
            if voter_id in seen or await self.store.find_vote(song_id, voter_id):
                raise VoteLockedError(f"Player {voter_id} has already voted on song {song_id}")
            seen.add(voter_id)

            rating = generate_rating(personality_for_position(position), rng)
            items.append((EntityType.VOTE, {
                "song_id": song_id,
                "voter_id": voter_id,
                "rating": rating,
                "is_locked": True,
                "voted_at": now,
                "locked_at": now,
            }))

        votes = await self.store.create_many(items)
        logger.info(f"Simulated {len(votes)} votes on song {song_id}")
        return votes

    async def advance_demo(self, party_id: UUID) -> PartyStatus:
        """Apply exactly one lifecycle transition to a demo party.

        From LOBBY the transition happens through :meth:`populate_demo_songs`
        so the party enters SUBMITTING with its songs in place; a party
        without players just advances.

        Raises:
            NotFoundError: If the party doesn't exist (PARTY_NOT_FOUND)
            InvalidTransitionError: If the party is already COMPLETE
        """
        party = await self.get_party(party_id)

        if PartyStatus(party.status) == PartyStatus.LOBBY:
            if await self.populate_demo_songs(party_id):
                return PartyStatus.SUBMITTING

        return await self.lifecycle.advance_party_state(party_id)

    async def is_demo_mode(self, party_id: UUID) -> bool:
        party = await self.get_party(party_id)
        return bool(party.is_demo_mode)

    async def get_effective_play_duration(self, party_id: UUID) -> int:
        """Seconds each song plays; demo parties use the shortened demo duration."""
        party = await self.get_party(party_id)
        if party.is_demo_mode:
            return self.settings.demo_play_duration_seconds
        return party.settings.play_duration

    async def get_effective_finale_animation_speed(self, party_id: UUID) -> float:
        party = await self.get_party(party_id)
        if party.is_demo_mode:
            return self.settings.demo_finale_animation_speed
        return NORMAL_FINALE_ANIMATION_SPEED

    def get_demo_playlist(self) -> List[DemoTrack]:
        return self.catalog.curated_demo_tracks()

    def get_voter_personalities(self) -> List[VoterPersonality]:
        return list(DEMO_PERSONALITIES)

    def get_demo_timing_config(self) -> DemoTimingConfig:
        return DemoTimingConfig(
            play_duration_seconds=self.settings.demo_play_duration_seconds,
            finale_animation_speed=self.settings.demo_finale_animation_speed,
        )
