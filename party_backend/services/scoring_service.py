"""Vote casting, song/player scoring, bonus categories and final standings."""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence
from uuid import UUID
import logging
import random

from party_backend.models import BonusResult, EntityType, PartyStatus, Song, Vote
from party_backend.services.store import Store
from party_backend.services.theme_service import ThemeService, integral_rating
from party_backend.utils.datetime_helpers import utc_now
from party_backend.utils.exceptions import (
    CannotVoteOwnSongError,
    InvalidRatingError,
    InvalidStateError,
    NotFoundError,
    VoteLockedError,
    party_not_found,
    player_not_found,
    song_not_found,
)

logger = logging.getLogger(__name__)

MIN_VOTE_RATING = 1
MAX_VOTE_RATING = 10
SUPER_VOTE_WEIGHT = 1.5

CONFIDENCE_MODIFIER_THRESHOLD = 4  # Minimum wager that puts points at stake
CONFIDENCE_BONUS = 2.0
CONFIDENCE_PENALTY = -2.0
HIGH_SCORE_AVERAGE = 7.0
LOW_SCORE_AVERAGE = 4.0

BONUS_CATEGORY_POINTS = 10
HIDDEN_GEM_MAX_CONFIDENCE = 2
BOLD_MOVE_CONFIDENCE = 5

UNKNOWN_ALIAS = "Unknown"

# Round weights by number of rounds (songs per player)
_ROUND_WEIGHTS = {
    1: (1.5,),
    2: (1.0, 2.0),
    3: (1.0, 1.5, 2.0),
}


@dataclass(frozen=True)
class SongScore:
    song_id: UUID
    raw_average: float
    weight_multiplier: float
    weighted_score: float
    confidence_modifier: float
    theme_bonus: float
    final_score: float
    vote_count: int
    vote_distribution: List[int]


@dataclass(frozen=True)
class BonusCategory:
    """A finale award and the rule that picks its winning song."""
    category_id: str
    name: str
    icon: str
    description: str
    points: int
    calculate: Callable[[Sequence[Song]], Optional[Song]] = field(repr=False, compare=False)


@dataclass(frozen=True)
class ScoreBreakdown:
    base_score: float
    round_multiplier: float
    confidence_modifier: float
    bonus_points: int
    theme_bonus: float
    final_score: float


@dataclass
class FinalStanding:
    """One row of the finale leaderboard."""
    rank: int
    player_id: UUID
    alias: str
    real_name: str
    songs: List[Song]
    total_base_score: float
    confidence_modifiers: float
    bonus_points: int
    final_score: float
    score_breakdown: ScoreBreakdown
    bonus_categories: List[str]
    highest_song: Optional[Song]
    lowest_song: Optional[Song]


def apply_confidence_modifier(raw_average: float, confidence: int, enabled: bool) -> float:
    """Points won or lost on a confidence wager.

    Only wagers of 4 or 5 count: +2 when the song averaged 7 or more,
    -2 when it averaged 4 or less.
    """
    if not enabled or confidence < CONFIDENCE_MODIFIER_THRESHOLD:
        return 0.0
    if raw_average >= HIGH_SCORE_AVERAGE:
        return CONFIDENCE_BONUS
    if raw_average <= LOW_SCORE_AVERAGE:
        return CONFIDENCE_PENALTY
    return 0.0


def get_weight_multiplier(round_number: int, total_rounds: int, enabled: bool = True) -> float:
    """Progressive weight of a round; later rounds count more."""
    if not enabled:
        return 1.0
    weights = _ROUND_WEIGHTS.get(total_rounds)
    if not weights:
        return 1.0
    index = max(1, min(round_number, len(weights))) - 1
    return weights[index]


def calculate_vote_distribution(votes: Iterable[Vote]) -> List[int]:
    """Count of votes per rating, index 0 holding rating 1."""
    distribution = [0] * MAX_VOTE_RATING
    for vote in votes:
        if MIN_VOTE_RATING <= vote.rating <= MAX_VOTE_RATING:
            distribution[vote.rating - 1] += 1
    return distribution


def weighted_average(votes: Sequence[Vote]) -> float:
    """Mean rating where a super vote weighs 1.5 and any other vote 1."""
    if not votes:
        return 0.0
    total_weight = 0.0
    weighted_sum = 0.0
    for vote in votes:
        weight = SUPER_VOTE_WEIGHT if vote.is_super_vote else 1.0
        weighted_sum += vote.rating * weight
        total_weight += weight
    return weighted_sum / total_weight


def vote_variance(ratings: Sequence[int]) -> float:
    """Population variance of a set of ratings (0 when empty)."""
    if not ratings:
        return 0.0
    mean = sum(ratings) / len(ratings)
    return sum((r - mean) ** 2 for r in ratings) / len(ratings)


def _ratings_from_distribution(distribution: Optional[Sequence[int]]) -> List[int]:
    ratings = []
    for index, count in enumerate(distribution or []):
        ratings.extend([index + 1] * count)
    return ratings


def _highest_weighted(songs: Iterable[Song]) -> Optional[Song]:
    # First song wins a tie
    best = None
    for song in songs:
        if song.weighted_score is None:
            continue
        if best is None or song.weighted_score > best.weighted_score:
            best = song
    return best


def crowd_favorite(songs: Sequence[Song]) -> Optional[Song]:
    return _highest_weighted(songs)


def cult_classic(songs: Sequence[Song]) -> Optional[Song]:
    """The most polarizing song: highest variance among songs with votes."""
    best = None
    best_variance = -1.0
    for song in songs:
        ratings = _ratings_from_distribution(song.vote_distribution)
        if not ratings:
            continue
        variance = vote_variance(ratings)
        if variance > best_variance:
            best, best_variance = song, variance
    return best


def hidden_gem(songs: Sequence[Song]) -> Optional[Song]:
    return _highest_weighted(s for s in songs if s.confidence <= HIDDEN_GEM_MAX_CONFIDENCE)


def bold_move(songs: Sequence[Song]) -> Optional[Song]:
    return _highest_weighted(s for s in songs if s.confidence == BOLD_MOVE_CONFIDENCE)


BONUS_CATEGORIES: List[BonusCategory] = [
    BonusCategory(
        category_id="crowd-favorite",
        name="Crowd Favorite",
        icon="👑",
        description="The song with the highest weighted score",
        points=BONUS_CATEGORY_POINTS,
        calculate=crowd_favorite,
    ),
    BonusCategory(
        category_id="cult-classic",
        name="Cult Classic",
        icon="🎭",
        description="The most polarizing song with the highest vote variance",
        points=BONUS_CATEGORY_POINTS,
        calculate=cult_classic,
    ),
    BonusCategory(
        category_id="hidden-gem",
        name="Hidden Gem",
        icon="💎",
        description="The highest-scoring song with low confidence (≤2)",
        points=BONUS_CATEGORY_POINTS,
        calculate=hidden_gem,
    ),
    BonusCategory(
        category_id="bold-move",
        name="Bold Move",
        icon="🎲",
        description="The highest-scoring song with maximum confidence (5)",
        points=BONUS_CATEGORY_POINTS,
        calculate=bold_move,
    ),
]


def assign_competition_ranks(scores: Sequence[float]) -> List[int]:
    """Ranks for scores already sorted descending; ties share a rank (1, 1, 3)."""
    ranks = []
    for index, score in enumerate(scores):
        if index > 0 and round(score, 6) == round(scores[index - 1], 6):
            ranks.append(ranks[-1])
        else:
            ranks.append(index + 1)
    return ranks


def _song_display_score(song: Song) -> float:
    if song.final_score is not None:
        return song.final_score
    return song.weighted_score or 0.0


class ScoringService:
    """Service for casting votes, scoring songs and ranking players."""

    def __init__(self, store: Store, theme_service: ThemeService):
        self.store = store
        self.theme_service = theme_service

    async def cast_vote(self, song_id: UUID, voter_id: UUID, rating: Any, super_vote: bool = False) -> Vote:
        """Cast a locked vote on a song.

        Args:
            song_id: Song being rated
            voter_id: Player casting the vote
            rating: Integer rating from 1 to 10
            super_vote: Count this vote 1.5x in the song's average

        Returns:
            Vote: The created vote, already locked

        Raises:
            NotFoundError: SONG_NOT_FOUND or PLAYER_NOT_FOUND
            InvalidStateError: If the party is not PLAYING
            InvalidRatingError: If rating is not an integer in 1-10
            CannotVoteOwnSongError: If the voter submitted the song
            VoteLockedError: If the voter already voted on the song
        """
        song = await self.store.get(EntityType.SONG, song_id)
        if not song:
            raise song_not_found(song_id)

        voter = await self.store.get(EntityType.PLAYER, voter_id)
        if not voter:
            raise player_not_found(voter_id)

        party = await self.store.get(EntityType.PARTY, song.party_id)
        if not party:
            raise party_not_found(song.party_id)
        if PartyStatus(party.status) != PartyStatus.PLAYING:
            raise InvalidStateError(f"Votes can only be cast while the party is PLAYING (party is {party.status})")

        value = integral_rating(rating, MIN_VOTE_RATING, MAX_VOTE_RATING)
        if value is None:
            logger.warning(f"Rejected vote rating {rating!r} on song {song_id}")
            raise InvalidRatingError(
                f"Rating must be between {MIN_VOTE_RATING} and {MAX_VOTE_RATING}",
                code="INVALID_VOTE_RATING",
                field="rating",
            )

        if song.submitter_id == voter_id:
            raise CannotVoteOwnSongError("Cannot vote on your own song")

        if await self.store.find_vote(song_id, voter_id):
            raise VoteLockedError("Vote is locked and cannot be changed")

        now = utc_now()
        vote = await self.store.create(EntityType.VOTE, {
            "song_id": song_id,
            "voter_id": voter_id,
            "rating": value,
            "is_super_vote": bool(super_vote),
            "is_locked": True,
            "voted_at": now,
            "locked_at": now,
        })

        logger.info(f"Player {voter_id} rated song {song_id}: {value}{' (super vote)' if super_vote else ''}")
        return vote

    async def lock_vote(self, song_id: UUID, voter_id: UUID) -> Vote:
        """Lock a voter's vote on a song. Locking twice is a no-op.

        Raises:
            NotFoundError: VOTE_NOT_FOUND
        """
        vote = await self.store.find_vote(song_id, voter_id)
        if not vote:
            raise NotFoundError(f"No vote by player {voter_id} on song {song_id}", code="VOTE_NOT_FOUND")
        if vote.is_locked:
            return vote

        locked = await self.store.update(EntityType.VOTE, vote.vote_id, {
            "is_locked": True,
            "locked_at": utc_now(),
        })
        logger.info(f"Locked vote {vote.vote_id} on song {song_id}")
        return locked

    async def calculate_song_score(self, song_id: UUID) -> SongScore:
        """Compute and persist the full score breakdown for a song.

        final = raw average * round weight + confidence modifier + theme bonus

        The raw average counts super votes 1.5x.

        Raises:
            NotFoundError: SONG_NOT_FOUND or PARTY_NOT_FOUND
        """
        song = await self.store.get(EntityType.SONG, song_id)
        if not song:
            raise song_not_found(song_id)

        party = await self.store.get(EntityType.PARTY, song.party_id)
        if not party:
            raise party_not_found(song.party_id)
        settings = party.settings

        votes = await self.store.list_votes_for_song(song_id)
        raw_average = weighted_average(votes)

        weight_multiplier = get_weight_multiplier(
            song.round_number,
            settings.songs_per_player,
            enabled=settings.enable_progressive_weighting,
        )
        weighted_score = raw_average * weight_multiplier
        confidence_modifier = apply_confidence_modifier(
            raw_average,
            song.confidence,
            settings.enable_confidence_betting,
        )
        theme_bonus = await self.theme_service.compute_theme_bonus(song_id)
        final_score = weighted_score + confidence_modifier + theme_bonus
        vote_distribution = calculate_vote_distribution(votes)

        await self.store.update(EntityType.SONG, song_id, {
            "raw_average": raw_average,
            "weighted_score": weighted_score,
            "confidence_modifier": confidence_modifier,
            "theme_bonus": theme_bonus,
            "final_score": final_score,
            "vote_distribution": vote_distribution,
        })

        logger.debug(
            f"Scored song {song_id}: raw={raw_average:.2f} x{weight_multiplier} "
            f"conf={confidence_modifier:+} theme={theme_bonus} final={final_score:.2f}"
        )

        return SongScore(
            song_id=song_id,
            raw_average=raw_average,
            weight_multiplier=weight_multiplier,
            weighted_score=weighted_score,
            confidence_modifier=confidence_modifier,
            theme_bonus=theme_bonus,
            final_score=final_score,
            vote_count=len(votes),
            vote_distribution=vote_distribution,
        )

    async def _scored_songs(self, songs: Iterable[Song]) -> List[Song]:
        """Songs with their score columns filled, scoring any that are not yet."""
        scored = []
        for song in songs:
            if song.final_score is None:
                await self.calculate_song_score(song.song_id)
                song = await self.store.get(EntityType.SONG, song.song_id)
            scored.append(song)
        return scored

    async def calculate_player_score(self, player_id: UUID, party_id: UUID) -> float:
        """Total final score of a player's songs in a party, scoring unscored songs."""
        player = await self.store.get(EntityType.PLAYER, player_id)
        if not player:
            raise player_not_found(player_id)

        party = await self.store.get(EntityType.PARTY, party_id)
        if not party:
            raise party_not_found(party_id)

        songs = await self._scored_songs(await self.store.list_songs_for_player(party_id, player_id))
        return sum(song.final_score for song in songs)

    # Bonus categories

    async def select_bonus_categories(
        self,
        party_id: UUID,
        count: int,
        rng: Optional[random.Random] = None,
    ) -> List[BonusCategory]:
        """Pick ``count`` distinct bonus categories for a party's finale."""
        party = await self.store.get(EntityType.PARTY, party_id)
        if not party:
            raise party_not_found(party_id)

        if count <= 0:
            return []
        if count >= len(BONUS_CATEGORIES):
            return list(BONUS_CATEGORIES)
        return (rng or random.Random()).sample(BONUS_CATEGORIES, count)

    async def calculate_bonus_winners(
        self,
        party_id: UUID,
        rng: Optional[random.Random] = None,
    ) -> List[BonusResult]:
        """Select the party's bonus categories, find each winner and persist the results.

        Categories nobody qualifies for are skipped. A party whose results are
        already stored gets those back unchanged.

        Raises:
            NotFoundError: PARTY_NOT_FOUND
        """
        party = await self.store.get(EntityType.PARTY, party_id)
        if not party:
            raise party_not_found(party_id)

        existing = await self.store.list_bonus_results(party_id)
        if existing:
            return existing

        count = party.settings.bonus_category_count
        if count <= 0:
            return []

        categories = await self.select_bonus_categories(party_id, count, rng)
        songs = await self._scored_songs(await self.store.list_songs_for_party(party_id))

        items = []
        for category in categories:
            winner = category.calculate(songs)
            if winner is None:
                logger.debug(f"No winner for bonus category {category.category_id} in party {party_id}")
                continue
            items.append((EntityType.BONUS_RESULT, {
                "party_id": party_id,
                "category_id": category.category_id,
                "category_name": category.name,
                "winning_song_id": winner.song_id,
                "winner_player_id": winner.submitter_id,
                "points": category.points,
                "reveal_order": len(items) + 1,
            }))

        results = await self.store.create_many(items)
        logger.info(f"Awarded {len(results)} bonus categories in party {party_id}")
        return results

    async def get_bonus_results(self, party_id: UUID) -> List[BonusResult]:
        return await self.store.list_bonus_results(party_id)

    async def calculate_player_bonus_points(self, player_id: UUID, party_id: UUID) -> int:
        results = await self.store.list_bonus_results(party_id)
        return sum(r.points for r in results if r.winner_player_id == player_id)

    # Finale

    def _breakdown(self, songs: Sequence[Song], settings, bonus_points: int) -> ScoreBreakdown:
        base_score = sum(s.weighted_score or 0.0 for s in songs)
        confidence_modifier = sum(s.confidence_modifier or 0.0 for s in songs)
        theme_bonus = sum(s.theme_bonus or 0.0 for s in songs)
        if songs:
            round_multiplier = sum(
                get_weight_multiplier(s.round_number, settings.songs_per_player, settings.enable_progressive_weighting)
                for s in songs
            ) / len(songs)
        else:
            round_multiplier = 1.0
        return ScoreBreakdown(
            base_score=base_score,
            round_multiplier=round_multiplier,
            confidence_modifier=confidence_modifier,
            bonus_points=bonus_points,
            theme_bonus=theme_bonus,
            final_score=base_score + confidence_modifier + theme_bonus + bonus_points,
        )

    async def calculate_score_breakdown(self, player_id: UUID, party_id: UUID) -> ScoreBreakdown:
        """Where a player's total comes from: base, wagers, theme bonus and awards.

        Raises:
            NotFoundError: PLAYER_NOT_FOUND or PARTY_NOT_FOUND
        """
        player = await self.store.get(EntityType.PLAYER, player_id)
        if not player:
            raise player_not_found(player_id)

        party = await self.store.get(EntityType.PARTY, party_id)
        if not party:
            raise party_not_found(party_id)

        songs = await self._scored_songs(await self.store.list_songs_for_player(party_id, player_id))
        bonus_points = await self.calculate_player_bonus_points(player_id, party_id)
        return self._breakdown(songs, party.settings, bonus_points)

    async def calculate_final_standings(self, party_id: UUID) -> List[FinalStanding]:
        """Leaderboard for the finale, best first, with competition ranking.

        Raises:
            NotFoundError: PARTY_NOT_FOUND
        """
        party = await self.store.get(EntityType.PARTY, party_id)
        if not party:
            raise party_not_found(party_id)

        players = await self.store.list_players_for_party(party_id)
        if not players:
            return []

        songs = await self._scored_songs(await self.store.list_songs_for_party(party_id))
        aliases = {i.player_id: i.alias for i in await self.store.list_identities_for_party(party_id)}
        bonus_results = await self.store.list_bonus_results(party_id)

        songs_by_player: Dict[UUID, List[Song]] = {p.player_id: [] for p in players}
        for song in songs:
            songs_by_player.setdefault(song.submitter_id, []).append(song)

        standings = []
        for player in players:
            player_songs = songs_by_player[player.player_id]
            won = [r for r in bonus_results if r.winner_player_id == player.player_id]
            breakdown = self._breakdown(player_songs, party.settings, sum(r.points for r in won))
            standings.append(FinalStanding(
                rank=0,
                player_id=player.player_id,
                alias=aliases.get(player.player_id, UNKNOWN_ALIAS),
                real_name=player.name,
                songs=player_songs,
                total_base_score=breakdown.base_score,
                confidence_modifiers=breakdown.confidence_modifier,
                bonus_points=breakdown.bonus_points,
                final_score=breakdown.final_score,
                score_breakdown=breakdown,
                bonus_categories=[r.category_name for r in won],
                highest_song=max(player_songs, key=_song_display_score, default=None),
                lowest_song=min(player_songs, key=_song_display_score, default=None),
            ))

        standings.sort(key=lambda s: s.final_score, reverse=True)
        for standing, rank in zip(standings, assign_competition_ranks([s.final_score for s in standings])):
            standing.rank = rank

        logger.info(f"Final standings for party {party_id}: {[(s.alias, s.rank) for s in standings]}")
        return standings
