"""Tests for vote casting and scoring."""
from types import SimpleNamespace
import random
import uuid

import pytest

from party_backend.models import EntityType, PartyStatus
from party_backend.schemas.party import PartySettings
from party_backend.services.scoring_service import (
    BONUS_CATEGORIES,
    assign_competition_ranks,
    bold_move,
    crowd_favorite,
    cult_classic,
    hidden_gem,
    vote_variance,
    weighted_average,
    apply_confidence_modifier,
    calculate_vote_distribution,
    get_weight_multiplier,
)
from party_backend.utils.exceptions import (
    CannotVoteOwnSongError,
    InvalidRatingError,
    InvalidStateError,
    NotFoundError,
    VoteLockedError,
)


class TestConfidenceModifier:
    @pytest.mark.parametrize(
        "average, confidence, expected",
        [
            (8.0, 5, 2.0),
            (7.0, 4, 2.0),
            (4.0, 4, -2.0),
            (2.5, 5, -2.0),
            (5.5, 5, 0.0),
            (9.0, 3, 0.0),
            (1.0, 1, 0.0),
        ],
    )
    def test_modifier(self, average, confidence, expected):
        assert apply_confidence_modifier(average, confidence, enabled=True) == expected

    def test_disabled_betting_never_modifies(self):
        assert apply_confidence_modifier(9.0, 5, enabled=False) == 0.0
        assert apply_confidence_modifier(1.0, 5, enabled=False) == 0.0


class TestWeightMultiplier:
    def test_single_round(self):
        assert get_weight_multiplier(1, 1) == 1.5

    def test_two_rounds(self):
        assert [get_weight_multiplier(r, 2) for r in (1, 2)] == [1.0, 2.0]

    def test_three_rounds(self):
        assert [get_weight_multiplier(r, 3) for r in (1, 2, 3)] == [1.0, 1.5, 2.0]

    def test_disabled_weighting(self):
        assert get_weight_multiplier(2, 2, enabled=False) == 1.0

    def test_unknown_round_count(self):
        assert get_weight_multiplier(1, 7) == 1.0


def test_vote_distribution():
    votes = [SimpleNamespace(rating=r) for r in (1, 10, 7, 7, 3)]
    assert calculate_vote_distribution(votes) == [1, 0, 1, 0, 0, 0, 2, 0, 0, 1]


class TestCastVote:
    @pytest.mark.asyncio
    async def test_vote_is_locked_on_creation(self, services, party_factory, song_factory):
        party, players = await party_factory(status=PartyStatus.PLAYING)
        song = await song_factory(party, players[0])

        vote = await services.scoring.cast_vote(song.song_id, players[1].player_id, 8)
        assert vote.is_locked is True
        assert vote.locked_at is not None
        assert vote.rating == 8

    @pytest.mark.asyncio
    async def test_cannot_vote_twice(self, services, party_factory, song_factory):
        party, players = await party_factory(status=PartyStatus.PLAYING)
        song = await song_factory(party, players[0])
        await services.scoring.cast_vote(song.song_id, players[1].player_id, 8)

        with pytest.raises(VoteLockedError):
            await services.scoring.cast_vote(song.song_id, players[1].player_id, 3)

    @pytest.mark.asyncio
    async def test_cannot_vote_own_song(self, services, party_factory, song_factory):
        party, players = await party_factory(status=PartyStatus.PLAYING)
        song = await song_factory(party, players[0])

        with pytest.raises(CannotVoteOwnSongError):
            await services.scoring.cast_vote(song.song_id, players[0].player_id, 8)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rating", [0, 11, 5.5, True])
    async def test_rating_out_of_range(self, services, party_factory, song_factory, rating):
        party, players = await party_factory(status=PartyStatus.PLAYING)
        song = await song_factory(party, players[0])

        with pytest.raises(InvalidRatingError) as exc_info:
            await services.scoring.cast_vote(song.song_id, players[1].player_id, rating)
        assert exc_info.value.code == "INVALID_VOTE_RATING"

    @pytest.mark.asyncio
    async def test_votes_only_while_playing(self, services, party_factory, song_factory):
        party, players = await party_factory(status=PartyStatus.SUBMITTING)
        song = await song_factory(party, players[0])

        with pytest.raises(InvalidStateError):
            await services.scoring.cast_vote(song.song_id, players[1].player_id, 8)

    @pytest.mark.asyncio
    async def test_missing_song_and_voter(self, services, party_factory, song_factory):
        party, players = await party_factory(status=PartyStatus.PLAYING)
        song = await song_factory(party, players[0])

        with pytest.raises(NotFoundError) as exc_info:
            await services.scoring.cast_vote(uuid.uuid4(), players[1].player_id, 8)
        assert exc_info.value.code == "SONG_NOT_FOUND"

        with pytest.raises(NotFoundError) as exc_info:
            await services.scoring.cast_vote(song.song_id, uuid.uuid4(), 8)
        assert exc_info.value.code == "PLAYER_NOT_FOUND"


class TestSongScore:
    @pytest.mark.asyncio
    async def test_final_score_combines_weight_confidence_and_theme(
        self, services, store, party_factory, song_factory, vote_factory
    ):
        party, players = await party_factory(party_settings=PartySettings(songs_per_player=2))
        song = await song_factory(party, players[0], round_number=2, confidence=5)
        await vote_factory(song, players[1], rating=8, theme_adherence_rating=5)
        await vote_factory(song, players[2], rating=9, theme_adherence_rating=4)
        await vote_factory(song, players[3], rating=7)

        score = await services.calculate_song_score(song.song_id)

        assert score.raw_average == pytest.approx(8.0)
        assert score.weight_multiplier == 2.0
        assert score.weighted_score == pytest.approx(16.0)
        assert score.confidence_modifier == 2.0
        assert score.theme_bonus == 0.5
        assert score.final_score == pytest.approx(18.5)
        assert score.vote_count == 3
        assert score.vote_distribution == [0, 0, 0, 0, 0, 0, 1, 1, 1, 0]

        stored = await store.get(EntityType.SONG, song.song_id)
        assert stored.final_score == pytest.approx(18.5)
        assert stored.theme_bonus == 0.5
        assert stored.vote_distribution == score.vote_distribution

    @pytest.mark.asyncio
    async def test_settings_flags_disable_weighting_and_betting(
        self, services, party_factory, song_factory, vote_factory
    ):
        flags_off = PartySettings(
            songs_per_player=2,
            enable_confidence_betting=False,
            enable_progressive_weighting=False,
        )
        party, players = await party_factory(party_settings=flags_off)
        song = await song_factory(party, players[0], round_number=2, confidence=5)
        await vote_factory(song, players[1], rating=2)

        score = await services.calculate_song_score(song.song_id)
        assert score.weight_multiplier == 1.0
        assert score.confidence_modifier == 0.0
        assert score.final_score == pytest.approx(2.0)

    @pytest.mark.asyncio
    async def test_song_without_votes_scores_zero(self, services, party_factory, song_factory):
        party, players = await party_factory()
        song = await song_factory(party, players[0], confidence=5)

        score = await services.calculate_song_score(song.song_id)
        # A zero average counts as a low score for a high wager
        assert score.raw_average == 0.0
        assert score.final_score == pytest.approx(-2.0)

    @pytest.mark.asyncio
    async def test_player_score_sums_songs(self, services, party_factory, song_factory, vote_factory):
        party, players = await party_factory(party_settings=PartySettings(songs_per_player=2))
        first = await song_factory(party, players[0], round_number=1, confidence=3)
        second = await song_factory(party, players[0], round_number=2, confidence=3)
        await vote_factory(first, players[1], rating=6)
        await vote_factory(second, players[1], rating=5)

        total = await services.scoring.calculate_player_score(players[0].player_id, party.party_id)
        assert total == pytest.approx(6.0 * 1.0 + 5.0 * 2.0)

    @pytest.mark.asyncio
    async def test_player_without_songs_scores_zero(self, services, party_factory):
        party, players = await party_factory()
        assert await services.scoring.calculate_player_score(players[1].player_id, party.party_id) == 0.0

    @pytest.mark.asyncio
    async def test_super_votes_weigh_more_in_the_average(
        self, services, store, party_factory, song_factory
    ):
        party, players = await party_factory(status=PartyStatus.PLAYING)
        song = await song_factory(party, players[0])

        vote = await services.scoring.cast_vote(song.song_id, players[1].player_id, 10, super_vote=True)
        await services.scoring.cast_vote(song.song_id, players[2].player_id, 4)
        assert vote.is_super_vote is True

        score = await services.calculate_song_score(song.song_id)
        assert score.raw_average == pytest.approx((10 * 1.5 + 4) / 2.5)
        assert score.vote_distribution[9] == 1


def test_weighted_average():
    votes = [
        SimpleNamespace(rating=10, is_super_vote=True),
        SimpleNamespace(rating=4, is_super_vote=False),
    ]
    assert weighted_average(votes) == pytest.approx(7.6)
    assert weighted_average(votes[1:]) == 4.0
    assert weighted_average([]) == 0.0


@pytest.mark.asyncio
async def test_whole_number_float_rating_accepted(services, party_factory, song_factory):
    party, players = await party_factory(status=PartyStatus.PLAYING)
    song = await song_factory(party, players[0])

    vote = await services.scoring.cast_vote(song.song_id, players[1].player_id, 8.0)
    assert vote.rating == 8
    assert vote.is_super_vote is False


class TestLockVote:
    @pytest.mark.asyncio
    async def test_lock_unlocked_vote(self, services, party_factory, song_factory, vote_factory):
        party, players = await party_factory()
        song = await song_factory(party, players[0])
        vote = await vote_factory(song, players[1], locked=False)
        assert vote.is_locked is False
        assert vote.locked_at is None

        locked = await services.lock_vote(song.song_id, players[1].player_id)
        assert locked.vote_id == vote.vote_id
        assert locked.is_locked is True
        assert locked.locked_at is not None

        again = await services.lock_vote(song.song_id, players[1].player_id)
        assert again.locked_at == locked.locked_at

    @pytest.mark.asyncio
    async def test_lock_missing_vote(self, services, party_factory, song_factory):
        party, players = await party_factory()
        song = await song_factory(party, players[0])

        with pytest.raises(NotFoundError) as exc_info:
            await services.lock_vote(song.song_id, players[1].player_id)
        assert exc_info.value.code == "VOTE_NOT_FOUND"


def _song(weighted_score=None, confidence=3, distribution=None):
    return SimpleNamespace(
        song_id=uuid.uuid4(),
        weighted_score=weighted_score,
        confidence=confidence,
        vote_distribution=distribution,
    )


class TestBonusCategoryRules:
    def test_crowd_favorite_first_song_wins_ties(self):
        first, second, unscored = _song(8.0), _song(8.0), _song(None)
        assert crowd_favorite([unscored, first, second]) is first
        assert crowd_favorite([unscored]) is None

    def test_cult_classic_picks_highest_variance(self):
        split = _song(5.5, distribution=[1, 0, 0, 0, 0, 0, 0, 0, 0, 1])
        agreed = _song(5.0, distribution=[0, 0, 0, 0, 2, 0, 0, 0, 0, 0])
        silent = _song(0.0, distribution=[0] * 10)
        assert cult_classic([agreed, silent, split]) is split
        assert cult_classic([silent]) is None

    def test_hidden_gem_and_bold_move_filter_on_confidence(self):
        timid = _song(6.0, confidence=2)
        timid_better = _song(7.0, confidence=1)
        bold = _song(5.0, confidence=5)
        middle = _song(9.0, confidence=3)
        songs = [timid, timid_better, bold, middle]

        assert hidden_gem(songs) is timid_better
        assert bold_move(songs) is bold
        assert bold_move([middle]) is None

    def test_vote_variance(self):
        assert vote_variance([1, 10]) == pytest.approx(20.25)
        assert vote_variance([5, 5]) == 0.0
        assert vote_variance([]) == 0.0

    def test_catalog(self):
        assert [c.category_id for c in BONUS_CATEGORIES] == [
            "crowd-favorite", "cult-classic", "hidden-gem", "bold-move",
        ]
        assert all(c.points == 10 for c in BONUS_CATEGORIES)


def test_competition_ranks_share_ties():
    assert assign_competition_ranks([20.0, 20.0, 15.0, 10.0, 10.0]) == [1, 1, 3, 4, 4]
    assert assign_competition_ranks([]) == []


class TestBonusSelection:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("count, expected", [(0, 0), (-1, 0), (2, 2), (4, 4), (9, 4)])
    async def test_select_count(self, services, party_factory, count, expected):
        party, _ = await party_factory()

        selected = await services.scoring.select_bonus_categories(party.party_id, count, random.Random(3))
        assert len(selected) == expected
        assert len({c.category_id for c in selected}) == expected

    @pytest.mark.asyncio
    async def test_select_missing_party(self, services):
        with pytest.raises(NotFoundError) as exc_info:
            await services.scoring.select_bonus_categories(uuid.uuid4(), 2)
        assert exc_info.value.code == "PARTY_NOT_FOUND"


class TestBonusWinners:
    @pytest.mark.asyncio
    async def test_winners_follow_category_rules(self, services, party_factory, song_factory, vote_factory):
        party, players = await party_factory(party_settings=PartySettings(bonus_category_count=3))
        favorite = await song_factory(party, players[0], confidence=5)
        polarizing = await song_factory(party, players[1], confidence=1)
        gem = await song_factory(party, players[2], confidence=2)
        for voter, rating in ((players[1], 9), (players[2], 9)):
            await vote_factory(favorite, voter, rating=rating)
        for voter, rating in ((players[0], 1), (players[2], 10)):
            await vote_factory(polarizing, voter, rating=rating)
        for voter, rating in ((players[0], 7), (players[1], 7)):
            await vote_factory(gem, voter, rating=rating)
        expected = {
            "crowd-favorite": favorite,
            "cult-classic": polarizing,
            "hidden-gem": gem,
            "bold-move": favorite,
        }

        results = await services.calculate_bonus_winners(party.party_id, random.Random(11))

        assert len(results) == 3
        assert [r.reveal_order for r in results] == [1, 2, 3]
        for result in results:
            winner = expected[result.category_id]
            assert result.winning_song_id == winner.song_id
            assert result.winner_player_id == winner.submitter_id
            assert result.points == 10

        stored = await services.scoring.get_bonus_results(party.party_id)
        assert [r.bonus_result_id for r in stored] == [r.bonus_result_id for r in results]

        again = await services.calculate_bonus_winners(party.party_id, random.Random(99))
        assert [r.bonus_result_id for r in again] == [r.bonus_result_id for r in results]

        points = await services.scoring.calculate_player_bonus_points(players[0].player_id, party.party_id)
        assert points == 10 * sum(1 for r in results if r.winner_player_id == players[0].player_id)

    @pytest.mark.asyncio
    async def test_categories_without_winner_are_skipped(self, services, party_factory, song_factory, vote_factory):
        party, players = await party_factory(party_settings=PartySettings(bonus_category_count=3))
        song = await song_factory(party, players[0], confidence=3)
        await vote_factory(song, players[1], rating=6)

        results = await services.calculate_bonus_winners(party.party_id, random.Random(5))

        # Three of four categories always include hidden-gem or bold-move
        assert len(results) < 3
        assert {r.category_id for r in results} <= {"crowd-favorite", "cult-classic"}
        assert [r.reveal_order for r in results] == list(range(1, len(results) + 1))

    @pytest.mark.asyncio
    async def test_no_bonus_categories_configured(self, services, party_factory, song_factory, vote_factory):
        party, players = await party_factory(party_settings=PartySettings(bonus_category_count=0))
        song = await song_factory(party, players[0])
        await vote_factory(song, players[1], rating=9)

        assert await services.calculate_bonus_winners(party.party_id) == []
        assert await services.scoring.get_bonus_results(party.party_id) == []

    @pytest.mark.asyncio
    async def test_missing_party(self, services):
        with pytest.raises(NotFoundError) as exc_info:
            await services.calculate_bonus_winners(uuid.uuid4())
        assert exc_info.value.code == "PARTY_NOT_FOUND"


async def _award(store, party, song, category_index=0):
    category = BONUS_CATEGORIES[category_index]
    return await store.create(EntityType.BONUS_RESULT, {
        "party_id": party.party_id,
        "category_id": category.category_id,
        "category_name": category.name,
        "winning_song_id": song.song_id,
        "winner_player_id": song.submitter_id,
        "points": category.points,
        "reveal_order": 1,
    })


class TestScoreBreakdown:
    @pytest.mark.asyncio
    async def test_breakdown_parts_add_up(self, services, store, party_factory, song_factory, vote_factory):
        party, players = await party_factory(party_settings=PartySettings(songs_per_player=2))
        first = await song_factory(party, players[0], round_number=1, confidence=5)
        second = await song_factory(party, players[0], round_number=2, confidence=3)
        await vote_factory(first, players[1], rating=8)
        await vote_factory(second, players[1], rating=5)

        breakdown = await services.calculate_score_breakdown(players[0].player_id, party.party_id)
        assert breakdown.base_score == pytest.approx(8.0 + 10.0)
        assert breakdown.round_multiplier == pytest.approx(1.5)
        assert breakdown.confidence_modifier == 2.0
        assert breakdown.theme_bonus == 0.0
        assert breakdown.bonus_points == 0
        assert breakdown.final_score == pytest.approx(20.0)

        await _award(store, party, first)
        breakdown = await services.calculate_score_breakdown(players[0].player_id, party.party_id)
        assert breakdown.bonus_points == 10
        assert breakdown.final_score == pytest.approx(30.0)

    @pytest.mark.asyncio
    async def test_player_without_songs(self, services, party_factory):
        party, players = await party_factory()

        breakdown = await services.calculate_score_breakdown(players[2].player_id, party.party_id)
        assert breakdown.base_score == 0.0
        assert breakdown.round_multiplier == 1.0
        assert breakdown.final_score == 0.0

    @pytest.mark.asyncio
    async def test_missing_player(self, services, party_factory):
        party, _ = await party_factory()

        with pytest.raises(NotFoundError) as exc_info:
            await services.calculate_score_breakdown(uuid.uuid4(), party.party_id)
        assert exc_info.value.code == "PLAYER_NOT_FOUND"


class TestFinalStandings:
    @pytest.mark.asyncio
    async def test_ranked_with_ties_sharing_a_place(self, services, party_factory, song_factory, vote_factory):
        party, players = await party_factory(party_settings=PartySettings(songs_per_player=1))
        await services.identities.assign_unique(
            party.party_id, [p.player_id for p in players[:3]], random.Random(2)
        )
        top = await song_factory(party, players[0])
        await vote_factory(top, players[1], rating=8)
        for submitter in players[1:3]:
            song = await song_factory(party, submitter)
            await vote_factory(song, players[3], rating=6)

        standings = await services.calculate_final_standings(party.party_id)

        assert [s.player_id for s in standings] == [p.player_id for p in players]
        assert [s.rank for s in standings] == [1, 2, 2, 4]
        assert standings[0].final_score == pytest.approx(12.0)
        assert standings[0].highest_song.song_id == top.song_id
        assert standings[0].lowest_song.song_id == top.song_id
        assert standings[0].real_name == "Player 1"
        assert standings[0].alias != "Unknown"

        last = standings[3]
        assert last.songs == []
        assert last.final_score == 0.0
        assert last.highest_song is None
        assert last.alias == "Unknown"

    @pytest.mark.asyncio
    async def test_bonus_points_can_change_the_order(self, services, store, party_factory, song_factory, vote_factory):
        party, players = await party_factory(player_count=2, party_settings=PartySettings(songs_per_player=1))
        leader = await song_factory(party, players[0])
        trailer = await song_factory(party, players[1])
        await vote_factory(leader, players[1], rating=9)
        await vote_factory(trailer, players[0], rating=5)
        await _award(store, party, trailer, category_index=1)

        standings = await services.calculate_final_standings(party.party_id)

        assert standings[0].player_id == players[1].player_id
        assert standings[0].bonus_points == 10
        assert standings[0].bonus_categories == ["Cult Classic"]
        assert standings[0].final_score == pytest.approx(5 * 1.5 + 10)
        assert standings[0].score_breakdown.bonus_points == 10
        assert [s.rank for s in standings] == [1, 2]

    @pytest.mark.asyncio
    async def test_party_without_players(self, services, party_factory):
        party, _ = await party_factory(player_count=0)
        assert await services.calculate_final_standings(party.party_id) == []

    @pytest.mark.asyncio
    async def test_missing_party(self, services):
        with pytest.raises(NotFoundError) as exc_info:
            await services.calculate_final_standings(uuid.uuid4())
        assert exc_info.value.code == "PARTY_NOT_FOUND"
