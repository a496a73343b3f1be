"""Song voting, scoring and theme adherence API router."""
from dataclasses import asdict
from fastapi import APIRouter, Depends
from typing import List
from uuid import UUID
import logging

from party_backend.dependencies import get_services
from party_backend.schemas.party import CastVoteRequest, VoteResponse
from party_backend.schemas.scoring import BonusCategoryResponse, SongScoreResponse
from party_backend.schemas.theme import RecordAdherenceRequest, ThemeBonusResponse
from party_backend.services.container import PartyServices
from party_backend.services.scoring_service import BONUS_CATEGORIES

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/songs/{song_id}/votes", response_model=VoteResponse, status_code=201)
async def cast_vote(
    song_id: UUID,
    request: CastVoteRequest,
    services: PartyServices = Depends(get_services),
):
    """Cast a vote on a song. Votes are locked once cast."""
    vote = await services.scoring.cast_vote(song_id, request.voter_id, request.rating, request.super_vote)
    return VoteResponse.model_validate(vote)


@router.get("/songs/{song_id}/theme-bonus", response_model=ThemeBonusResponse)
async def get_theme_bonus(
    song_id: UUID,
    services: PartyServices = Depends(get_services),
):
    """Theme bonus the song currently earns from adherence ratings."""
    bonus = await services.compute_theme_bonus(song_id)
    return ThemeBonusResponse(song_id=song_id, theme_bonus=bonus)


@router.post("/songs/{song_id}/score", response_model=SongScoreResponse)
async def score_song(
    song_id: UUID,
    services: PartyServices = Depends(get_services),
):
    """Compute, store and return the song's score breakdown."""
    score = await services.calculate_song_score(song_id)
    return SongScoreResponse(**asdict(score))


@router.put("/votes/{vote_id}/theme-adherence", response_model=VoteResponse)
async def record_theme_adherence(
    vote_id: UUID,
    request: RecordAdherenceRequest,
    services: PartyServices = Depends(get_services),
):
    """Record a 1-5 theme adherence rating on a vote."""
    vote = await services.record_theme_adherence(vote_id, request.rating)
    return VoteResponse.model_validate(vote)


@router.post("/songs/{song_id}/votes/{voter_id}/lock", response_model=VoteResponse)
async def lock_vote(
    song_id: UUID,
    voter_id: UUID,
    services: PartyServices = Depends(get_services),
):
    """Lock a vote. Already-locked votes come back unchanged."""
    vote = await services.lock_vote(song_id, voter_id)
    return VoteResponse.model_validate(vote)


@router.get("/bonus-categories", response_model=List[BonusCategoryResponse])
async def list_bonus_categories():
    """Every bonus category a finale can award."""
    return [BonusCategoryResponse.model_validate(c) for c in BONUS_CATEGORIES]
