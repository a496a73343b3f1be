"""Party lifecycle, party theme and finale scoring API router."""
from fastapi import APIRouter, Depends
from typing import List, Optional
from uuid import UUID
import logging
import random

from party_backend.dependencies import get_rng, get_services
from party_backend.schemas.party import AdvancePartyResponse
from party_backend.schemas.scoring import (
    BonusResultResponse,
    FinalStandingResponse,
    PlayerScoreResponse,
    ScoreBreakdownResponse,
)
from party_backend.schemas.theme import CreateCustomThemeRequest, PartyThemeResponse, SetThemeRequest
from party_backend.services.container import PartyServices

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/{party_id}/advance", response_model=AdvancePartyResponse)
async def advance_party(
    party_id: UUID,
    services: PartyServices = Depends(get_services),
):
    """Move a party to its next lifecycle state."""
    status = await services.advance_party_state(party_id)
    return AdvancePartyResponse(party_id=party_id, status=status)


@router.post("/{party_id}/themes/custom", response_model=PartyThemeResponse, status_code=201)
async def create_custom_theme(
    party_id: UUID,
    request: CreateCustomThemeRequest,
    services: PartyServices = Depends(get_services),
):
    """Create a custom party theme from constraints."""
    theme = await services.create_custom_theme(party_id, request.constraints)
    return PartyThemeResponse.model_validate(theme)


@router.put("/{party_id}/theme", response_model=PartyThemeResponse)
async def set_party_theme(
    party_id: UUID,
    request: SetThemeRequest,
    services: PartyServices = Depends(get_services),
):
    """Attach a predefined or custom theme to the party."""
    theme = await services.themes.set_party_theme(party_id, request.theme_id)
    return PartyThemeResponse.model_validate(theme)


@router.get("/{party_id}/players/{player_id}/score", response_model=PlayerScoreResponse)
async def get_player_score(
    party_id: UUID,
    player_id: UUID,
    services: PartyServices = Depends(get_services),
):
    """Total score of a player's songs in the party."""
    total = await services.scoring.calculate_player_score(player_id, party_id)
    return PlayerScoreResponse(party_id=party_id, player_id=player_id, total_score=total)


@router.get("/{party_id}/players/{player_id}/breakdown", response_model=ScoreBreakdownResponse)
async def get_score_breakdown(
    party_id: UUID,
    player_id: UUID,
    services: PartyServices = Depends(get_services),
):
    """Base score, wagers, theme bonus and awards behind a player's total."""
    breakdown = await services.calculate_score_breakdown(player_id, party_id)
    return ScoreBreakdownResponse.model_validate(breakdown)


@router.post("/{party_id}/bonus-results", response_model=List[BonusResultResponse])
async def calculate_bonus_results(
    party_id: UUID,
    services: PartyServices = Depends(get_services),
    rng: Optional[random.Random] = Depends(get_rng),
):
    """Pick the party's bonus categories and award them. Repeat calls return the stored awards."""
    results = await services.calculate_bonus_winners(party_id, rng)
    return [BonusResultResponse.model_validate(r) for r in results]


@router.get("/{party_id}/bonus-results", response_model=List[BonusResultResponse])
async def get_bonus_results(
    party_id: UUID,
    services: PartyServices = Depends(get_services),
):
    """Awarded bonus categories in reveal order."""
    results = await services.scoring.get_bonus_results(party_id)
    return [BonusResultResponse.model_validate(r) for r in results]


@router.get("/{party_id}/standings", response_model=List[FinalStandingResponse])
async def get_final_standings(
    party_id: UUID,
    services: PartyServices = Depends(get_services),
):
    """Finale leaderboard, best first."""
    standings = await services.calculate_final_standings(party_id)
    return [FinalStandingResponse.model_validate(s) for s in standings]
