"""Theme catalog API router."""
from fastapi import APIRouter, Depends
from typing import List
from uuid import UUID

from party_backend.dependencies import get_services
from party_backend.schemas.theme import PartyThemeResponse, RoundThemeResponse, SetThemeRequest
from party_backend.services.container import PartyServices

router = APIRouter()


@router.get("/themes/party", response_model=List[PartyThemeResponse])
async def list_party_themes(services: PartyServices = Depends(get_services)):
    return [PartyThemeResponse.model_validate(t) for t in services.themes.list_party_themes()]


@router.get("/themes/round", response_model=List[RoundThemeResponse])
async def list_round_themes(services: PartyServices = Depends(get_services)):
    return [RoundThemeResponse.model_validate(t) for t in services.themes.list_round_themes()]


@router.put("/rounds/{round_id}/theme", response_model=RoundThemeResponse)
async def assign_round_theme(
    round_id: UUID,
    request: SetThemeRequest,
    services: PartyServices = Depends(get_services),
):
    """Attach a predefined or custom theme to a round."""
    theme = await services.themes.assign_round_theme(round_id, request.theme_id)
    return RoundThemeResponse.model_validate(theme)
