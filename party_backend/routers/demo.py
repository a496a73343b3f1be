"""Demo mode API router."""
from fastapi import APIRouter, Depends
from typing import List, Optional
from uuid import UUID
import logging
import random

from party_backend.dependencies import get_rng, get_services
from party_backend.schemas.party import (
    AdvancePartyResponse,
    DemoPartyResponse,
    DemoSongsResponse,
    DemoTimingResponse,
    DemoTrackResponse,
    SimulateVotingRequest,
    SimulateVotingResponse,
    VoterPersonalityResponse,
)
from party_backend.services.container import PartyServices

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/parties", response_model=DemoPartyResponse, status_code=201)
async def create_demo_party(
    rng: Optional[random.Random] = Depends(get_rng),
    services: PartyServices = Depends(get_services),
):
    """Create a demo party with four simulated players."""
    demo = await services.run_demo_party(rng)
    return DemoPartyResponse.model_validate(demo)


@router.post("/parties/{party_id}/songs", response_model=DemoSongsResponse)
async def populate_demo_songs(
    party_id: UUID,
    services: PartyServices = Depends(get_services),
):
    """Auto-submit the curated playlist for every player."""
    songs = await services.populate_demo_songs(party_id)
    return DemoSongsResponse.model_validate({"party_id": party_id, "songs": songs})


@router.post("/songs/{song_id}/votes", response_model=SimulateVotingResponse)
async def simulate_voting(
    song_id: UUID,
    request: SimulateVotingRequest,
    services: PartyServices = Depends(get_services),
):
    """Simulate personality-driven votes from the given players."""
    rng = random.Random(request.seed) if request.seed is not None else None
    votes = await services.simulate_voting(song_id, request.voter_ids, rng)
    return SimulateVotingResponse.model_validate({"song_id": song_id, "votes": votes})


@router.get("/parties/{party_id}/timing", response_model=DemoTimingResponse)
async def get_timing(
    party_id: UUID,
    services: PartyServices = Depends(get_services),
):
    """Effective play duration and finale speed for a party."""
    return DemoTimingResponse(
        party_id=party_id,
        play_duration_seconds=await services.get_effective_play_duration(party_id),
        finale_animation_speed=await services.get_effective_finale_animation_speed(party_id),
    )


@router.post("/parties/{party_id}/advance", response_model=AdvancePartyResponse)
async def advance_demo(
    party_id: UUID,
    services: PartyServices = Depends(get_services),
):
    """Apply the next lifecycle step to a demo party."""
    status = await services.advance_demo(party_id)
    return AdvancePartyResponse(party_id=party_id, status=status)


@router.get("/playlist", response_model=List[DemoTrackResponse])
async def get_demo_playlist(services: PartyServices = Depends(get_services)):
    return [DemoTrackResponse.model_validate(t) for t in services.demo.get_demo_playlist()]


@router.get("/personalities", response_model=List[VoterPersonalityResponse])
async def get_voter_personalities(services: PartyServices = Depends(get_services)):
    return [
        VoterPersonalityResponse(
            name=p.name,
            bias=p.bias.value,
            mean_rating=p.mean_rating,
            variance=p.variance,
        )
        for p in services.demo.get_voter_personalities()
    ]
