"""FastAPI dependencies."""
from typing import Optional
import logging
import random

from fastapi import Query, Request

from party_backend.services.container import PartyServices

logger = logging.getLogger(__name__)


def get_services(request: Request) -> PartyServices:
    """Services container created in the application lifespan."""
    services = getattr(request.app.state, "services", None)
    if services is None:
        logger.error("Party services requested before application startup completed")
        raise RuntimeError("Party services are not initialized")
    return services


def get_rng(seed: Optional[int] = Query(default=None, description="Seed for reproducible randomness")) -> Optional[random.Random]:
    """Seeded random source when the caller asks for one, else None (fresh per call)."""
    if seed is None:
        return None
    return random.Random(seed)
