"""Voter personality archetypes used to simulate demo votes."""
from dataclasses import dataclass
from enum import Enum
from typing import List
import math
import random


class VoterBias(str, Enum):
    GENEROUS = "generous"
    HARSH = "harsh"
    BALANCED = "balanced"


MIN_RATING = 1
MAX_RATING = 10


@dataclass(frozen=True)
class VoterPersonality:
    """Rating tendency of a simulated voter.

    Ratings are drawn from a normal distribution around ``mean_rating``;
    ``bias`` decides how the draw is rounded to an integer.
    """
    name: str
    bias: VoterBias
    mean_rating: float
    variance: float

    def __post_init__(self):
        if not MIN_RATING <= self.mean_rating <= MAX_RATING:
            raise ValueError(f"mean_rating must be within {MIN_RATING}-{MAX_RATING}, got {self.mean_rating}")
        if self.variance <= 0:
            raise ValueError(f"variance must be positive, got {self.variance}")


@dataclass(frozen=True)
class DemoTimingConfig:
    play_duration_seconds: int
    finale_animation_speed: float


DEMO_PERSONALITIES: List[VoterPersonality] = [
    VoterPersonality(name="Harsh Critic", bias=VoterBias.HARSH, mean_rating=4.5, variance=2.0),
    VoterPersonality(name="Generous Fan", bias=VoterBias.GENEROUS, mean_rating=8.0, variance=1.5),
    VoterPersonality(name="Balanced Voter", bias=VoterBias.BALANCED, mean_rating=6.5, variance=2.0),
    VoterPersonality(name="Wildcard", bias=VoterBias.BALANCED, mean_rating=5.5, variance=6.0),
]


def generate_rating(personality: VoterPersonality, rng: random.Random) -> int:
    """Draw one integer rating in 1-10 for the given personality."""
    draw = rng.gauss(personality.mean_rating, math.sqrt(personality.variance))

    if personality.bias == VoterBias.HARSH:
        rating = math.floor(draw)
    elif personality.bias == VoterBias.GENEROUS:
        rating = math.ceil(draw)
    else:
        rating = round(draw)

    return max(MIN_RATING, min(MAX_RATING, int(rating)))


def personality_for_position(position: int) -> VoterPersonality:
    """Personality assigned to the voter at ``position`` (cycles through the archetypes)."""
    return DEMO_PERSONALITIES[position % len(DEMO_PERSONALITIES)]
