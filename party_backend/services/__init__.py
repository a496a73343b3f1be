from party_backend.services.store import Store, SQLAlchemyStore
from party_backend.services.catalog import StaticCatalog, DemoTrack, PartyThemeDefinition, RoundThemeDefinition
from party_backend.services.identity_service import IdentityService, Identity
from party_backend.services.constraint_validator import validate_constraints, generate_custom_theme_name
from party_backend.services.voter_personality import (
    DEMO_PERSONALITIES,
    DemoTimingConfig,
    VoterBias,
    VoterPersonality,
    generate_rating,
)
from party_backend.services.party_lifecycle_service import PartyLifecycleService, next_status, is_terminal
from party_backend.services.theme_service import ThemeService, compute_theme_bonus
from party_backend.services.scoring_service import (
    ScoringService,
    SongScore,
    apply_confidence_modifier,
    calculate_vote_distribution,
    get_weight_multiplier,
)
from party_backend.services.demo_service import DemoService, DemoParty
from party_backend.services.container import PartyServices

__all__ = [
    "Store",
    "SQLAlchemyStore",
    "StaticCatalog",
    "DemoTrack",
    "PartyThemeDefinition",
    "RoundThemeDefinition",
    "IdentityService",
    "Identity",
    "validate_constraints",
    "generate_custom_theme_name",
    "DEMO_PERSONALITIES",
    "DemoTimingConfig",
    "VoterBias",
    "VoterPersonality",
    "generate_rating",
    "PartyLifecycleService",
    "next_status",
    "is_terminal",
    "ThemeService",
    "compute_theme_bonus",
    "ScoringService",
    "SongScore",
    "apply_confidence_modifier",
    "calculate_vote_distribution",
    "get_weight_multiplier",
    "DemoService",
    "DemoParty",
    "PartyServices",
]
