"""Party and round theme models."""
from sqlalchemy import (
    Boolean,
    Column,
    Float,
    String,
)

from party_backend.database import Base
from party_backend.models.base import PydanticJSON
from party_backend.schemas.theme import ThemeConstraints


class PartyTheme(Base):
    """Custom party-wide theme; predefined themes live in the catalog."""
    __tablename__ = "party_themes"

    theme_id = Column(String(64), primary_key=True)
    name = Column(String(128), nullable=False)
    description = Column(String(255), nullable=False)
    icon = Column(String(16), nullable=False)
    constraints = Column(PydanticJSON(ThemeConstraints), nullable=False, default=lambda: ThemeConstraints())
    is_custom = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<PartyTheme(id={self.theme_id}, name={self.name}, custom={self.is_custom})>"


class RoundTheme(Base):
    """Custom round theme; predefined round themes live in the catalog."""
    __tablename__ = "round_themes"

    theme_id = Column(String(64), primary_key=True)
    name = Column(String(128), nullable=False)
    prompt = Column(String(255), nullable=False)
    voting_prompt = Column(String(255), nullable=False)
    icon = Column(String(16), nullable=False)
    bonus_multiplier = Column(Float, nullable=False, default=1.0)

    def __repr__(self):
        return f"<RoundTheme(id={self.theme_id}, name={self.name}, multiplier={self.bonus_multiplier})>"
