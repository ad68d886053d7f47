"""SQLAlchemy models for LegacyForge."""

from .base import Base, utc_now
from .unlock import CampaignUnlock

__all__ = [
    "Base",
    "CampaignUnlock",
    "utc_now",
]
