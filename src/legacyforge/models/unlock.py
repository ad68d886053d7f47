"""Campaign unlock model.

The rulebook compiler only needs to know which packs a campaign has unlocked
and in what order; this table is the single piece of campaign persistence the
core reads.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utc_now


class CampaignUnlock(Base):
    """Records that a campaign unlocked a rule pack.

    Attributes:
        id: Primary key
        campaign_id: Campaign identifier (owned by the campaign service)
        pack_name: Unlocked pack identifier, matching a pack modifier document
        unlocked_at: When the pack was unlocked; defines application order
        unlocked_by: Optional player who triggered the unlock
    """

    __tablename__ = "campaign_unlocks"
    __table_args__ = (UniqueConstraint("campaign_id", "pack_name", name="uq_campaign_pack"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    campaign_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    pack_name: Mapped[str] = mapped_column(String, nullable=False)
    unlocked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    unlocked_by: Mapped[str | None] = mapped_column(String, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<CampaignUnlock(campaign_id='{self.campaign_id}', pack_name='{self.pack_name}')>"
        )
