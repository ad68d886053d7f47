"""Read/write access to the per-campaign list of unlocked packs."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, sessionmaker

from legacyforge.models import CampaignUnlock


class SqlUnlockStore:
    """Campaign unlocks persisted through SQLAlchemy.

    Callers that record or revoke an unlock are expected to invalidate the
    campaign's compiled rulebooks afterwards.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def unlocked_packs(self, campaign_id: str) -> list[str]:
        """Return the campaign's pack names in unlock order."""

        stmt = (
            select(CampaignUnlock.pack_name)
            .where(CampaignUnlock.campaign_id == campaign_id)
            .order_by(CampaignUnlock.unlocked_at, CampaignUnlock.id)
        )
        with self._session_factory() as session:
            return list(session.scalars(stmt))

    def record_unlock(
        self, campaign_id: str, pack_name: str, *, unlocked_by: str | None = None
    ) -> bool:
        """Persist an unlock; returns False if the pack was already unlocked."""

        with self._session_factory() as session:
            existing = session.scalar(
                select(CampaignUnlock.id).where(
                    CampaignUnlock.campaign_id == campaign_id,
                    CampaignUnlock.pack_name == pack_name,
                )
            )
            if existing is not None:
                return False
            session.add(
                CampaignUnlock(
                    campaign_id=campaign_id, pack_name=pack_name, unlocked_by=unlocked_by
                )
            )
            session.commit()
            return True

    def revoke(self, campaign_id: str, pack_name: str) -> bool:
        """Remove an unlock; returns False if there was nothing to remove."""

        with self._session_factory() as session:
            result = session.execute(
                delete(CampaignUnlock).where(
                    CampaignUnlock.campaign_id == campaign_id,
                    CampaignUnlock.pack_name == pack_name,
                )
            )
            session.commit()
            return result.rowcount > 0
