"""Runtime state backing the LegacyForge HTTP API."""

from __future__ import annotations

import logging

from legacyforge.config import Settings, get_settings
from legacyforge.database import create_db_engine, create_session_factory, init_db
from legacyforge.repository import (
    BoardRegistry,
    JsonContentStore,
    RulebookRepository,
    SqlUnlockStore,
)
from legacyforge.schemas.rulebook import CampaignRulebook, Rulebook
from legacyforge.services import RulebookCompiler

logger = logging.getLogger(__name__)


class ApiState:
    """Aggregated services shared by the FastAPI layer.

    Built once per application lifespan; every cache lives on these objects
    rather than in module globals.
    """

    def __init__(self, *, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.store = JsonContentStore(self.settings.content_dir)
        self.rulebooks = RulebookCompiler(RulebookRepository(self.store))
        self.boards = BoardRegistry(self.store)

        self.engine = create_db_engine(self.settings.database_url, echo=self.settings.database_echo)
        init_db(self.engine)
        self.unlocks = SqlUnlockStore(create_session_factory(self.engine))

    def campaign_rulebook(self, campaign_id: str) -> CampaignRulebook:
        """Compile (or fetch from cache) the rulebook for a persisted campaign."""

        packs = self.unlocks.unlocked_packs(campaign_id)
        return self.rulebooks.build_campaign_rulebook(campaign_id, packs)

    def resolve_rulebook(self, campaign_id: str | None) -> Rulebook:
        """Compiled rulebook for a campaign with unlocks, base rulebook otherwise.

        Campaigns without unlock rows never reach the compiler, so unknown ids
        do not populate the compiled-rulebook cache.
        """

        if campaign_id:
            packs = self.unlocks.unlocked_packs(campaign_id)
            if packs:
                return self.rulebooks.build_campaign_rulebook(campaign_id, packs).compiledRulebook
        return self.rulebooks.load_base_rules()

    async def shutdown(self) -> None:
        self.engine.dispose()
        logger.info("api state shut down")


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
