"""Campaign rulebook compilation and caching.

A campaign rulebook is the base rulebook with the modifiers of every unlocked
pack applied in order.  Compilation is a pure function of the base document
and the pack list, so results are cached per ``(campaign, pack set)``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from legacyforge.domain.modifiers import apply_modifier
from legacyforge.repository.rulebook_repo import RulebookRepository
from legacyforge.schemas.rulebook import CampaignRulebook, PackModifiers, RuleModifier, Rulebook

logger = logging.getLogger(__name__)


def _iso_now() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def cache_key(campaign_id: str, unlocked_packs: Sequence[str]) -> str:
    """Cache key for a campaign and pack set; independent of pack order."""

    return f"{campaign_id}:{','.join(sorted(unlocked_packs))}"


def compiled_version(base_version: str, unlocked_packs: Sequence[str]) -> str:
    """``base`` alone, or ``base+pack+pack`` with pack names sorted."""

    if not unlocked_packs:
        return base_version
    return "+".join([base_version, *sorted(unlocked_packs)])


class RulebookCompiler:
    """Build and cache campaign-specific rulebooks."""

    def __init__(
        self,
        repository: RulebookRepository,
        *,
        clock: Callable[[], str] = _iso_now,
    ) -> None:
        self._repository = repository
        self._clock = clock
        self._lock = threading.Lock()
        self._compiled: dict[str, CampaignRulebook] = {}

    @property
    def repository(self) -> RulebookRepository:
        return self._repository

    def load_base_rules(self) -> Rulebook:
        return self._repository.load_base_rules()

    def get_available_packs(self) -> list[str]:
        return self._repository.get_available_packs()

    def build_campaign_rulebook(
        self, campaign_id: str, unlocked_packs: Sequence[str]
    ) -> CampaignRulebook:
        """Return the compiled rulebook for ``campaign_id`` with ``unlocked_packs``.

        Packs are loaded and applied in the order given.  The cache key sorts
        the pack names, so permutations of the same set share one entry.

        Raises:
            DocumentLoadError: the base rulebook cannot be loaded.
        """

        key = cache_key(campaign_id, unlocked_packs)
        cached = self._compiled.get(key)
        if cached is not None:
            logger.debug("returning cached rulebook for %s", key)
            return cached

        base = self._repository.load_base_rules()
        compiled = base.model_copy(deep=True)

        packs: list[PackModifiers] = [
            self._repository.load_pack_modifiers(name) for name in unlocked_packs
        ]
        applied: list[RuleModifier] = [m for pack in packs for m in pack.modifiers]
        skipped = sum(1 for modifier in applied if not apply_modifier(compiled, modifier))

        compiled.metadata.lastUpdated = self._clock()
        version = compiled_version(base.version, unlocked_packs)

        campaign_rulebook = CampaignRulebook(
            campaignId=campaign_id,
            baseRules=base,
            unlockedPacks=list(unlocked_packs),
            modifiers=applied,
            compiledRulebook=compiled,
            version=version,
        )

        with self._lock:
            self._compiled[key] = campaign_rulebook

        logger.info(
            "built campaign rulebook %s (version %s, %d modifiers, %d skipped)",
            campaign_id,
            version,
            len(applied),
            skipped,
        )
        return campaign_rulebook

    def clear_cache(self) -> None:
        """Drop compiled rulebooks, cached packs and the cached base rulebook."""

        with self._lock:
            self._compiled.clear()
        self._repository.clear()
        logger.info("rulebook cache cleared")

    def clear_campaign_cache(self, campaign_id: str) -> int:
        """Drop every compiled rulebook cached for ``campaign_id``; returns the count."""

        prefix = f"{campaign_id}:"
        with self._lock:
            keys = [key for key in self._compiled if key.startswith(prefix)]
            for key in keys:
                del self._compiled[key]
        logger.info("cleared %d cached rulebooks for campaign %s", len(keys), campaign_id)
        return len(keys)
