"""Loading and caching of the base rulebook and pack modifier documents."""

from __future__ import annotations

import logging
import threading

from pydantic import ValidationError

from legacyforge.domain.errors import ContentNotFoundError, DocumentLoadError
from legacyforge.repository.content_store import (
    BASE_RULEBOOK_NAME,
    ContentStore,
    DocumentKind,
)
from legacyforge.schemas.rulebook import PackModifiers, Rulebook

logger = logging.getLogger(__name__)


class RulebookRepository:
    """Validate and cache rulebook documents read from a content store.

    A broken base rulebook is fatal (:class:`DocumentLoadError`).  A missing or
    invalid pack document degrades to an empty modifier set so an unlocked but
    unauthored pack is a no-op.
    """

    def __init__(self, store: ContentStore) -> None:
        self._store = store
        self._lock = threading.Lock()
        self._base_rules: Rulebook | None = None
        self._packs: dict[str, PackModifiers] = {}

    def load_base_rules(self) -> Rulebook:
        """Return the base rulebook, loading it on first use."""

        cached = self._base_rules
        if cached is not None:
            return cached

        try:
            raw = self._store.load(DocumentKind.BASE_RULEBOOK, BASE_RULEBOOK_NAME)
            rules = Rulebook.model_validate(raw)
        except (ContentNotFoundError, ValidationError, ValueError) as exc:
            logger.error("failed to load base rules: %s", exc)
            raise DocumentLoadError(
                DocumentKind.BASE_RULEBOOK.value, BASE_RULEBOOK_NAME, str(exc)
            ) from exc

        with self._lock:
            self._base_rules = rules
        logger.info(
            "base rules loaded (version %s, %d sections)", rules.version, len(rules.sections)
        )
        return rules

    def load_pack_modifiers(self, pack_name: str) -> PackModifiers:
        """Return a pack's modifiers, or an empty bundle if it cannot be loaded."""

        cached = self._packs.get(pack_name)
        if cached is not None:
            return cached

        try:
            raw = self._store.load(DocumentKind.PACK_MODIFIERS, pack_name)
            pack = PackModifiers.model_validate(raw)
        except (ContentNotFoundError, ValidationError, ValueError) as exc:
            logger.warning("failed to load pack modifiers for %s: %s", pack_name, exc)
            return PackModifiers.empty(pack_name)

        with self._lock:
            self._packs[pack_name] = pack
        logger.info("pack %s loaded (%d modifiers)", pack_name, len(pack.modifiers))
        return pack

    def get_available_packs(self) -> list[str]:
        """Enumerate pack names known to the store; empty if the store is unreachable."""

        try:
            return self._store.list_names(DocumentKind.PACK_MODIFIERS)
        except OSError as exc:
            logger.warning("failed to list pack modifiers: %s", exc)
            return []

    def clear(self) -> None:
        """Drop the cached base rulebook and every cached pack."""

        with self._lock:
            self._base_rules = None
            self._packs.clear()
