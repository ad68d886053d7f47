"""Loading and per-version caching of board topologies."""

from __future__ import annotations

import logging
import threading

from pydantic import ValidationError

from legacyforge.domain.errors import ContentNotFoundError, DocumentLoadError
from legacyforge.domain.topology import BoardTopology
from legacyforge.repository.content_store import ContentStore, DocumentKind
from legacyforge.schemas.board import Board, BoardVersion

logger = logging.getLogger(__name__)


def load_board_topology(
    store: ContentStore, version: BoardVersion = BoardVersion.ORIGINAL
) -> BoardTopology:
    """Load, validate and index one board version.

    Raises:
        DocumentLoadError: the document is missing, malformed, or references
            a territory that does not exist.
    """

    version = BoardVersion(version)
    try:
        raw = store.load(DocumentKind.BOARD_TOPOLOGY, version.value)
        board = Board.model_validate(raw)
        topology = BoardTopology(board)
    except DocumentLoadError:
        logger.error("board topology %s failed integrity checks", version.value)
        raise
    except (ContentNotFoundError, ValidationError, ValueError) as exc:
        logger.error("failed to load board topology %s: %s", version.value, exc)
        raise DocumentLoadError(DocumentKind.BOARD_TOPOLOGY.value, version.value, str(exc)) from exc

    logger.info(
        "board topology %s loaded (%d territories, %d continents)",
        version.value,
        len(board.territories),
        len(board.continents),
    )
    return topology


class BoardRegistry:
    """One cached :class:`BoardTopology` per board version."""

    def __init__(self, store: ContentStore) -> None:
        self._store = store
        self._lock = threading.Lock()
        self._boards: dict[BoardVersion, BoardTopology] = {}

    def get_board_topology(self, version: BoardVersion = BoardVersion.ORIGINAL) -> BoardTopology:
        """Return the cached topology for ``version``, loading it on first access."""

        version = BoardVersion(version)
        cached = self._boards.get(version)
        if cached is not None:
            return cached

        topology = load_board_topology(self._store, version)
        with self._lock:
            self._boards[version] = topology
        return topology

    def clear_board_cache(self) -> None:
        with self._lock:
            self._boards.clear()
