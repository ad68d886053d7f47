"""Named-document content store backing the rulebook and board loaders."""

from __future__ import annotations

import json
import re
from enum import StrEnum
from pathlib import Path
from typing import Any, Protocol

from legacyforge.domain.errors import ContentNotFoundError
from legacyforge.schemas.rulebook import PACK_NAME_PATTERN


class DocumentKind(StrEnum):
    """Kinds of documents held by a content store."""

    BASE_RULEBOOK = "base_rulebook"
    PACK_MODIFIERS = "pack_modifiers"
    BOARD_TOPOLOGY = "board_topology"


BASE_RULEBOOK_NAME = "base"

_DOCUMENT_NAME = re.compile(PACK_NAME_PATTERN)


class ContentStore(Protocol):
    """Load-by-key and enumerate contract consumed by the repositories."""

    def load(self, kind: DocumentKind, name: str) -> dict[str, Any]:
        """Return the raw document or raise ``ContentNotFoundError``."""

    def list_names(self, kind: DocumentKind) -> list[str]:
        """Return the names available for ``kind``; raises ``OSError`` if unreachable."""


class JsonContentStore:
    """Serve content documents as JSON files below ``root``.

    Layout::

        rules/base-rules.json
        rules/modifiers/<pack>.json
        board/<version>-topology.json
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def _path_for(self, kind: DocumentKind, name: str) -> Path:
        if not _DOCUMENT_NAME.fullmatch(name):
            raise ContentNotFoundError(kind.value, name)
        if kind is DocumentKind.BASE_RULEBOOK:
            return self.root / "rules" / "base-rules.json"
        if kind is DocumentKind.PACK_MODIFIERS:
            return self.root / "rules" / "modifiers" / f"{name}.json"
        return self.root / "board" / f"{name}-topology.json"

    def load(self, kind: DocumentKind, name: str) -> dict[str, Any]:
        """Read and decode a document; JSON errors propagate to the caller."""

        path = self._path_for(kind, name)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ContentNotFoundError(kind.value, name) from exc
        return json.loads(raw)

    def list_names(self, kind: DocumentKind) -> list[str]:
        if kind is DocumentKind.BASE_RULEBOOK:
            path = self._path_for(kind, BASE_RULEBOOK_NAME)
            return [BASE_RULEBOOK_NAME] if path.exists() else []

        if kind is DocumentKind.PACK_MODIFIERS:
            directory = self.root / "rules" / "modifiers"
            suffix = ".json"
        else:
            directory = self.root / "board"
            suffix = "-topology.json"

        if not directory.is_dir():
            raise FileNotFoundError(f"content directory missing: {directory}")
        names = [
            path.name[: -len(suffix)]
            for path in directory.iterdir()
            if path.is_file() and path.name.endswith(suffix)
        ]
        return sorted(names)
