"""Exception hierarchy shared by the loaders, the topology engine and the API."""

from __future__ import annotations


class LegacyForgeError(Exception):
    """Base class for every error raised by this package."""


class DocumentLoadError(LegacyForgeError):
    """Raised when a structural document cannot be loaded or fails validation."""

    def __init__(self, kind: str, name: str, reason: str) -> None:
        super().__init__(f"Failed to load {kind} '{name}': {reason}")
        self.kind = kind
        self.name = name
        self.reason = reason


class BoardIntegrityError(DocumentLoadError):
    """Raised when a board references a territory that does not exist."""

    def __init__(self, territory_id: str, missing_id: str) -> None:
        super().__init__(
            "board_topology",
            territory_id,
            f"territory {territory_id} references non-existent adjacent territory {missing_id}",
        )
        self.territory_id = territory_id
        self.missing_id = missing_id


class ContentNotFoundError(LegacyForgeError, FileNotFoundError):
    """Raised by a content store when a named document does not exist."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"{kind} document not found: {name}")
        self.kind = kind
        self.name = name


class NotFoundError(LegacyForgeError, LookupError):
    """Raised by required lookups when an id does not resolve."""

    entity = "entity"

    def __init__(self, identifier: str) -> None:
        super().__init__(f"{self.entity.capitalize()} not found: {identifier}")
        self.identifier = identifier


class TerritoryNotFoundError(NotFoundError):
    entity = "territory"


class ContinentNotFoundError(NotFoundError):
    entity = "continent"
