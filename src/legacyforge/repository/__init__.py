from .board_repo import BoardRegistry, load_board_topology
from .content_store import ContentStore, DocumentKind, JsonContentStore
from .rulebook_repo import RulebookRepository
from .unlock_store import SqlUnlockStore

__all__ = [
    "BoardRegistry",
    "ContentStore",
    "DocumentKind",
    "JsonContentStore",
    "RulebookRepository",
    "SqlUnlockStore",
    "load_board_topology",
]
