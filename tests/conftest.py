"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`legacyforge` package (e.g., `from legacyforge.api.app import create_app`)
without requiring an editable install in CI.  It also provides an in-memory
content store shared by the repository and compiler tests.
"""

import copy
import sys
from collections import Counter
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from legacyforge.domain.errors import ContentNotFoundError  # noqa: E402
from legacyforge.repository.content_store import BASE_RULEBOOK_NAME, DocumentKind  # noqa: E402


class MemoryStore:
    """Content store over a dict; counts every load so tests can assert caching."""

    def __init__(self, documents=None):
        self.documents = dict(documents or {})
        self.loads = Counter()

    def load(self, kind, name):
        self.loads[(kind, name)] += 1
        try:
            return copy.deepcopy(self.documents[(kind, name)])
        except KeyError:
            raise ContentNotFoundError(kind.value, name) from None

    def list_names(self, kind):
        return sorted(name for doc_kind, name in self.documents if doc_kind == kind)


def rulebook_document():
    return {
        "version": "1.0.0",
        "metadata": {
            "title": "Test Rulebook",
            "description": "Small rulebook for tests",
            "lastUpdated": "2025-01-01T00:00:00.000Z",
        },
        "sections": {
            "combat": {
                "id": "combat",
                "title": "Combat Rules",
                "summary": "Fighting",
                "subsections": {
                    "attacking": {
                        "title": "Attacking",
                        "content": "How to attack",
                        "rules": [
                            {
                                "id": "combat.attacking.minimum_troops",
                                "text": "You must have at least two troops to attack.",
                                "tags": ["combat", "troops"],
                                "phase": "attack",
                            }
                        ],
                    }
                },
            },
            "missions": {
                "id": "missions",
                "title": "Missions",
                "summary": "Objectives",
                "subsections": {},
            },
        },
    }


def secondwin_document():
    return {
        "pack": "secondwin",
        "name": "Second Win",
        "description": "Opened after a second victory",
        "modifiers": [
            {
                "type": "modify_rule",
                "rule_id": "combat.attacking.minimum_troops",
                "changes": {"text": "A territory with a major city may attack with one troop."},
            },
            {
                "type": "add_subsection",
                "section_id": "missions",
                "subsection_id": "private_missions",
                "data": {
                    "title": "Private Missions",
                    "content": "Secret objectives",
                    "rules": [
                        {
                            "id": "missions.private_missions.draw",
                            "text": "Draw one private mission.",
                            "priority": 2,
                        }
                    ],
                },
            },
        ],
    }


def draft_document():
    return {
        "pack": "draftpack",
        "name": "Draft",
        "description": "Adds the faction draft",
        "modifiers": [
            {
                "type": "add_section",
                "section_id": "draft",
                "data": {
                    "id": "draft",
                    "title": "Faction Draft",
                    "summary": "Drafting factions",
                    "subsections": {
                        "order": {
                            "title": "Order",
                            "content": "Draft order",
                            "rules": [
                                {"id": "draft.order.reverse", "text": "Last place drafts first."}
                            ],
                        }
                    },
                },
            }
        ],
    }


@pytest.fixture
def memory_store():
    return MemoryStore(
        {
            (DocumentKind.BASE_RULEBOOK, BASE_RULEBOOK_NAME): rulebook_document(),
            (DocumentKind.PACK_MODIFIERS, "secondwin"): secondwin_document(),
            (DocumentKind.PACK_MODIFIERS, "draftpack"): draft_document(),
        }
    )
