"""Tests for the JSON content store and the rulebook/board repositories."""

from __future__ import annotations

import json
import logging

import pytest

from legacyforge.config import BUNDLED_CONTENT_DIR
from legacyforge.domain.errors import BoardIntegrityError, ContentNotFoundError, DocumentLoadError
from legacyforge.repository import (
    BoardRegistry,
    DocumentKind,
    JsonContentStore,
    RulebookRepository,
    load_board_topology,
)
from legacyforge.repository.content_store import BASE_RULEBOOK_NAME
from legacyforge.schemas.board import BoardVersion


def _write(path, payload) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")


def _board_document(*, dangling: bool = False) -> dict:
    alpha_borders = ["beta", "ghost"] if dangling else ["beta"]
    return {
        "version": "original",
        "territories": [
            {"id": "alpha", "name": "Alpha", "continent": "north", "adjacentTo": alpha_borders},
            {"id": "beta", "name": "Beta", "continent": "north", "adjacentTo": ["alpha"]},
        ],
        "continents": [
            {
                "id": "north",
                "name": "North",
                "bonus": 2,
                "color": "#000000",
                "territories": ["alpha", "beta"],
            }
        ],
        "metadata": {"description": "tiny", "totalTerritories": 2, "lastUpdated": "2025-01-01"},
    }


# --- JsonContentStore -----------------------------------------------------------


def test_store_layout(tmp_path):
    store = JsonContentStore(tmp_path)
    _write(tmp_path / "rules" / "base-rules.json", {"version": "1.0.0"})
    _write(tmp_path / "rules" / "modifiers" / "secondwin.json", {"pack": "secondwin"})
    _write(tmp_path / "board" / "original-topology.json", {"version": "original"})

    assert store.load(DocumentKind.BASE_RULEBOOK, BASE_RULEBOOK_NAME) == {"version": "1.0.0"}
    assert store.load(DocumentKind.PACK_MODIFIERS, "secondwin") == {"pack": "secondwin"}
    assert store.load(DocumentKind.BOARD_TOPOLOGY, "original") == {"version": "original"}


def test_store_missing_document(tmp_path):
    store = JsonContentStore(tmp_path)

    with pytest.raises(ContentNotFoundError) as excinfo:
        store.load(DocumentKind.PACK_MODIFIERS, "ghost")

    assert isinstance(excinfo.value, FileNotFoundError)
    assert excinfo.value.name == "ghost"


def test_store_rejects_names_outside_its_layout(tmp_path):
    _write(tmp_path / "board" / "original.json", {"pack": "original"})
    store = JsonContentStore(tmp_path)

    for name in ("../../board/original", "../modifiers/original", "Secondwin", ""):
        with pytest.raises(ContentNotFoundError):
            store.load(DocumentKind.PACK_MODIFIERS, name)


def test_store_lists_names_sorted(tmp_path):
    store = JsonContentStore(tmp_path)
    for name in ("secondwin", "minorcities", "firstdeath"):
        _write(tmp_path / "rules" / "modifiers" / f"{name}.json", {})
    (tmp_path / "rules" / "modifiers" / "README.txt").write_text("notes", encoding="utf-8")

    assert store.list_names(DocumentKind.PACK_MODIFIERS) == [
        "firstdeath",
        "minorcities",
        "secondwin",
    ]


def test_store_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        JsonContentStore(tmp_path).list_names(DocumentKind.PACK_MODIFIERS)


def test_bundled_store_contents():
    store = JsonContentStore(BUNDLED_CONTENT_DIR)

    assert store.list_names(DocumentKind.BASE_RULEBOOK) == [BASE_RULEBOOK_NAME]
    assert store.list_names(DocumentKind.BOARD_TOPOLOGY) == ["advanced", "original"]


# --- RulebookRepository ---------------------------------------------------------


def test_base_rules_are_cached(memory_store):
    repo = RulebookRepository(memory_store)

    first = repo.load_base_rules()
    second = repo.load_base_rules()

    assert first is second
    assert first.version == "1.0.0"
    assert memory_store.loads[(DocumentKind.BASE_RULEBOOK, BASE_RULEBOOK_NAME)] == 1


def test_missing_base_rules_is_fatal(memory_store):
    del memory_store.documents[(DocumentKind.BASE_RULEBOOK, BASE_RULEBOOK_NAME)]

    with pytest.raises(DocumentLoadError, match="Failed to load base_rulebook 'base'"):
        RulebookRepository(memory_store).load_base_rules()


def test_invalid_base_rules_is_fatal(memory_store):
    memory_store.documents[(DocumentKind.BASE_RULEBOOK, BASE_RULEBOOK_NAME)] = {"version": "1"}

    with pytest.raises(DocumentLoadError):
        RulebookRepository(memory_store).load_base_rules()


def test_pack_modifiers_are_cached(memory_store):
    repo = RulebookRepository(memory_store)

    first = repo.load_pack_modifiers("secondwin")
    second = repo.load_pack_modifiers("secondwin")

    assert first is second
    assert len(first.modifiers) == 2
    assert memory_store.loads[(DocumentKind.PACK_MODIFIERS, "secondwin")] == 1


def test_missing_pack_falls_back_to_empty(memory_store, caplog):
    repo = RulebookRepository(memory_store)

    with caplog.at_level(logging.WARNING, logger="legacyforge.repository.rulebook_repo"):
        pack = repo.load_pack_modifiers("ghost")

    assert pack.pack == "ghost"
    assert pack.modifiers == []
    assert pack.description == "No modifiers available"
    assert "ghost" in caplog.text


def test_fallback_pack_is_not_cached(memory_store):
    repo = RulebookRepository(memory_store)

    repo.load_pack_modifiers("ghost")
    repo.load_pack_modifiers("ghost")

    assert memory_store.loads[(DocumentKind.PACK_MODIFIERS, "ghost")] == 2


def test_invalid_pack_falls_back_to_empty(memory_store):
    memory_store.documents[(DocumentKind.PACK_MODIFIERS, "broken")] = {
        "pack": "broken",
        "name": "Broken",
        "description": "",
        "modifiers": [{"type": "shuffle_rules"}],
    }

    pack = RulebookRepository(memory_store).load_pack_modifiers("broken")

    assert pack.modifiers == []
    assert pack.name == "broken"


def test_null_rule_changes_fall_back_to_empty(memory_store):
    memory_store.documents[(DocumentKind.PACK_MODIFIERS, "nullpack")] = {
        "pack": "nullpack",
        "name": "Null Pack",
        "description": "",
        "modifiers": [
            {
                "type": "modify_rule",
                "rule_id": "combat.attacking.minimum_troops",
                "changes": {"text": None, "tags": None},
            }
        ],
    }

    pack = RulebookRepository(memory_store).load_pack_modifiers("nullpack")

    assert pack.modifiers == []
    assert pack.description == "No modifiers available"


def test_traversing_pack_name_falls_back_to_empty(tmp_path):
    _write(
        tmp_path / "board" / "original.json",
        {
            "pack": "original",
            "name": "Original",
            "description": "",
            "modifiers": [{"type": "remove_rule", "rule_id": "a.b.c"}],
        },
    )
    repo = RulebookRepository(JsonContentStore(tmp_path))

    pack = repo.load_pack_modifiers("../../board/original")

    assert pack.pack == "../../board/original"
    assert pack.modifiers == []


def test_available_packs(memory_store):
    assert RulebookRepository(memory_store).get_available_packs() == ["draftpack", "secondwin"]


def test_available_packs_when_store_unreachable(memory_store, monkeypatch):
    def unreachable(kind):
        raise FileNotFoundError("content directory missing")

    monkeypatch.setattr(memory_store, "list_names", unreachable)

    assert RulebookRepository(memory_store).get_available_packs() == []


def test_clear_forces_reload(memory_store):
    repo = RulebookRepository(memory_store)
    first = repo.load_base_rules()
    repo.load_pack_modifiers("secondwin")

    repo.clear()

    assert repo.load_base_rules() is not first
    repo.load_pack_modifiers("secondwin")
    assert memory_store.loads[(DocumentKind.BASE_RULEBOOK, BASE_RULEBOOK_NAME)] == 2
    assert memory_store.loads[(DocumentKind.PACK_MODIFIERS, "secondwin")] == 2


# --- Boards ---------------------------------------------------------------------


def test_load_board_topology(tmp_path):
    _write(tmp_path / "board" / "original-topology.json", _board_document())

    topology = load_board_topology(JsonContentStore(tmp_path), BoardVersion.ORIGINAL)

    assert topology.are_territories_adjacent("alpha", "beta")
    assert topology.version is BoardVersion.ORIGINAL


def test_load_board_accepts_plain_string_version(tmp_path):
    _write(tmp_path / "board" / "original-topology.json", _board_document())

    topology = load_board_topology(JsonContentStore(tmp_path), "original")

    assert topology.get_territory("beta").name == "Beta"


def test_missing_board_raises_load_error(tmp_path):
    with pytest.raises(DocumentLoadError, match="board_topology 'advanced'"):
        load_board_topology(JsonContentStore(tmp_path), BoardVersion.ADVANCED)


def test_malformed_board_raises_load_error(tmp_path):
    path = tmp_path / "board" / "original-topology.json"
    path.parent.mkdir(parents=True)
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(DocumentLoadError):
        load_board_topology(JsonContentStore(tmp_path))


def test_dangling_board_reference_raises_integrity_error(tmp_path):
    _write(tmp_path / "board" / "original-topology.json", _board_document(dangling=True))

    with pytest.raises(BoardIntegrityError) as excinfo:
        load_board_topology(JsonContentStore(tmp_path))

    assert excinfo.value.missing_id == "ghost"


def test_board_registry_caches_per_version(tmp_path):
    _write(tmp_path / "board" / "original-topology.json", _board_document())
    registry = BoardRegistry(JsonContentStore(tmp_path))

    first = registry.get_board_topology(BoardVersion.ORIGINAL)

    assert registry.get_board_topology("original") is first
    registry.clear_board_cache()
    assert registry.get_board_topology(BoardVersion.ORIGINAL) is not first
