"""HTTP routes for the LegacyForge API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel, Field

from legacyforge.api.runtime import ApiState
from legacyforge.database import check_database_health
from legacyforge.domain import search
from legacyforge.domain.errors import NotFoundError
from legacyforge.schemas.board import (
    AdjacencyResult,
    BoardStatistics,
    BoardVersion,
    IntegrityReport,
    Territory,
)
from legacyforge.schemas.rulebook import (
    PACK_NAME_PATTERN,
    Rule,
    Rulebook,
    SearchRequest,
    SearchResponse,
    Section,
)

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]
CampaignQuery = Annotated[str | None, Query(min_length=1)]


class PackListResponse(BaseModel):
    packs: list[str]
    count: int


class CampaignRulebookSummary(BaseModel):
    campaign_id: str
    version: str
    unlocked_packs: list[str]
    modifier_count: int
    sections: list[str]


class UnlockRequest(BaseModel):
    pack: str = Field(pattern=PACK_NAME_PATTERN)
    unlocked_by: str | None = None


class MessageResponse(BaseModel):
    message: str


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "database": "connected" if check_database_health(state.engine) else "unavailable",
        "default_board": state.settings.default_board_version.value,
    }


# --- Rulebook -------------------------------------------------------------------


@router.get("/rulebook/base", response_model=Rulebook)
async def get_base_rulebook(state: ApiStateDep) -> Rulebook:
    return state.rulebooks.load_base_rules()


@router.get("/rulebook/section/{section_id}", response_model=Section)
async def get_section(
    section_id: str, state: ApiStateDep, campaign_id: CampaignQuery = None
) -> Section:
    rulebook = state.resolve_rulebook(campaign_id)
    section = search.get_section_by_id(rulebook, section_id)
    if section is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Section '{section_id}' not found"
        )
    return section


@router.get("/rulebook/rule/{rule_id}", response_model=Rule)
async def get_rule(rule_id: str, state: ApiStateDep, campaign_id: CampaignQuery = None) -> Rule:
    rulebook = state.resolve_rulebook(campaign_id)
    rule = search.get_rule_by_id(rulebook, rule_id)
    if rule is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Rule '{rule_id}' not found"
        )
    return rule


@router.post("/rulebook/search", response_model=SearchResponse)
async def search_rules(request: SearchRequest, state: ApiStateDep) -> SearchResponse:
    rulebook = state.resolve_rulebook(request.campaignId)
    rules = search.search_rules(rulebook, request.query, request.sections, request.tags)
    results = search.rank_rules(rulebook, rules, request.query)
    return SearchResponse(results=results, total=len(results))


@router.get("/rulebook/packs", response_model=PackListResponse)
async def list_packs(state: ApiStateDep) -> PackListResponse:
    packs = state.rulebooks.get_available_packs()
    return PackListResponse(packs=packs, count=len(packs))


@router.get("/rulebook/campaigns/{campaign_id}", response_model=CampaignRulebookSummary)
async def get_campaign_rulebook(campaign_id: str, state: ApiStateDep) -> CampaignRulebookSummary:
    compiled = state.campaign_rulebook(campaign_id)
    return CampaignRulebookSummary(
        campaign_id=compiled.campaignId,
        version=compiled.version,
        unlocked_packs=compiled.unlockedPacks,
        modifier_count=len(compiled.modifiers),
        sections=list(compiled.compiledRulebook.sections),
    )


@router.post(
    "/rulebook/campaigns/{campaign_id}/unlocks",
    response_model=CampaignRulebookSummary,
    status_code=status.HTTP_201_CREATED,
)
async def unlock_pack(
    campaign_id: str, request: UnlockRequest, state: ApiStateDep
) -> CampaignRulebookSummary:
    if state.unlocks.record_unlock(campaign_id, request.pack, unlocked_by=request.unlocked_by):
        state.rulebooks.clear_campaign_cache(campaign_id)
    return await get_campaign_rulebook(campaign_id, state)


@router.delete(
    "/rulebook/campaigns/{campaign_id}/unlocks/{pack}", response_model=CampaignRulebookSummary
)
async def revoke_pack(campaign_id: str, pack: str, state: ApiStateDep) -> CampaignRulebookSummary:
    if not state.unlocks.revoke(campaign_id, pack):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Pack '{pack}' is not unlocked for campaign '{campaign_id}'",
        )
    state.rulebooks.clear_campaign_cache(campaign_id)
    return await get_campaign_rulebook(campaign_id, state)


@router.post("/rulebook/clear-cache", response_model=MessageResponse)
async def clear_cache(state: ApiStateDep) -> MessageResponse:
    state.rulebooks.clear_cache()
    return MessageResponse(message="Cache cleared successfully")


# --- Board ----------------------------------------------------------------------


@router.get("/board/{version}/statistics", response_model=BoardStatistics)
async def board_statistics(version: BoardVersion, state: ApiStateDep) -> BoardStatistics:
    return state.boards.get_board_topology(version).get_statistics()


@router.get("/board/{version}/integrity", response_model=IntegrityReport)
async def board_integrity(version: BoardVersion, state: ApiStateDep) -> IntegrityReport:
    return state.boards.get_board_topology(version).verify_integrity()


@router.get("/board/{version}/territories", response_model=list[Territory])
async def list_territories(
    version: BoardVersion,
    state: ApiStateDep,
    name: Annotated[str | None, Query()] = None,
) -> list[Territory]:
    topology = state.boards.get_board_topology(version)
    if name:
        return topology.find_territories_by_name(name)
    return topology.get_all_territories()


@router.get("/board/{version}/territories/{territory_id}", response_model=Territory)
async def get_territory(version: BoardVersion, territory_id: str, state: ApiStateDep) -> Territory:
    topology = state.boards.get_board_topology(version)
    try:
        return topology.get_territory(territory_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.get(
    "/board/{version}/territories/{territory_id}/adjacent", response_model=list[Territory]
)
async def get_adjacent_territories(
    version: BoardVersion, territory_id: str, state: ApiStateDep
) -> list[Territory]:
    topology = state.boards.get_board_topology(version)
    try:
        return topology.get_adjacent_territories(territory_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.get("/board/{version}/adjacency", response_model=AdjacencyResult)
async def check_adjacency(
    version: BoardVersion,
    state: ApiStateDep,
    from_id: Annotated[str, Query(alias="from", min_length=1)],
    to_id: Annotated[str, Query(alias="to", min_length=1)],
) -> AdjacencyResult:
    return state.boards.get_board_topology(version).check_adjacency(from_id, to_id)
