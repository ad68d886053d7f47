from .board import (
    AdjacencyResult,
    Board,
    BoardMetadata,
    BoardStatistics,
    BoardVersion,
    Continent,
    ContinentStats,
    Coordinates,
    IntegrityReport,
    Territory,
)
from .rulebook import (
    AddRuleModifier,
    AddSectionModifier,
    AddSubsectionModifier,
    CampaignRulebook,
    Example,
    FactionInfo,
    FactionPower,
    GlossaryTerm,
    ModifyRuleModifier,
    PackModifiers,
    RemoveRuleModifier,
    ReplaceSectionModifier,
    Rule,
    RuleChanges,
    RuleModifier,
    Rulebook,
    RulebookMetadata,
    SearchRequest,
    SearchResponse,
    SearchResult,
    Section,
    Subsection,
)

__all__ = [
    "AddRuleModifier",
    "AddSectionModifier",
    "AddSubsectionModifier",
    "AdjacencyResult",
    "Board",
    "BoardMetadata",
    "BoardStatistics",
    "BoardVersion",
    "CampaignRulebook",
    "Continent",
    "ContinentStats",
    "Coordinates",
    "Example",
    "FactionInfo",
    "FactionPower",
    "GlossaryTerm",
    "IntegrityReport",
    "ModifyRuleModifier",
    "PackModifiers",
    "RemoveRuleModifier",
    "ReplaceSectionModifier",
    "Rule",
    "RuleChanges",
    "RuleModifier",
    "Rulebook",
    "RulebookMetadata",
    "SearchRequest",
    "SearchResponse",
    "SearchResult",
    "Section",
    "Subsection",
    "Territory",
]
