"""Document models for the rulebook, pack modifiers and rule search."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field

PACK_NAME_PATTERN = r"^[a-z0-9][a-z0-9_-]*$"


class Rule(BaseModel):
    id: str = Field(..., description='Dotted rule id (e.g. "combat.attacking.minimum_troops")')
    text: str = Field(..., description="The rule text")
    priority: int = Field(
        default=1, ge=1, description="Priority level (1=base, higher=unlock modifications)"
    )
    modifiers: list[str] = Field(
        default_factory=list, description="Provenance tags appended by pack application"
    )
    tags: list[str] = Field(default_factory=list, description="Free-text tags used by search")
    phase: str | None = Field(None, description="Game phase this rule applies to")
    applies_to: str = Field(
        default="all", description="Who this rule applies to (all/attacker/defender/...)"
    )


class Example(BaseModel):
    scenario: str = Field(..., description="Brief scenario description")
    explanation: str = Field(..., description="How the rule applies to this scenario")


class Subsection(BaseModel):
    title: str = Field(..., description="Subsection title")
    content: str = Field(..., description="Main content/explanation")
    rules: list[Rule] = Field(default_factory=list)
    examples: list[Example] = Field(default_factory=list)
    related: list[str] = Field(
        default_factory=list, description="Related section/subsection ids (not validated)"
    )


class Section(BaseModel):
    id: str = Field(..., description='Section identifier (e.g. "combat")')
    title: str
    summary: str
    subsections: dict[str, Subsection] = Field(default_factory=dict)


class FactionPower(BaseModel):
    id: str
    text: str
    trigger: str = Field(..., description='When the power activates (e.g. "on_attack")')


class FactionInfo(BaseModel):
    id: str
    name: str
    description: str
    starting_powers: list[FactionPower]
    strategy_notes: str | None = None


class GlossaryTerm(BaseModel):
    term: str
    definition: str
    related: list[str] = Field(default_factory=list)


class RulebookMetadata(BaseModel):
    title: str
    description: str
    lastUpdated: str = Field(..., description="Last update timestamp (ISO 8601)")


class Rulebook(BaseModel):
    version: str = Field(..., description='Rulebook version (e.g. "1.0.0")')
    metadata: RulebookMetadata
    sections: dict[str, Section]
    factions: dict[str, FactionInfo] | None = None
    glossary: list[GlossaryTerm] = Field(default_factory=list)


# --- Modifiers ------------------------------------------------------------------


class RuleChanges(BaseModel):
    """Partial rule update; only fields present in the document are applied.

    Omitted fields default to ``None`` and are never applied, but an explicit
    ``null`` is rejected for every field a rule requires.  ``phase`` is the
    one nullable rule field, so ``"phase": null`` clears it.
    """

    text: str = Field(None, description="Replacement rule text")
    priority: int = Field(None, ge=1)
    tags: list[str] = Field(None)
    phase: str | None = None
    applies_to: str = Field(None)


class AddSectionModifier(BaseModel):
    type: Literal["add_section"] = "add_section"
    description: str | None = None
    section_id: str
    data: Section


class AddSubsectionModifier(BaseModel):
    type: Literal["add_subsection"] = "add_subsection"
    description: str | None = None
    section_id: str
    subsection_id: str
    data: Subsection


class AddRuleModifier(BaseModel):
    type: Literal["add_rule"] = "add_rule"
    description: str | None = None
    section_id: str
    subsection_id: str
    rule: Rule


class ModifyRuleModifier(BaseModel):
    type: Literal["modify_rule"] = "modify_rule"
    description: str | None = None
    rule_id: str
    changes: RuleChanges


class RemoveRuleModifier(BaseModel):
    type: Literal["remove_rule"] = "remove_rule"
    description: str | None = None
    rule_id: str


class ReplaceSectionModifier(BaseModel):
    type: Literal["replace_section"] = "replace_section"
    description: str | None = None
    section_id: str
    data: Section


RuleModifier = Annotated[
    AddSectionModifier
    | AddSubsectionModifier
    | AddRuleModifier
    | ModifyRuleModifier
    | RemoveRuleModifier
    | ReplaceSectionModifier,
    Field(discriminator="type"),
]


class PackModifiers(BaseModel):
    pack: str = Field(
        ..., pattern=PACK_NAME_PATTERN, description='Pack identifier (e.g. "secondwin")'
    )
    name: str = Field(..., description="Human-readable pack name")
    description: str
    modifiers: list[RuleModifier] = Field(default_factory=list)

    @classmethod
    def empty(cls, pack: str) -> PackModifiers:
        """Placeholder used when a pack document is missing or invalid."""

        return cls.model_construct(
            pack=pack, name=pack, description="No modifiers available", modifiers=[]
        )


class CampaignRulebook(BaseModel):
    campaignId: str
    baseRules: Rulebook = Field(..., description="Unmodified base rulebook")
    unlockedPacks: list[str] = Field(..., description="Pack names in the order supplied")
    modifiers: list[RuleModifier] = Field(..., description="Every modifier applied, in order")
    compiledRulebook: Rulebook
    version: str


# --- Search ---------------------------------------------------------------------


class SearchRequest(BaseModel):
    query: str = Field(..., min_length=1)
    campaignId: str | None = None
    sections: list[str] | None = None
    tags: list[str] | None = None


class SearchResult(BaseModel):
    section: str = Field(..., description='Section/subsection path (e.g. "combat.defending")')
    rule: Rule
    relevance: float = Field(..., ge=0.0, le=1.0)


class SearchResponse(BaseModel):
    results: list[SearchResult]
    total: int
