"""Keyword/tag search and id lookups over a (compiled) rulebook."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from legacyforge.schemas.rulebook import Rule, Rulebook, SearchResult, Section

UNKNOWN_SECTION_PATH = "unknown"


def iter_rules(rulebook: Rulebook) -> Iterator[tuple[str, str, Rule]]:
    """Yield ``(section_id, subsection_id, rule)`` in document traversal order."""

    for section_id, section in rulebook.sections.items():
        for subsection_id, subsection in section.subsections.items():
            for rule in subsection.rules:
                yield section_id, subsection_id, rule


def search_rules(
    rulebook: Rulebook,
    query: str,
    sections: Sequence[str] | None = None,
    tags: Sequence[str] | None = None,
) -> list[Rule]:
    """Return rules whose text contains ``query`` (case-insensitive).

    Empty or missing ``sections``/``tags`` filters match everything; a tag
    filter matches when the rule carries at least one requested tag.  Results
    keep document order; ranking is done by :func:`rank_rules`.
    """

    needle = query.lower()
    results: list[Rule] = []
    for section_id, _, rule in iter_rules(rulebook):
        if sections and section_id not in sections:
            continue
        if needle not in rule.text.lower():
            continue
        if tags and not any(tag in rule.tags for tag in tags):
            continue
        results.append(rule)
    return results


def relevance(rule: Rule, query: str) -> float:
    """Score a match: 1.0 for exact text, 0.5-0.9 by match position otherwise."""

    needle = query.lower()
    text = rule.text.lower()
    if text == needle:
        return 1.0
    position = text.find(needle)
    if position < 0:
        return 0.5
    return 0.5 + (1 - position / len(text)) * 0.4


def find_section_path(rulebook: Rulebook, rule_id: str) -> str:
    """Return ``"<section>.<subsection>"`` of the first subsection holding ``rule_id``."""

    for section_id, subsection_id, rule in iter_rules(rulebook):
        if rule.id == rule_id:
            return f"{section_id}.{subsection_id}"
    return UNKNOWN_SECTION_PATH


def rank_rules(rulebook: Rulebook, rules: Sequence[Rule], query: str) -> list[SearchResult]:
    """Attach relevance and section path, sorted by descending relevance (stable)."""

    results = [
        SearchResult(
            section=find_section_path(rulebook, rule.id),
            rule=rule,
            relevance=relevance(rule, query),
        )
        for rule in rules
    ]
    results.sort(key=lambda result: result.relevance, reverse=True)
    return results


def get_rule_by_id(rulebook: Rulebook, rule_id: str) -> Rule | None:
    for _, _, rule in iter_rules(rulebook):
        if rule.id == rule_id:
            return rule
    return None


def get_section_by_id(rulebook: Rulebook, section_id: str) -> Section | None:
    return rulebook.sections.get(section_id)
