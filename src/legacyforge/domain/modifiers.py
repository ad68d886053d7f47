"""Application of pack rule modifiers to a working rulebook.

Every branch mutates the working copy in place and never raises: a modifier
whose target is missing is logged and skipped.  Payloads taken from a
modifier are deep-copied before insertion so a compiled rulebook never
aliases a cached pack document.
"""

from __future__ import annotations

import logging
from typing import assert_never

from legacyforge.schemas.rulebook import (
    AddRuleModifier,
    AddSectionModifier,
    AddSubsectionModifier,
    ModifyRuleModifier,
    RemoveRuleModifier,
    ReplaceSectionModifier,
    Rule,
    RuleModifier,
    Rulebook,
)

logger = logging.getLogger(__name__)

MODIFIED_TAG = "modified"


def apply_modifier(rulebook: Rulebook, modifier: RuleModifier) -> bool:
    """Apply one modifier to ``rulebook`` in place.

    Returns True when the modifier changed the document and False when it was
    skipped because its target does not exist.
    """

    match modifier:
        case AddSectionModifier(section_id=section_id, data=data):
            rulebook.sections[section_id] = data.model_copy(deep=True)
            logger.debug("added section %s", section_id)
            return True

        case ReplaceSectionModifier(section_id=section_id, data=data):
            rulebook.sections[section_id] = data.model_copy(deep=True)
            logger.debug("replaced section %s", section_id)
            return True

        case AddSubsectionModifier(section_id=section_id, subsection_id=subsection_id):
            section = rulebook.sections.get(section_id)
            if section is None:
                logger.warning(
                    "cannot add subsection %s: section %s not found", subsection_id, section_id
                )
                return False
            section.subsections[subsection_id] = modifier.data.model_copy(deep=True)
            logger.debug("added subsection %s.%s", section_id, subsection_id)
            return True

        case AddRuleModifier(section_id=section_id, subsection_id=subsection_id, rule=rule):
            section = rulebook.sections.get(section_id)
            subsection = section.subsections.get(subsection_id) if section else None
            if subsection is None:
                logger.warning(
                    "cannot add rule %s: subsection %s.%s not found",
                    rule.id,
                    section_id,
                    subsection_id,
                )
                return False
            subsection.rules.append(rule.model_copy(deep=True))
            logger.debug("added rule %s to %s.%s", rule.id, section_id, subsection_id)
            return True

        case ModifyRuleModifier(rule_id=rule_id):
            return _modify_rule(rulebook, rule_id, modifier)

        case RemoveRuleModifier(rule_id=rule_id):
            return _remove_rule(rulebook, rule_id)

        case _:
            assert_never(modifier)


def _locate_rule(rulebook: Rulebook, rule_id: str) -> tuple[list[Rule], int] | None:
    """Find the first rule with ``rule_id`` in traversal order."""

    for section in rulebook.sections.values():
        for subsection in section.subsections.values():
            for index, rule in enumerate(subsection.rules):
                if rule.id == rule_id:
                    return subsection.rules, index
    return None


def _modify_rule(rulebook: Rulebook, rule_id: str, modifier: ModifyRuleModifier) -> bool:
    location = _locate_rule(rulebook, rule_id)
    if location is None:
        logger.warning("cannot modify rule %s: rule not found", rule_id)
        return False

    rules, index = location
    current = rules[index]
    changes = modifier.changes.model_dump(exclude_unset=True)
    changes["modifiers"] = [*current.modifiers, MODIFIED_TAG]
    rules[index] = current.model_copy(update=changes, deep=True)
    logger.debug("modified rule %s (%s)", rule_id, ", ".join(sorted(changes)))
    return True


def _remove_rule(rulebook: Rulebook, rule_id: str) -> bool:
    location = _locate_rule(rulebook, rule_id)
    if location is None:
        logger.warning("cannot remove rule %s: rule not found", rule_id)
        return False

    rules, index = location
    del rules[index]
    logger.debug("removed rule %s", rule_id)
    return True
