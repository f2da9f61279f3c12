"""Recommendation aggregator — merges MEC categories and calculator verdicts.

Pure Python, deterministic: the same catalog and profile always give the
same envelope (and the same JSON).

Ordering:
- methods a calculator rules out go to `not_suitable`, whatever their category
- remaining methods with a category, ascending (ties in catalog order)
- methods still unknown, last
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from src.calculators import run_calculator
from src.catalog.derived import resolve_facts
from src.config import settings
from src.eligibility.engine import RuleEngine
from src.eligibility.personalization import personalize
from src.models.enums import CalculatorVerdict, MecCategory, RecommendationGroup
from src.schemas.calculators import CalculatorResult
from src.schemas.eligibility import (
    UNKNOWN,
    MethodEligibility,
    RecommendationEntry,
    RecommendationEnvelope,
)
from src.schemas.questionnaire import HealthProfile

if TYPE_CHECKING:
    from src.catalog.catalog import QuestionCatalog

logger = logging.getLogger(__name__)

# Highest category still offered as medically acceptable
ACCEPTABLE_MAX_CATEGORY = MecCategory.BENEFITS_OUTWEIGH

_GROUPS: dict[MecCategory, RecommendationGroup] = {
    MecCategory.NO_RESTRICTION: RecommendationGroup.SUGGESTED,
    MecCategory.BENEFITS_OUTWEIGH: RecommendationGroup.GREATER_BENEFIT,
    MecCategory.RISKS_OUTWEIGH: RecommendationGroup.AVOID,
    MecCategory.UNACCEPTABLE: RecommendationGroup.AVOID,
}


def group_for(category: MecCategory | None) -> RecommendationGroup:
    """Result-screen group of a category (None = unknown)."""
    if category is None:
        return RecommendationGroup.UNKNOWN
    return _GROUPS[category]


def _entry(
    catalog: QuestionCatalog,
    result: MethodEligibility,
    calculator: CalculatorResult | None,
    excluded: bool = False,
) -> RecommendationEntry:
    method = catalog.method(result.method_id)
    return RecommendationEntry(
        method_id=method.id,
        method_name=method.name,
        category=result.category if result.category is not None else UNKNOWN,
        group=RecommendationGroup.AVOID if excluded else group_for(result.category),
        rationale=calculator.message if excluded and calculator else result.rationale,
        reasons=tuple(m.reason for m in result.matched_rules),
        excluded=excluded,
        sti_caveat=result.sti_caveat,
        calculator=calculator,
    )


def build_recommendations(
    catalog: QuestionCatalog,
    profile: HealthProfile,
    engine: RuleEngine | None = None,
    advisory: str | None = None,
    lmp_date: date | None = None,
) -> RecommendationEnvelope:
    """Evaluate every method and assemble the ordered, read-only envelope.

    Args:
        catalog: Rule tables to evaluate against.
        profile: Frozen answers; never modified.
        engine: Rule engine to reuse; one is built for `catalog` when omitted.
        advisory: STI advisory text; defaults to `settings.sti_advisory`.
        lmp_date: Start of the last menstrual period; adds calendar dates
            to fertility-awareness calculator results.
    """
    engine = engine or RuleEngine(catalog)
    values = profile.values()

    determined: list[RecommendationEntry] = []
    unknown: list[RecommendationEntry] = []
    not_suitable: list[RecommendationEntry] = []

    for result in engine.evaluate(profile):
        method = catalog.method(result.method_id)
        calculator = run_calculator(method.calculator, values, lmp_date) if method.calculator else None

        if calculator is not None and calculator.verdict == CalculatorVerdict.NOT_ELIGIBLE:
            not_suitable.append(_entry(catalog, result, calculator, excluded=True))
        elif result.is_unknown:
            unknown.append(_entry(catalog, result, calculator))
        else:
            determined.append(_entry(catalog, result, calculator))

    # Stable sort keeps catalog order within a category
    determined.sort(key=lambda e: e.category)

    acceptable = [
        catalog.method(e.method_id) for e in determined if e.category <= ACCEPTABLE_MAX_CATEGORY
    ]
    personalization = personalize(acceptable, resolve_facts(values, catalog.derived_facts))

    logger.debug(
        "Recommendations built: %d determined, %d unknown, %d not suitable",
        len(determined),
        len(unknown),
        len(not_suitable),
    )
    return RecommendationEnvelope(
        recommendations=tuple(determined + unknown),
        not_suitable=tuple(not_suitable),
        advisory=advisory if advisory is not None else settings.sti_advisory,
        complete=profile.complete,
        personalization=personalization,
    )
