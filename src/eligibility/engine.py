"""Rule engine — assigns a WHO MEC category to each method.

Pure Python, deterministic. Severity-max over satisfied rules:
- a rule is evaluated only once every fact it reads is answered
- the highest category among satisfied rules wins; ties go to the rule
  registered first
- no satisfied rule: the method's default category when the profile is
  complete for it, otherwise unknown

Adding answers therefore never lowers a category.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from src.catalog.derived import resolve_facts
from src.eligibility.predicates import evaluate, references
from src.errors import RuleEvaluationError
from src.models.enums import EvaluationStatus
from src.schemas.eligibility import MethodEligibility, RuleMatch
from src.schemas.questionnaire import AnswerValue, HealthProfile
from src.schemas.rules import MethodRule

if TYPE_CHECKING:
    from src.catalog.catalog import QuestionCatalog

logger = logging.getLogger(__name__)

NO_RESTRICTION_RATIONALE = "No restriction found for your answers"
UNKNOWN_RATIONALE = "More answers are needed to assess this method"


class RuleEngine:
    """Evaluates the catalog's per-method rules against a frozen profile."""

    def __init__(self, catalog: QuestionCatalog) -> None:
        self._catalog = catalog

    def _satisfied(
        self,
        rule: MethodRule,
        facts: Mapping[str, AnswerValue],
    ) -> bool:
        reads = references(rule.when)
        for name in reads:
            if not self._catalog.is_known_fact(name):
                raise RuleEvaluationError(f"references unknown question '{name}'", rule.rule_id)
        if not reads <= facts.keys():
            return False  # not enough is known yet
        return evaluate(rule.when, facts, rule.rule_id)

    def evaluate_method(self, method_id: str, profile: HealthProfile) -> MethodEligibility:
        """Category of one method for a profile.

        Raises:
            UnknownMethod: the catalog does not declare `method_id`.
            RuleEvaluationError: a rule reads a fact the catalog does not know.
        """
        method = self._catalog.method(method_id)
        values = profile.values()
        facts = resolve_facts(values, self._catalog.derived_facts)
        return self._evaluate(method_id, values, facts, sti_caveat=not method.protects_against_sti)

    def _evaluate(
        self,
        method_id: str,
        values: Mapping[str, AnswerValue],
        facts: Mapping[str, AnswerValue],
        sti_caveat: bool,
    ) -> MethodEligibility:
        matched = [r for r in self._catalog.rules_for(method_id) if self._satisfied(r, facts)]
        # Highest category first; registration order breaks ties
        matched.sort(key=lambda r: (-r.category, r.order))
        matches = tuple(
            RuleMatch(rule_id=r.rule_id, category=r.category, reason=r.reason) for r in matched
        )

        if matches:
            deciding = matches[0]
            result = MethodEligibility(
                method_id=method_id,
                status=EvaluationStatus.DETERMINED,
                category=deciding.category,
                deciding_rule=deciding,
                matched_rules=matches,
                rationale=deciding.reason,
                sti_caveat=sti_caveat,
            )
        elif self._catalog.is_complete_for(method_id, values):
            result = MethodEligibility(
                method_id=method_id,
                status=EvaluationStatus.DETERMINED,
                category=self._catalog.method(method_id).default_category,
                rationale=NO_RESTRICTION_RATIONALE,
                sti_caveat=sti_caveat,
            )
        else:
            result = MethodEligibility(
                method_id=method_id,
                status=EvaluationStatus.UNKNOWN,
                rationale=UNKNOWN_RATIONALE,
                sti_caveat=sti_caveat,
            )

        logger.debug(
            "Evaluated %s: status=%s category=%s rule=%s",
            method_id,
            result.status.value,
            result.category,
            result.deciding_rule.rule_id if result.deciding_rule else None,
        )
        return result

    def evaluate(self, profile: HealthProfile) -> tuple[MethodEligibility, ...]:
        """Evaluate every method, in catalog declaration order."""
        values = profile.values()
        facts = resolve_facts(values, self._catalog.derived_facts)
        return tuple(
            self._evaluate(m.id, values, facts, sti_caveat=not m.protects_against_sti)
            for m in self._catalog.methods
        )
