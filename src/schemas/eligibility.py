"""Pydantic schemas for rule-engine and aggregator output.

Pure data classes — frozen snapshots handed to the rendering layer.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from src.models.enums import EvaluationStatus, MecCategory, RecommendationGroup
from src.schemas.calculators import CalculatorResult

UNKNOWN: Literal["unknown"] = "unknown"


class RuleMatch(BaseModel):
    """A satisfied rule, kept for the rationale shown to the user."""

    model_config = ConfigDict(frozen=True)

    rule_id: str
    category: MecCategory
    reason: str


class MethodEligibility(BaseModel):
    """Rule-engine result for one method."""

    model_config = ConfigDict(frozen=True)

    method_id: str
    status: EvaluationStatus
    category: MecCategory | None = None
    deciding_rule: RuleMatch | None = None
    matched_rules: tuple[RuleMatch, ...] = ()
    rationale: str = ""
    sti_caveat: bool = True  # advisory, never a category

    @property
    def is_unknown(self) -> bool:
        return self.status == EvaluationStatus.UNKNOWN


class RecommendationEntry(BaseModel):
    """One record of the final, ordered result list."""

    model_config = ConfigDict(frozen=True)

    method_id: str
    method_name: str
    category: MecCategory | Literal["unknown"]
    group: RecommendationGroup
    rationale: str
    reasons: tuple[str, ...] = ()
    excluded: bool = False
    sti_caveat: bool = True
    calculator: CalculatorResult | None = None


class Elimination(BaseModel):
    """A medically acceptable method removed by a stated preference."""

    model_config = ConfigDict(frozen=True)

    method_id: str
    reason: str


class PersonalizedView(BaseModel):
    """Preference-filtered subset of the acceptable methods."""

    model_config = ConfigDict(frozen=True)

    recommended: tuple[str, ...] = ()
    eliminated: tuple[Elimination, ...] = ()
    notices: tuple[str, ...] = ()


class RecommendationEnvelope(BaseModel):
    """Full aggregator output."""

    model_config = ConfigDict(frozen=True)

    recommendations: tuple[RecommendationEntry, ...]
    not_suitable: tuple[RecommendationEntry, ...] = ()
    advisory: str
    complete: bool = False
    personalization: PersonalizedView = PersonalizedView()
