"""Pydantic schemas for the procedure and fertility-awareness screenings.

A screening form is its own small questionnaire with its own rule table.
Rules reuse the predicate tree of `src.schemas.rules`; an effect assigns a
letter category (A/C/D/S) to one track of the form instead of a WHO MEC
category to a method.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator

from src.models.enums import FabCategory, FabMethod, SterilizationCategory
from src.schemas.rules import Predicate


# ---------------------------------------------------------------------------
# Rule tables
# ---------------------------------------------------------------------------


class ScreeningEffect(BaseModel):
    """Category a satisfied rule assigns to one track.

    `reason` may quote answered facts the rule reads, e.g. "{fs-bp-systolic}".
    """

    model_config = ConfigDict(frozen=True)

    track: str
    category: str
    reason: str


class ScreeningRule(BaseModel):
    """A screening rule: one predicate, any number of effects and alerts."""

    model_config = ConfigDict(frozen=True)

    id: str
    section: str
    when: Predicate
    effects: tuple[ScreeningEffect, ...] = ()
    alerts: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_outcome(self) -> ScreeningRule:
        if not self.effects and not self.alerts:
            msg = f"Screening rule '{self.id}' has neither effects nor alerts"
            raise ValueError(msg)
        return self


# ---------------------------------------------------------------------------
# Evaluation output
# ---------------------------------------------------------------------------


class Finding(BaseModel):
    """A satisfied effect, with its reason rendered against the answers."""

    model_config = ConfigDict(frozen=True)

    rule_id: str
    category: str
    reason: str


class Advisory(BaseModel):
    """Counselling message raised by a satisfied rule. Never a category."""

    model_config = ConfigDict(frozen=True)

    rule_id: str
    message: str


class TrackOutcome(BaseModel):
    """Most restrictive category of one track and every finding behind it."""

    model_config = ConfigDict(frozen=True)

    track: str
    category: str
    findings: tuple[Finding, ...] = ()

    @property
    def deciding(self) -> tuple[Finding, ...]:
        """Findings at the final category, in registration order."""
        return tuple(f for f in self.findings if f.category == self.category)


class ScreeningOutcome(BaseModel):
    """Raw evaluation of a screening form, before presentation."""

    model_config = ConfigDict(frozen=True)

    tracks: tuple[TrackOutcome, ...]
    advisories: tuple[Advisory, ...] = ()
    complete: bool = False

    def track(self, name: str) -> TrackOutcome:
        for outcome in self.tracks:
            if outcome.track == name:
                return outcome
        raise KeyError(name)


class SterilizationResult(BaseModel):
    """Female or male sterilization readiness."""

    model_config = ConfigDict(frozen=True)

    procedure: str
    category: SterilizationCategory
    label: str
    explanation: str
    clinical_action: str
    reasons: tuple[str, ...] = ()
    counselling_alerts: tuple[str, ...] = ()
    sti_advisory: str | None = None
    counselling_confirmed: bool | None = None  # female form only
    temporary_contraception_recommended: bool = False
    referral_required: bool = False
    complete: bool = False


class FabMethodResult(BaseModel):
    """Eligibility of one fertility awareness-based method."""

    model_config = ConfigDict(frozen=True)

    method: FabMethod
    method_name: str
    category: FabCategory
    label: str
    explanation: str
    action_required: str | None = None
    contributing_factors: tuple[Finding, ...] = ()  # empty when accepted


class FabResult(BaseModel):
    """Symptoms-based and calendar-based eligibility, plus advisories."""

    model_config = ConfigDict(frozen=True)

    not_applicable: bool = False
    message: str | None = None
    methods: tuple[FabMethodResult, ...] = ()
    advisories: tuple[Advisory, ...] = ()
    complete: bool = False

    def method(self, method: FabMethod) -> FabMethodResult:
        for result in self.methods:
            if result.method == method:
                return result
        raise KeyError(method)
