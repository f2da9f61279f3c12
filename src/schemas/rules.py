"""Pydantic schemas for rule data: predicate trees, effects, and methods.

Rules are data, not code. A predicate is a tagged tree of comparison
nodes combined with `all` / `any`, interpreted by
`src.eligibility.predicates`.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import CalculatorType, MecCategory, MethodFamily, Operator
from src.schemas.questionnaire import AnswerValue, Question


# ---------------------------------------------------------------------------
# Predicate tree
# ---------------------------------------------------------------------------


class Comparison(BaseModel):
    """Leaf node: compare one answer (or derived fact) to a constant."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["compare"] = "compare"
    question: str
    op: Operator
    value: AnswerValue | tuple[AnswerValue, ...]


class AllOf(BaseModel):
    """Satisfied when every term is satisfied."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["all"] = "all"
    terms: tuple[Predicate, ...] = Field(min_length=1)


class AnyOf(BaseModel):
    """Satisfied when at least one term is satisfied."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["any"] = "any"
    terms: tuple[Predicate, ...] = Field(min_length=1)


class Always(BaseModel):
    """Always satisfied. Encodes unconditional categories."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["always"] = "always"


Predicate = Annotated[Comparison | AllOf | AnyOf | Always, Field(discriminator="kind")]

AllOf.model_rebuild()
AnyOf.model_rebuild()


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


class RuleEffect(BaseModel):
    """Category applied to a group of methods when the rule triggers."""

    model_config = ConfigDict(frozen=True)

    methods: tuple[str, ...] = Field(min_length=1)
    category: MecCategory
    reason: str


class RuleDefinition(BaseModel):
    """A rule as authored in the rule tables (one predicate, many effects)."""

    model_config = ConfigDict(frozen=True)

    id: str
    section: str
    description: str = ""
    when: Predicate
    effects: tuple[RuleEffect, ...] = Field(min_length=1)


class MethodRule(BaseModel):
    """A rule flattened to a single method, as the engine evaluates it.

    `order` is the registration index; ties on category resolve to the
    lowest order.
    """

    model_config = ConfigDict(frozen=True)

    rule_id: str
    method_id: str
    category: MecCategory
    reason: str
    when: Predicate
    order: int


# ---------------------------------------------------------------------------
# Methods
# ---------------------------------------------------------------------------


class MethodDefinition(BaseModel):
    """A contraceptive method evaluated by the engine."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    short_name: str
    family: MethodFamily
    protects_against_sti: bool = False
    default_category: MecCategory = MecCategory.NO_RESTRICTION
    calculator: CalculatorType | None = None

    # Personalization attributes
    frequency: str | None = None        # daily, every-3-weeks, every-3-months, ...
    regular_bleeding: bool = False      # keeps a predictable bleeding pattern


class CatalogDocument(BaseModel):
    """Serialized rule tables, as loaded from a JSON configuration file."""

    questions: list[Question]
    methods: list[MethodDefinition]
    rules: list[RuleDefinition]
