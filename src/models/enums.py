"""Domain enums shared by the catalog, the engine, and the result schemas.

All enums are str/int mixins so they serialize cleanly to JSON.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum


class AnswerKind(StrEnum):
    """How a question is answered; drives answer validation."""

    BOOLEAN = "boolean"
    NUMERIC = "numeric"
    CHOICE = "choice"


class MecCategory(IntEnum):
    """WHO Medical Eligibility Criteria category."""

    NO_RESTRICTION = 1      # use the method in any circumstances
    BENEFITS_OUTWEIGH = 2   # generally use the method
    RISKS_OUTWEIGH = 3      # use not usually recommended
    UNACCEPTABLE = 4        # method not to be used


class EvaluationStatus(StrEnum):
    """Whether the engine could settle a category for a method."""

    DETERMINED = "determined"
    UNKNOWN = "unknown"  # profile incomplete and no rule matched


class CalculatorVerdict(StrEnum):
    """Outcome of a fertility-awareness calculator."""

    ELIGIBLE = "eligible"
    NOT_ELIGIBLE = "not_eligible"
    NOT_EVALUATED = "not_evaluated"  # required inputs not answered yet


class CalculatorType(StrEnum):
    """Numeric calculators a method can be gated on."""

    STANDARD_DAYS = "standard_days"
    CALENDAR = "calendar"


class MethodFamily(StrEnum):
    """Broad grouping of contraceptive methods."""

    HORMONAL = "hormonal"
    NON_HORMONAL = "non_hormonal"
    BARRIER = "barrier"
    PERMANENT = "permanent"
    FERTILITY_AWARENESS = "fertility_awareness"


class Operator(StrEnum):
    """Comparison operators available to rule predicates."""

    EQ = "eq"
    NE = "ne"
    LT = "lt"
    LE = "le"
    GT = "gt"
    GE = "ge"
    IN = "in"


class RecommendationGroup(StrEnum):
    """Result-screen grouping of MEC categories."""

    SUGGESTED = "suggested"              # MEC 1
    GREATER_BENEFIT = "greater_benefit"  # MEC 2
    AVOID = "avoid"                      # MEC 3-4
    UNKNOWN = "unknown"


class SterilizationCategory(StrEnum):
    """Surgical readiness for female or male sterilization.

    Declared from least to most restrictive; the most restrictive category
    among satisfied rules wins.
    """

    ACCEPT = "A"    # proceed with the standard procedure
    CAUTION = "C"   # proceed with precautions and extra counselling
    DELAY = "D"     # treat the condition first, temporary method meanwhile
    SPECIAL = "S"   # refer to an experienced surgeon at a higher-level facility


class FabCategory(StrEnum):
    """Eligibility for a fertility awareness-based method, least to most restrictive."""

    ACCEPT = "A"
    CAUTION = "C"   # enhanced counselling before use
    DELAY = "D"     # temporary method until the condition resolves


class FabMethod(StrEnum):
    """Fertility awareness-based methods screened separately."""

    SYMPTOMS = "sym"   # cervical secretions, basal body temperature
    CALENDAR = "cal"
