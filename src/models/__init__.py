"""Domain enums for the eligibility engine."""

from __future__ import annotations

from src.models.enums import (
    AnswerKind,
    CalculatorType,
    CalculatorVerdict,
    EvaluationStatus,
    FabCategory,
    FabMethod,
    MecCategory,
    MethodFamily,
    Operator,
    RecommendationGroup,
    SterilizationCategory,
)

__all__ = [
    "AnswerKind",
    "CalculatorType",
    "CalculatorVerdict",
    "EvaluationStatus",
    "FabCategory",
    "FabMethod",
    "MecCategory",
    "MethodFamily",
    "Operator",
    "RecommendationGroup",
    "SterilizationCategory",
]
