"""Eligibility engine — WHO MEC recommendations, sterilization and FAB screenings."""

from src.eligibility.aggregator import build_recommendations
from src.eligibility.engine import RuleEngine
from src.eligibility.fab import evaluate_fab
from src.eligibility.personalization import personalize
from src.eligibility.screening import ScreeningForm
from src.eligibility.sterilization import (
    evaluate_female_sterilization,
    evaluate_male_sterilization,
)
from src.schemas.eligibility import (
    MethodEligibility,
    PersonalizedView,
    RecommendationEntry,
    RecommendationEnvelope,
)

__all__ = [
    "build_recommendations",
    "RuleEngine",
    "evaluate_fab",
    "evaluate_female_sterilization",
    "evaluate_male_sterilization",
    "personalize",
    "ScreeningForm",
    "MethodEligibility",
    "PersonalizedView",
    "RecommendationEntry",
    "RecommendationEnvelope",
]
