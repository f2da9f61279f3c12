"""Preference filtering of medically acceptable methods.

Input is the set of methods in category 1 or 2. Preferences only narrow
that set; they never change a category. Questions are applied in the
order they are asked: future pregnancy, surgery, bleeding pattern,
frequency.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence

from src.catalog.derived import BMI
from src.catalog.questions import (
    OKAY_WITH_IRREGULAR_PERIODS,
    PREFERRED_FREQUENCY,
    WANTS_FUTURE_PREGNANCY,
    WANTS_SURGICAL_METHOD,
)
from src.models.enums import MethodFamily
from src.schemas.eligibility import Elimination, PersonalizedView
from src.schemas.questionnaire import AnswerValue
from src.schemas.rules import MethodDefinition

logger = logging.getLogger(__name__)

# Combined patch and ring are the only every-3-weeks methods; both are
# unsuitable above this BMI.
THREE_WEEKLY_MAX_BMI = 30

PERMANENT_NOTICE = "Sterilization is permanent and fertility is not reversible"
PERMANENT_UNSUITABLE_NOTICE = (
    "Sterilization may not be medically suitable based on your health profile"
)
THREE_WEEKLY_BMI_NOTICE = (
    "Unfortunately there's no safe method that can be used every 3 weeks for BMI >30"
)
NO_FREQUENCY_MATCH_NOTICE = (
    "None of the methods matching your preferred frequency are available "
    "based on your previous answers."
)


def _is_permanent(method: MethodDefinition) -> bool:
    return method.family == MethodFamily.PERMANENT


def _keep(
    methods: list[MethodDefinition],
    keep_if: Callable[[MethodDefinition], bool],
    reason: str,
    eliminated: list[Elimination],
) -> list[MethodDefinition]:
    """Return the methods passing `keep_if`; record the rest as eliminated."""
    kept: list[MethodDefinition] = []
    for method in methods:
        if keep_if(method):
            kept.append(method)
        else:
            eliminated.append(Elimination(method_id=method.id, reason=reason))
    return kept


def _view(
    methods: list[MethodDefinition],
    eliminated: list[Elimination],
    notices: list[str],
) -> PersonalizedView:
    logger.debug(
        "Personalization completed: %d recommended, %d eliminated",
        len(methods),
        len(eliminated),
    )
    return PersonalizedView(
        recommended=tuple(m.id for m in methods),
        eliminated=tuple(eliminated),
        notices=tuple(notices),
    )


def personalize(
    acceptable: Sequence[MethodDefinition],
    facts: Mapping[str, AnswerValue],
) -> PersonalizedView:
    """Narrow acceptable methods by the user's stated preferences.

    Args:
        acceptable: Category 1-2 methods, in result order.
        facts: Answers plus derived facts (BMI is read when present).

    Returns:
        PersonalizedView. Unanswered preferences filter nothing.
    """
    methods = list(acceptable)
    eliminated: list[Elimination] = []
    notices: list[str] = []

    future_pregnancy = facts.get(WANTS_FUTURE_PREGNANCY)
    surgery = facts.get(WANTS_SURGICAL_METHOD)

    if future_pregnancy is True:
        methods = _keep(
            methods,
            lambda m: not _is_permanent(m),
            "Wants future pregnancy - sterilization is permanent",
            eliminated,
        )
    elif future_pregnancy is False and surgery is True:
        # Only permanent methods are offered; later preferences do not apply
        permanent = [m for m in methods if _is_permanent(m)]
        if not permanent:
            return _view([], eliminated, [PERMANENT_UNSUITABLE_NOTICE])
        methods = _keep(methods, _is_permanent, "Prefers a permanent method", eliminated)
        return _view(methods, eliminated, [PERMANENT_NOTICE])
    elif future_pregnancy is False and surgery is False:
        methods = _keep(
            methods,
            lambda m: not _is_permanent(m),
            "Does not want surgical method",
            eliminated,
        )

    if facts.get(OKAY_WITH_IRREGULAR_PERIODS) is False:
        methods = _keep(
            methods,
            lambda m: m.regular_bleeding,
            "May cause irregular or no periods",
            eliminated,
        )

    frequency = facts.get(PREFERRED_FREQUENCY)
    if isinstance(frequency, str):
        bmi = facts.get(BMI)
        too_heavy = (
            frequency == "every-3-weeks"
            and isinstance(bmi, (int, float))
            and bmi > THREE_WEEKLY_MAX_BMI
        )
        if too_heavy:
            methods = _keep(
                methods, lambda m: False, "BMI above 30 for an every-3-weeks method", eliminated
            )
            notices.append(THREE_WEEKLY_BMI_NOTICE)
        else:
            methods = _keep(
                methods,
                lambda m: m.frequency == frequency,
                "Does not match your preferred frequency",
                eliminated,
            )
            if not methods:
                notices.append(NO_FREQUENCY_MATCH_NOTICE)

    return _view(methods, eliminated, notices)
