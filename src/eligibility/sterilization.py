"""Sterilization readiness — female sterilization and vasectomy.

Both forms share one category scale (A/C/D/S) and one evaluation contract
(`ScreeningForm`). What differs is presentation: the female form reports
whether counselling was confirmed and an STI advisory only for clients at
risk; the male form gates on the wish for permanent contraception and
always carries the STI advisory.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache

from src.catalog.sterilization import (
    FEMALE_ACTIONS,
    FEMALE_DERIVED,
    FEMALE_EXPLANATIONS,
    FEMALE_LABELS,
    FEMALE_QUESTIONS,
    FEMALE_RULES,
    FS_COUNSELLING,
    MALE_ACTIONS,
    MALE_EXPLANATIONS,
    MALE_LABELS,
    MALE_MANDATORY_ALERTS,
    MALE_QUESTIONS,
    MALE_RULES,
    MALE_STI_ADVISORY,
    MS_WANTS_PERMANENT,
    PROCEDURE,
)
from src.eligibility.screening import ScreeningForm, build_form
from src.models.enums import SterilizationCategory
from src.schemas.screening import SterilizationResult

FEMALE = "female-sterilization"
MALE = "male-sterilization"

NO_RESTRICTIONS = "No restrictions identified"


@lru_cache(maxsize=1)
def female_form() -> ScreeningForm:
    return build_form(
        FEMALE,
        FEMALE_QUESTIONS,
        FEMALE_RULES,
        SterilizationCategory,
        (PROCEDURE,),
        FEMALE_DERIVED,
    )


@lru_cache(maxsize=1)
def male_form() -> ScreeningForm:
    return build_form(MALE, MALE_QUESTIONS, MALE_RULES, SterilizationCategory, (PROCEDURE,))


def evaluate_female_sterilization(answers: Mapping[str, object]) -> SterilizationResult:
    """Readiness for female sterilization.

    Raises:
        UnknownQuestion: an answer names a question the form does not ask.
        InvalidAnswer: an answer violates its question's constraints.
    """
    form = female_form()
    values = form.validate(answers)
    outcome = form.evaluate(values)
    procedure = outcome.track(PROCEDURE)
    category = SterilizationCategory(procedure.category)

    return SterilizationResult(
        procedure=FEMALE,
        category=category,
        label=FEMALE_LABELS[category],
        explanation=FEMALE_EXPLANATIONS[category],
        clinical_action=FEMALE_ACTIONS[category],
        reasons=tuple(f.reason for f in procedure.findings),
        sti_advisory=next((a.message for a in outcome.advisories), None),
        counselling_confirmed=all(values.get(q) is True for q in FS_COUNSELLING),
        temporary_contraception_recommended=category == SterilizationCategory.DELAY,
        referral_required=category == SterilizationCategory.SPECIAL,
        complete=outcome.complete,
    )


def evaluate_male_sterilization(answers: Mapping[str, object]) -> SterilizationResult:
    """Readiness for vasectomy.

    A client who does not want permanent contraception is not eligible,
    whatever the other answers.

    Raises:
        UnknownQuestion: an answer names a question the form does not ask.
        InvalidAnswer: an answer violates its question's constraints.
    """
    form = male_form()
    values = form.validate(answers)

    if values.get(MS_WANTS_PERMANENT) is False:
        return SterilizationResult(
            procedure=MALE,
            category=SterilizationCategory.DELAY,
            label="Not Eligible",
            explanation=(
                "Client does not desire permanent contraception. "
                "Male sterilization is not appropriate at this time."
            ),
            clinical_action=(
                "Counsel client on alternative contraceptive methods including "
                "long-acting reversible contraceptives (LARCs)."
            ),
            reasons=("Does not desire permanent contraception",),
            counselling_alerts=(
                "Discuss alternative long-acting reversible methods",
                "Explore reasons for seeking contraception",
            ),
            sti_advisory=MALE_STI_ADVISORY,
            temporary_contraception_recommended=True,
            complete=True,
        )

    outcome = form.evaluate(values)
    procedure = outcome.track(PROCEDURE)
    category = SterilizationCategory(procedure.category)

    return SterilizationResult(
        procedure=MALE,
        category=category,
        label=MALE_LABELS[category],
        explanation=MALE_EXPLANATIONS[category],
        clinical_action=MALE_ACTIONS[category],
        reasons=tuple(f.reason for f in procedure.findings) or (NO_RESTRICTIONS,),
        counselling_alerts=(*(a.message for a in outcome.advisories), *MALE_MANDATORY_ALERTS),
        sti_advisory=MALE_STI_ADVISORY,
        temporary_contraception_recommended=category == SterilizationCategory.DELAY,
        referral_required=category == SterilizationCategory.SPECIAL,
        complete=outcome.complete,
    )
