"""Fertility awareness-based (FAB) method screening tables.

Two tracks are scored side by side: the symptoms-based method (SYM) and the
calendar-based method (CAL). A condition often restricts one more than the
other, so every rule states a category per track. Advisory rules raise a
counselling message and leave both categories alone.
"""

from __future__ import annotations

from typing import Any

from src.catalog.builders import all_of, compare, equals, numeric, when, yes_no
from src.models.enums import FabCategory, FabMethod

A = FabCategory.ACCEPT.value
C = FabCategory.CAUTION.value
D = FabCategory.DELAY.value

SYM = FabMethod.SYMPTOMS.value
CAL = FabMethod.CALENDAR.value

FAB_PREGNANT = "fab-currently-pregnant"


def _both(
    rule_id: str,
    section: str,
    predicate: dict[str, Any],
    sym: str,
    cal: str,
    reason: str,
    alerts: tuple[str, ...] = (),
) -> dict[str, Any]:
    return {
        "id": rule_id,
        "section": section,
        "when": predicate,
        "effects": [
            {"track": SYM, "category": sym, "reason": reason},
            {"track": CAL, "category": cal, "reason": reason},
        ],
        "alerts": list(alerts),
    }


def _advisory(rule_id: str, section: str, predicate: dict[str, Any], message: str) -> dict[str, Any]:
    return {"id": rule_id, "section": section, "when": predicate, "alerts": [message]}


FAB_QUESTIONS: list[dict[str, Any]] = [
    # ── Current pregnancy ────────────────────────────────────────────
    {
        "id": FAB_PREGNANT,
        "text": "Is the client currently pregnant?",
        "kind": "choice",
        "section": "current-pregnancy",
        "options": ["yes", "no", "unsure"],
    },
    # ── Postpartum ───────────────────────────────────────────────────
    yes_no(
        "fab-delivered-last-6-months",
        "Has the client delivered a baby within the last 6 months?",
        "postpartum",
    ),
    numeric(
        "fab-weeks-since-delivery", "Weeks since delivery", "postpartum", 1, 52, "weeks",
        asked_when=when("fab-delivered-last-6-months", True),
    ),
    yes_no(
        "fab-currently-breastfeeding", "Is the client currently breastfeeding?", "postpartum",
        asked_when=when("fab-delivered-last-6-months", True),
    ),
    yes_no(
        "fab-menses-resumed", "Has menses resumed?", "postpartum",
        asked_when=when("fab-currently-breastfeeding", True),
    ),
    # ── Recent abortion ──────────────────────────────────────────────
    yes_no(
        "fab-abortion-last-4-weeks",
        "Has the client had an abortion within the last 4 weeks?",
        "recent-abortion",
    ),
    # ── Life stage ───────────────────────────────────────────────────
    numeric("fab-age", "Age", "life-stage", 10, 70, "years", integer=True),
    numeric(
        "fab-years-since-menarche", "Years since menarche (first period)", "life-stage",
        0, 60, "years",
    ),
    yes_no(
        "fab-perimenopausal-symptoms",
        "Perimenopausal symptoms? (cycle irregularity, hot flashes)",
        "life-stage",
    ),
    # ── Menstrual and infection status ───────────────────────────────
    yes_no(
        "fab-irregular-vaginal-bleeding", "Is there irregular vaginal bleeding?", "menstrual-infection"
    ),
    yes_no(
        "fab-abnormal-vaginal-discharge", "Is there abnormal vaginal discharge?", "menstrual-infection"
    ),
    # ── Drugs and medical conditions ─────────────────────────────────
    yes_no(
        "fab-medications-affect-cycle",
        "Is the client using medications that affect ovulation, hormones, cycle regularity, "
        "or fertility signs?",
        "drugs-medical",
    ),
    yes_no(
        "fab-chronic-elevated-temperature",
        "Does the client have chronic disease causing persistent elevated temperature?",
        "drugs-medical",
    ),
    yes_no(
        "fab-acute-febrile-illness", "Does the client have an acute febrile illness?", "drugs-medical"
    ),
    # ── Advisories ───────────────────────────────────────────────────
    yes_no("fab-sti-hiv-risk", "Is the client at risk for STI/HIV?", "sti-risk"),
    yes_no(
        "fab-high-risk-pregnancy",
        "Does the client have a condition where pregnancy would pose a serious health risk?",
        "pregnancy-risk",
    ),
]

_BREASTFEEDING = all_of(equals("fab-delivered-last-6-months"), equals("fab-currently-breastfeeding"))
_NOT_BREASTFEEDING = all_of(
    equals("fab-delivered-last-6-months"), equals("fab-currently-breastfeeding", False)
)

FAB_RULES: list[dict[str, Any]] = [
    # ── Postpartum ───────────────────────────────────────────────────
    _both(
        "breastfeeding-under-6w", "postpartum",
        all_of(_BREASTFEEDING, compare("fab-weeks-since-delivery", "lt", 6)), D, D,
        "Postpartum (<6 weeks, breastfeeding)",
    ),
    _both(
        "breastfeeding-no-menses", "postpartum",
        all_of(_BREASTFEEDING, equals("fab-menses-resumed", False)), C, D,
        "Postpartum (breastfeeding, menses not resumed)",
    ),
    _both(
        "breastfeeding-menses", "postpartum",
        all_of(_BREASTFEEDING, equals("fab-menses-resumed")), C, C,
        "Postpartum (breastfeeding, menses resumed)",
    ),
    _both(
        "not-breastfeeding-under-4w", "postpartum",
        all_of(_NOT_BREASTFEEDING, compare("fab-weeks-since-delivery", "lt", 4)), D, D,
        "Postpartum (<4 weeks, not breastfeeding)",
    ),
    _both(
        "not-breastfeeding-4w-plus", "postpartum",
        all_of(_NOT_BREASTFEEDING, compare("fab-weeks-since-delivery", "ge", 4)), A, D,
        "Postpartum (≥4 weeks, not breastfeeding)",
    ),
    # ── Recent abortion ──────────────────────────────────────────────
    _both(
        "recent-abortion", "recent-abortion", equals("fab-abortion-last-4-weeks"), C, D,
        "Recent abortion (<4 weeks)",
    ),
    # ── Life stage ───────────────────────────────────────────────────
    _both(
        "early-menarche", "life-stage", compare("fab-years-since-menarche", "le", 2), C, C,
        "≤2 years since menarche",
    ),
    _both(
        "perimenopause", "life-stage", equals("fab-perimenopausal-symptoms"), C, C,
        "Perimenopausal symptoms",
    ),
    # ── Menstrual and infection status ───────────────────────────────
    _both(
        "irregular-bleeding", "menstrual-infection", equals("fab-irregular-vaginal-bleeding"), D, D,
        "Irregular vaginal bleeding",
    ),
    _both(
        "abnormal-discharge", "menstrual-infection", equals("fab-abnormal-vaginal-discharge"), D, A,
        "Abnormal vaginal discharge",
    ),
    # ── Drugs and medical conditions ─────────────────────────────────
    _both(
        "cycle-medication", "drugs-medical", equals("fab-medications-affect-cycle"), C, C,
        "Medications affecting cycle/fertility signs",
        alerts=("Further evaluation of cycle stability required.",),
    ),
    _both(
        "chronic-elevated-temperature", "drugs-medical",
        equals("fab-chronic-elevated-temperature"), C, A,
        "Chronic elevated temperature",
    ),
    _both(
        "acute-febrile-illness", "drugs-medical", equals("fab-acute-febrile-illness"), D, A,
        "Acute febrile illness",
    ),
    # ── Advisories ───────────────────────────────────────────────────
    _advisory(
        "sti-risk", "sti-risk", equals("fab-sti-hiv-risk"),
        "FAB methods do NOT protect against STIs/HIV. "
        "Recommend correct and consistent condom use.",
    ),
    _advisory(
        "high-risk-pregnancy", "pregnancy-risk", equals("fab-high-risk-pregnancy"),
        "FAB methods may not be appropriate due to relatively higher typical-use failure rates.",
    ),
]

METHOD_NAMES: dict[FabMethod, str] = {
    FabMethod.SYMPTOMS: "Symptoms-Based Method (SYM)",
    FabMethod.CALENDAR: "Calendar-Based Method (CAL)",
}

LABELS: dict[FabCategory, str] = {
    FabCategory.ACCEPT: "Accept (no restriction)",
    FabCategory.CAUTION: "Caution (enhanced counselling required)",
    FabCategory.DELAY: "Delay (temporary method recommended until condition resolved)",
}

ACTIONS: dict[FabCategory, str] = {
    FabCategory.CAUTION: "Enhanced counselling required before use.",
    FabCategory.DELAY: "Recommend temporary method until condition resolved.",
}

EXPLANATIONS: dict[tuple[FabMethod, FabCategory], str] = {
    (FabMethod.SYMPTOMS, FabCategory.ACCEPT): (
        "No identified restrictions for symptoms-based tracking. "
        "Client may use SYM with standard counselling."
    ),
    (FabMethod.CALENDAR, FabCategory.ACCEPT): (
        "No identified restrictions for calendar-based tracking. "
        "Client may use CAL with standard counselling."
    ),
    (FabMethod.SYMPTOMS, FabCategory.CAUTION): (
        "One or more caution conditions present (e.g., postpartum, perimenopause, medications). "
        "Enhanced counselling and cycle stability evaluation recommended."
    ),
    (FabMethod.CALENDAR, FabCategory.CAUTION): (
        "One or more caution conditions present (e.g., irregular cycles, perimenopause). "
        "Enhanced counselling recommended."
    ),
    (FabMethod.SYMPTOMS, FabCategory.DELAY): (
        "Conditions present that temporarily limit reliability of fertility signs "
        "(e.g., recent delivery, irregular bleeding, acute illness). "
        "Recommend alternative method until resolved."
    ),
    (FabMethod.CALENDAR, FabCategory.DELAY): (
        "Conditions present that limit calendar method reliability. "
        "Recommend alternative method until resolved."
    ),
}

NOT_APPLICABLE_MESSAGE = "FAB methods are not relevant during pregnancy."
