"""Sterilization readiness tables (female and male).

Categories follow the WHO surgical classification used before tubal
ligation or vasectomy: A accept, C caution, D delay, S special setting.
Each form has a single track; the most restrictive satisfied rule wins.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.catalog.builders import (
    all_of,
    any_of,
    between,
    choice,
    compare,
    equals,
    numeric,
    when,
    yes_no,
)
from src.catalog.derived import DerivedFact, body_mass_index
from src.models.enums import AnswerKind, SterilizationCategory
from src.schemas.questionnaire import AnswerValue

A = SterilizationCategory.ACCEPT.value
C = SterilizationCategory.CAUTION.value
D = SterilizationCategory.DELAY.value
S = SterilizationCategory.SPECIAL.value

PROCEDURE = "procedure"


def _finding(category: str, reason: str) -> dict[str, Any]:
    return {"track": PROCEDURE, "category": category, "reason": reason}


def _check(
    rule_id: str,
    section: str,
    predicate: dict[str, Any],
    category: str | None,
    reason: str = "",
    alerts: tuple[str, ...] = (),
) -> dict[str, Any]:
    effects = [_finding(category, reason)] if category is not None else []
    return {
        "id": rule_id,
        "section": section,
        "when": predicate,
        "effects": effects,
        "alerts": list(alerts),
    }


# ===========================================================================
# Female sterilization
# ===========================================================================

FS_WEIGHT = "fs-weight"
FS_HEIGHT = "fs-height"
FS_BMI = "fs-bmi"
FS_STI_RISK = "fs-sti-risk"
FS_COUNSELLING = ("fs-understands-permanence", "fs-alternatives-discussed", "fs-informed-consent")

FEMALE_QUESTIONS: list[dict[str, Any]] = [
    # ── Immediate delay conditions ───────────────────────────────────
    yes_no("fs-currently-pregnant", "Is the client currently pregnant?", "exclude-delay"),
    yes_no(
        "fs-unexplained-vaginal-bleeding",
        "Is there unexplained vaginal bleeding suspicious for serious disease?",
        "exclude-delay",
    ),
    yes_no(
        "fs-systemic-infection",
        "Does the client have any current systemic or severe infection?",
        "exclude-delay",
    ),
    # ── Postpartum ───────────────────────────────────────────────────
    yes_no("fs-is-postpartum", "Is the client postpartum?", "postpartum"),
    numeric(
        "fs-days-since-delivery", "Days since delivery", "postpartum", 1, 365, "days",
        integer=True, asked_when=when("fs-is-postpartum", True),
    ),
    yes_no(
        "fs-severe-preeclampsia", "Was there severe pre-eclampsia or eclampsia?", "postpartum",
        asked_when=when("fs-is-postpartum", True),
    ),
    yes_no(
        "fs-severe-postpartum-hemorrhage", "Was there severe postpartum hemorrhage?", "postpartum",
        asked_when=when("fs-is-postpartum", True),
    ),
    yes_no(
        "fs-uterine-rupture", "Was there uterine rupture?", "postpartum",
        asked_when=when("fs-is-postpartum", True),
    ),
    # ── Post-abortion ────────────────────────────────────────────────
    yes_no("fs-is-post-abortion", "Is this post-abortion?", "post-abortion"),
    yes_no(
        "fs-abortion-complications",
        "Were there any complications (sepsis, severe hemorrhage, genital tract trauma, "
        "uterine perforation, acute hematometra)?",
        "post-abortion",
        asked_when=when("fs-is-post-abortion", True),
    ),
    yes_no(
        "fs-uterine-perforation", "Was there uterine perforation?", "post-abortion",
        asked_when=when("fs-abortion-complications", True),
    ),
    yes_no(
        "fs-other-abortion-complications",
        "Was there sepsis, severe hemorrhage, genital tract trauma, or acute hematometra?",
        "post-abortion",
        asked_when=when("fs-abortion-complications", True),
    ),
    # ── Cardiovascular ───────────────────────────────────────────────
    numeric(
        "fs-bp-systolic", "Systolic blood pressure", "cardiovascular", 60, 250, "mmHg",
        integer=True,
    ),
    numeric(
        "fs-bp-diastolic", "Diastolic blood pressure", "cardiovascular", 40, 150, "mmHg",
        integer=True,
    ),
    yes_no("fs-vascular-disease", "Does the client have vascular disease?", "cardiovascular"),
    yes_no(
        "fs-ischemic-heart-disease",
        "Does the client have current ischemic heart disease?",
        "cardiovascular",
    ),
    yes_no("fs-history-of-stroke", "Does the client have a history of stroke?", "cardiovascular"),
    choice(
        "fs-valvular-disease",
        "Does the client have valvular heart disease?",
        "cardiovascular",
        ("none", "uncomplicated", "complicated"),
    ),
    # ── Thromboembolism ──────────────────────────────────────────────
    yes_no("fs-acute-dvt-pe", "Does the client have acute DVT/PE?", "thromboembolism"),
    yes_no("fs-on-anticoagulant", "Is the client on anticoagulant therapy?", "thromboembolism"),
    # ── HIV and immunology ───────────────────────────────────────────
    choice(
        "fs-hiv-status", "HIV status", "hiv-immunology",
        ("negative", "unknown", "stage-1-2", "stage-3-4"),
    ),
    yes_no("fs-has-sle", "Does the client have systemic lupus erythematosus?", "hiv-immunology"),
    yes_no(
        "fs-sle-complications",
        "Positive antiphospholipid antibodies, severe thrombocytopenia, "
        "or immunosuppressive treatment?",
        "hiv-immunology",
        asked_when=when("fs-has-sle", True),
    ),
    # ── Endocrine ────────────────────────────────────────────────────
    yes_no("fs-has-diabetes", "Does the client have diabetes?", "endocrine"),
    choice(
        "fs-diabetes-complications",
        "Are vascular complications or a duration over 20 years present?",
        "endocrine",
        ("none", "vascular", "duration-over-20"),
        asked_when=when("fs-has-diabetes", True),
    ),
    choice(
        "fs-thyroid-disorder", "Thyroid disorder status", "endocrine",
        ("none", "hyperthyroid", "hypothyroid", "simple-goitre"),
    ),
    # ── Haematology ──────────────────────────────────────────────────
    numeric("fs-haemoglobin", "Haemoglobin level", "haematology", 3, 20, "g/dL"),
    yes_no("fs-coagulation-disorder", "Does the client have a coagulation disorder?", "haematology"),
    # ── Respiratory ──────────────────────────────────────────────────
    yes_no(
        "fs-acute-respiratory", "Does the client have acute bronchitis or pneumonia?", "respiratory"
    ),
    yes_no(
        "fs-chronic-lung-disease", "Does the client have chronic severe lung disease?", "respiratory"
    ),
    # ── Gynecologic and surgical factors ─────────────────────────────
    yes_no(
        "fs-gynecologic-cancer",
        "Does the client have current cervical, endometrial, or ovarian cancer awaiting treatment?",
        "gynecologic",
    ),
    yes_no("fs-endometriosis", "Does the client have endometriosis?", "gynecologic"),
    yes_no(
        "fs-previous-abdominal-surgery",
        "Has the client had previous abdominal or pelvic surgery?",
        "gynecologic",
    ),
    numeric(FS_WEIGHT, "Weight", "gynecologic", 20, 300, "kg"),
    numeric(FS_HEIGHT, "Height", "gynecologic", 100, 250, "cm"),
    yes_no(
        "fs-fixed-uterus",
        "Does the client have a fixed uterus due to surgery or infection?",
        "gynecologic",
    ),
    # ── STI risk and counselling ─────────────────────────────────────
    yes_no(FS_STI_RISK, "Is the client at risk for STI/HIV?", "sti-risk"),
    yes_no(
        "fs-understands-permanence",
        "Does the client understand the permanence of sterilization?",
        "counselling",
    ),
    yes_no(
        "fs-alternatives-discussed",
        "Have alternative contraceptive methods been discussed?",
        "counselling",
    ),
    yes_no("fs-informed-consent", "Has informed consent been documented?", "counselling"),
]


def _fs_bmi(values: Mapping[str, AnswerValue]) -> float:
    return body_mass_index(float(values[FS_WEIGHT]), float(values[FS_HEIGHT]))


FEMALE_DERIVED: dict[str, DerivedFact] = {
    FS_BMI: DerivedFact(
        name=FS_BMI,
        kind=AnswerKind.NUMERIC,
        inputs=(FS_WEIGHT, FS_HEIGHT),
        compute=_fs_bmi,
    ),
}

_POSTPARTUM = equals("fs-is-postpartum")
_POST_ABORTION = equals("fs-is-post-abortion")
_SEVERE_BP = any_of(compare("fs-bp-systolic", "ge", 160), compare("fs-bp-diastolic", "ge", 100))
_BP_QUOTE = "(BP: {fs-bp-systolic}/{fs-bp-diastolic} mmHg)"

FEMALE_RULES: list[dict[str, Any]] = [
    # ── Immediate delay conditions ───────────────────────────────────
    _check("pregnant", "exclude-delay", equals("fs-currently-pregnant"), D, "Currently pregnant"),
    _check(
        "unexplained-bleeding", "exclude-delay", equals("fs-unexplained-vaginal-bleeding"), D,
        "Unexplained vaginal bleeding suspicious for serious disease",
    ),
    _check(
        "systemic-infection", "exclude-delay", equals("fs-systemic-infection"), D,
        "Current systemic or severe infection",
    ),
    # ── Postpartum ───────────────────────────────────────────────────
    _check(
        "postpartum-under-7d", "postpartum",
        all_of(_POSTPARTUM, compare("fs-days-since-delivery", "lt", 7)), A,
        "Postpartum <7 days (acceptable timing)",
    ),
    _check(
        "postpartum-7-41d", "postpartum",
        all_of(_POSTPARTUM, between("fs-days-since-delivery", 7, 41)), D,
        "Postpartum 7-41 days (delay until 42 days)",
    ),
    _check(
        "postpartum-42d-plus", "postpartum",
        all_of(_POSTPARTUM, compare("fs-days-since-delivery", "ge", 42)), A,
        "Postpartum ≥42 days (acceptable timing)",
    ),
    _check(
        "severe-preeclampsia", "postpartum",
        all_of(_POSTPARTUM, equals("fs-severe-preeclampsia")), D,
        "Severe pre-eclampsia/eclampsia",
    ),
    _check(
        "postpartum-hemorrhage", "postpartum",
        all_of(_POSTPARTUM, equals("fs-severe-postpartum-hemorrhage")), D,
        "Severe postpartum hemorrhage",
    ),
    _check(
        "uterine-rupture", "postpartum",
        all_of(_POSTPARTUM, equals("fs-uterine-rupture")), S,
        "Uterine rupture (requires specialist referral)",
    ),
    # ── Post-abortion ────────────────────────────────────────────────
    _check(
        "post-abortion-uncomplicated", "post-abortion",
        all_of(_POST_ABORTION, equals("fs-abortion-complications", False)), A,
        "Post-abortion without complications",
    ),
    _check(
        "post-abortion-perforation", "post-abortion",
        all_of(_POST_ABORTION, equals("fs-uterine-perforation")), S,
        "Post-abortion uterine perforation (requires specialist referral)",
    ),
    _check(
        "post-abortion-complications", "post-abortion",
        all_of(_POST_ABORTION, equals("fs-other-abortion-complications")), D,
        "Post-abortion complications (sepsis, hemorrhage, genital tract trauma, or hematometra)",
    ),
    # ── Cardiovascular ───────────────────────────────────────────────
    _check(
        "hypertension-severe", "cardiovascular", _SEVERE_BP, S,
        f"Severe hypertension {_BP_QUOTE}",
    ),
    _check(
        "hypertension-moderate", "cardiovascular",
        any_of(between("fs-bp-systolic", 140, 159), between("fs-bp-diastolic", 90, 99)), C,
        f"Moderate hypertension {_BP_QUOTE}",
    ),
    _check(
        "vascular-disease", "cardiovascular", equals("fs-vascular-disease"), S,
        "Vascular disease (requires specialist referral)",
    ),
    _check(
        "ischemic-heart-disease", "cardiovascular", equals("fs-ischemic-heart-disease"), D,
        "Current ischemic heart disease",
    ),
    _check("stroke-history", "cardiovascular", equals("fs-history-of-stroke"), C, "History of stroke"),
    _check(
        "valvular-complicated", "cardiovascular", equals("fs-valvular-disease", "complicated"), S,
        "Complicated valvular disease (requires specialist referral)",
    ),
    _check(
        "valvular-uncomplicated", "cardiovascular",
        equals("fs-valvular-disease", "uncomplicated"), C,
        "Uncomplicated valvular disease",
    ),
    # ── Thromboembolism ──────────────────────────────────────────────
    _check("acute-dvt-pe", "thromboembolism", equals("fs-acute-dvt-pe"), D, "Acute DVT/PE"),
    _check(
        "anticoagulant", "thromboembolism", equals("fs-on-anticoagulant"), S,
        "On anticoagulant therapy (requires specialist referral)",
    ),
    # ── HIV and immunology ───────────────────────────────────────────
    _check("hiv-stage-1-2", "hiv-immunology", equals("fs-hiv-status", "stage-1-2"), A, "HIV stage 1-2"),
    _check(
        "hiv-stage-3-4", "hiv-immunology", equals("fs-hiv-status", "stage-3-4"), S,
        "HIV stage 3-4 (requires specialist referral)",
    ),
    _check(
        "sle-complicated", "hiv-immunology",
        all_of(equals("fs-has-sle"), equals("fs-sle-complications")), S,
        "SLE with complications (requires specialist referral)",
    ),
    _check(
        "sle-uncomplicated", "hiv-immunology",
        all_of(equals("fs-has-sle"), equals("fs-sle-complications", False)), C,
        "SLE without complications",
    ),
    # ── Endocrine ────────────────────────────────────────────────────
    _check(
        "diabetes-complicated", "endocrine",
        all_of(
            equals("fs-has-diabetes"),
            compare("fs-diabetes-complications", "in", ["vascular", "duration-over-20"]),
        ),
        S,
        "Diabetes with vascular complications or >20 years duration",
    ),
    _check(
        "diabetes-uncomplicated", "endocrine",
        all_of(equals("fs-has-diabetes"), equals("fs-diabetes-complications", "none")), C,
        "Diabetes without complications",
    ),
    _check(
        "hyperthyroid", "endocrine", equals("fs-thyroid-disorder", "hyperthyroid"), S,
        "Hyperthyroid disorder (requires specialist referral)",
    ),
    _check(
        "hypothyroid", "endocrine", equals("fs-thyroid-disorder", "hypothyroid"), C,
        "Hypothyroid disorder",
    ),
    _check("simple-goitre", "endocrine", equals("fs-thyroid-disorder", "simple-goitre"), A, "Simple goitre"),
    # ── Haematology ──────────────────────────────────────────────────
    _check(
        "anaemia-severe", "haematology", compare("fs-haemoglobin", "lt", 7), D,
        "Severe anaemia (Hb: {fs-haemoglobin:g} g/dL)",
    ),
    _check(
        "anaemia-moderate", "haematology",
        all_of(compare("fs-haemoglobin", "ge", 7), compare("fs-haemoglobin", "lt", 10)), C,
        "Moderate anaemia (Hb: {fs-haemoglobin:g} g/dL)",
    ),
    _check(
        "coagulation-disorder", "haematology", equals("fs-coagulation-disorder"), S,
        "Coagulation disorder (requires specialist referral)",
    ),
    # ── Respiratory ──────────────────────────────────────────────────
    _check(
        "acute-respiratory", "respiratory", equals("fs-acute-respiratory"), D,
        "Acute bronchitis or pneumonia",
    ),
    _check(
        "chronic-lung-disease", "respiratory", equals("fs-chronic-lung-disease"), S,
        "Chronic severe lung disease (requires specialist referral)",
    ),
    # ── Gynecologic and surgical factors ─────────────────────────────
    _check(
        "gynecologic-cancer", "gynecologic", equals("fs-gynecologic-cancer"), D,
        "Gynecologic cancer awaiting treatment",
    ),
    _check(
        "endometriosis", "gynecologic", equals("fs-endometriosis"), S,
        "Endometriosis (requires specialist referral)",
    ),
    _check(
        "previous-surgery", "gynecologic", equals("fs-previous-abdominal-surgery"), C,
        "Previous abdominal or pelvic surgery",
    ),
    _check("obesity", "gynecologic", compare(FS_BMI, "ge", 30), C, "BMI ≥30 ({fs-bmi:.1f})"),
    _check(
        "fixed-uterus", "gynecologic", equals("fs-fixed-uterus"), S,
        "Fixed uterus due to surgery or infection (requires specialist referral)",
    ),
    # ── STI risk ─────────────────────────────────────────────────────
    _check(
        "sti-risk", "sti-risk", equals(FS_STI_RISK), None,
        alerts=(
            "Sterilization does NOT protect against STIs or HIV. "
            "Recommend consistent condom use.",
        ),
    ),
]

FEMALE_LABELS: dict[SterilizationCategory, str] = {
    SterilizationCategory.ACCEPT: "Accept - Proceed",
    SterilizationCategory.CAUTION: "Caution - Proceed with precautions",
    SterilizationCategory.DELAY: "Delay - Temporary method recommended until condition resolved",
    SterilizationCategory.SPECIAL: "Special - Refer to experienced surgeon and higher-level facility",
}

FEMALE_ACTIONS: dict[SterilizationCategory, str] = {
    SterilizationCategory.ACCEPT: "Proceed with standard sterilization procedure and counselling.",
    SterilizationCategory.CAUTION: "Proceed with enhanced precautions and specialized counselling.",
    SterilizationCategory.DELAY: (
        "Delay procedure. Treat underlying condition and provide temporary contraception."
    ),
    SterilizationCategory.SPECIAL: (
        "Refer to higher-level facility with experienced surgeon, general anesthesia "
        "capability, and full surgical backup."
    ),
}

FEMALE_EXPLANATIONS: dict[SterilizationCategory, str] = {
    SterilizationCategory.ACCEPT: (
        "No significant restrictions identified. Client is eligible for female sterilization "
        "with standard procedure and counselling."
    ),
    SterilizationCategory.CAUTION: (
        "One or more caution conditions present. Client may proceed with enhanced precautions "
        "and specialized counselling."
    ),
    SterilizationCategory.DELAY: (
        "Conditions present that require delaying the procedure. The underlying condition "
        "should be treated first. Provide temporary contraception until resolved."
    ),
    SterilizationCategory.SPECIAL: (
        "Conditions present that require referral to a higher-level facility with experienced "
        "surgeon, general anesthesia capability, and full surgical backup."
    ),
}


# ===========================================================================
# Male sterilization (vasectomy)
# ===========================================================================

MS_WANTS_PERMANENT = "ms-desires-permanent-contraception"
_INFECTION_TYPES = ("scrotal-skin", "active-sti", "balanitis", "epididymitis", "orchitis")

MALE_QUESTIONS: list[dict[str, Any]] = [
    # ── Reproductive intent ──────────────────────────────────────────
    yes_no(MS_WANTS_PERMANENT, "Does the client desire permanent contraception?", "reproductive-intent"),
    # ── Personal characteristics ─────────────────────────────────────
    numeric("ms-age", "Age", "personal", 18, 70, "years", integer=True),
    yes_no("ms-depressive-disorder", "Does the client have a diagnosed depressive disorder?", "personal"),
    # ── HIV ──────────────────────────────────────────────────────────
    yes_no("ms-hiv-positive", "Is the client known HIV positive?", "hiv"),
    choice(
        "ms-who-hiv-stage", "WHO HIV clinical stage", "hiv",
        ("stage-1", "stage-2", "stage-3", "stage-4"),
        asked_when=when("ms-hiv-positive", True),
    ),
    # ── Endocrine ────────────────────────────────────────────────────
    yes_no("ms-has-diabetes", "Does the client have diabetes mellitus?", "endocrine"),
    yes_no(
        "ms-diabetes-controlled", "Is blood glucose well controlled?", "endocrine",
        asked_when=when("ms-has-diabetes", True),
    ),
    # ── Anaemia ──────────────────────────────────────────────────────
    yes_no("ms-sickle-cell-disease", "Does the client have sickle cell disease?", "anaemia"),
    # ── Local genital conditions ─────────────────────────────────────
    yes_no("ms-local-infection", "Is there any local scrotal or genital infection?", "genital"),
    choice(
        "ms-infection-type", "Type of infection", "genital",
        _INFECTION_TYPES,
        asked_when=when("ms-local-infection", True),
    ),
    # ── Systemic conditions ──────────────────────────────────────────
    yes_no(
        "ms-systemic-infection", "Does the client have systemic infection or gastroenteritis?", "systemic"
    ),
    yes_no("ms-coagulation-disorder", "Does the client have a coagulation disorder?", "systemic"),
    # ── Scrotal structural conditions ────────────────────────────────
    yes_no("ms-previous-scrotal-injury", "Previous scrotal injury?", "scrotal"),
    yes_no("ms-large-varicocele", "Large varicocele?", "scrotal"),
    yes_no("ms-large-hydrocele", "Large hydrocele?", "scrotal"),
    yes_no("ms-filariasis", "Filariasis (elephantiasis)?", "scrotal"),
    yes_no("ms-intrascrotal-mass", "Intrascrotal mass?", "scrotal"),
    yes_no("ms-cryptorchidism", "Cryptorchidism (undescended testicle)?", "scrotal"),
    yes_no("ms-inguinal-hernia", "Inguinal hernia?", "scrotal"),
]

MALE_RULES: list[dict[str, Any]] = [
    # ── Personal characteristics ─────────────────────────────────────
    _check(
        "young-age", "personal", compare("ms-age", "lt", 30), C, "Young age ({ms-age} years)",
        alerts=("Young men should be counselled regarding permanence and possibility of regret.",),
    ),
    _check(
        "depressive-disorder", "personal", equals("ms-depressive-disorder"), C,
        "Diagnosed depressive disorder",
        alerts=("Additional counselling recommended for mental health considerations.",),
    ),
    # ── HIV ──────────────────────────────────────────────────────────
    _check(
        "hiv-stage-1-2", "hiv",
        all_of(equals("ms-hiv-positive"), compare("ms-who-hiv-stage", "in", ["stage-1", "stage-2"])),
        A,
        "HIV stage 1-2 (acceptable)",
    ),
    _check(
        "hiv-stage-3-4", "hiv",
        all_of(equals("ms-hiv-positive"), compare("ms-who-hiv-stage", "in", ["stage-3", "stage-4"])),
        S,
        "HIV stage 3-4 (special setting required)",
    ),
    # ── Endocrine ────────────────────────────────────────────────────
    _check(
        "diabetes-controlled", "endocrine",
        all_of(equals("ms-has-diabetes"), equals("ms-diabetes-controlled")), C,
        "Diabetes mellitus (controlled)",
    ),
    _check(
        "diabetes-uncontrolled", "endocrine",
        all_of(equals("ms-has-diabetes"), equals("ms-diabetes-controlled", False)), C,
        "Diabetes mellitus (uncontrolled)",
        alerts=("Recommend referral for glucose optimization before procedure.",),
    ),
    # ── Anaemia ──────────────────────────────────────────────────────
    _check(
        "sickle-cell", "anaemia", equals("ms-sickle-cell-disease"), A,
        "Sickle cell disease (acceptable)",
    ),
    # ── Local genital conditions ─────────────────────────────────────
    _check(
        "local-infection", "genital",
        all_of(equals("ms-local-infection"), compare("ms-infection-type", "in", list(_INFECTION_TYPES))), D,
        "Local genital infection ({ms-infection-type})",
        alerts=("Delay procedure until infection treated.", "Provide temporary contraception."),
    ),
    # ── Systemic conditions ──────────────────────────────────────────
    _check(
        "systemic-infection", "systemic", equals("ms-systemic-infection"), D,
        "Systemic infection or gastroenteritis",
    ),
    _check(
        "coagulation-disorder", "systemic", equals("ms-coagulation-disorder"), S,
        "Coagulation disorder (special setting required)",
    ),
    # ── Scrotal structural conditions ────────────────────────────────
    _check("scrotal-injury", "scrotal", equals("ms-previous-scrotal-injury"), C, "Previous scrotal injury"),
    _check("large-varicocele", "scrotal", equals("ms-large-varicocele"), C, "Large varicocele"),
    _check("large-hydrocele", "scrotal", equals("ms-large-hydrocele"), C, "Large hydrocele"),
    _check("filariasis", "scrotal", equals("ms-filariasis"), D, "Filariasis (elephantiasis)"),
    _check("intrascrotal-mass", "scrotal", equals("ms-intrascrotal-mass"), D, "Intrascrotal mass"),
    _check(
        "cryptorchidism", "scrotal", equals("ms-cryptorchidism"), S,
        "Cryptorchidism (special setting required)",
    ),
    _check(
        "inguinal-hernia", "scrotal", equals("ms-inguinal-hernia"), S,
        "Inguinal hernia (special setting required)",
    ),
]

MALE_LABELS: dict[SterilizationCategory, str] = {
    SterilizationCategory.ACCEPT: "Accept - Procedure can proceed",
    SterilizationCategory.CAUTION: "Caution - Special counselling required",
    SterilizationCategory.DELAY: "Delay - Treat condition first, provide temporary contraception",
    SterilizationCategory.SPECIAL: "Special Setting - Referral to higher-level facility required",
}

MALE_ACTIONS: dict[SterilizationCategory, str] = {
    SterilizationCategory.ACCEPT: (
        "Proceed with standard vasectomy protocol and pre-operative counselling."
    ),
    SterilizationCategory.CAUTION: (
        "Procedure can proceed with caution. Enhanced counselling required before proceeding."
    ),
    SterilizationCategory.DELAY: (
        "Delay procedure until condition resolved. Treat underlying condition first and "
        "provide a temporary contraception method."
    ),
    SterilizationCategory.SPECIAL: (
        "Refer to higher-level facility with experienced surgeon, advanced surgical "
        "capabilities, full anesthesia support, and emergency backup."
    ),
}

MALE_EXPLANATIONS: dict[SterilizationCategory, str] = {
    SterilizationCategory.ACCEPT: (
        "No significant restrictions identified. Client is eligible for male sterilization "
        "(vasectomy) with standard procedure."
    ),
    SterilizationCategory.CAUTION: (
        "One or more caution conditions present. Client may proceed with enhanced counselling "
        "and special considerations."
    ),
    SterilizationCategory.DELAY: (
        "Conditions present that require delaying the procedure. The underlying condition "
        "should be treated first, and temporary contraception should be provided."
    ),
    SterilizationCategory.SPECIAL: (
        "Conditions present that require referral to a higher-level facility with specialized "
        "capabilities and experienced surgical team."
    ),
}

MALE_MANDATORY_ALERTS = (
    "Sterilization is permanent",
    "Discuss alternative long-acting reversible methods",
)
MALE_STI_ADVISORY = (
    "Sterilization does NOT protect against STIs/HIV. "
    "Recommend consistent condom use if STI risk present."
)
