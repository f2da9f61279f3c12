"""WHO MEC rule tables.

Each entry is one rule as authored: a predicate over answers (or derived
facts such as `bmi`) and the category it assigns to one or more methods.
Registration order matters: when two satisfied rules assign the same
category to a method, the earlier one is reported as the deciding rule.
"""

from __future__ import annotations

from src.catalog.builders import Node, all_of, any_of, between, compare, equals
from src.catalog.derived import BMI, IRREGULAR_PERIODS
from src.catalog.methods import (
    CALENDAR,
    CIC,
    COC,
    COMBINED,
    CU_IUD,
    DIAPHRAGM,
    DMPA,
    FEMALE_CONDOM,
    FEMALE_STERILIZATION,
    FERTILITY_AWARENESS,
    HORMONAL,
    IMPLANT,
    IUDS,
    LNG_IUD,
    MALE_CONDOM,
    PATCH,
    POP,
    PROGESTIN_ONLY,
    RING,
    STERILIZATION,
)
from src.catalog.questions import AGE, DAYS_SINCE_BIRTH


# ── Authoring helpers ──────────────────────────────────────────────────────


def _effect(methods: tuple[str, ...] | list[str], category: int, reason: str) -> Node:
    return {"methods": list(methods), "category": category, "reason": reason}


def _rule(rule_id: str, section: str, when: Node, *effects: Node, description: str = "") -> Node:
    return {
        "id": rule_id,
        "section": section,
        "description": description,
        "when": when,
        "effects": list(effects),
    }


# Progestin-only methods plus the hormonal IUD
_PROGESTIN_AND_LNG = (*PROGESTIN_ONLY, LNG_IUD)
_PROGESTIN_NO_DMPA = (POP, IMPLANT, LNG_IUD)

_BREASTFEEDING = all_of(equals("birth-past-2y"), equals("breastfeeding"))
_NOT_BREASTFEEDING = all_of(equals("birth-past-2y"), equals("breastfeeding", False))
_MIGRAINE_NO_AURA = all_of(
    equals("has-headaches"), equals("migraine-like"), equals("migraine-aura", False)
)
_SLE_CLINICAL = all_of(equals("has-sle"), equals("sle-diagnosis", "clinical"))
_BREAST_CANCER = all_of(
    equals("breast-swelling"), equals("breast-diagnosed"), equals("breast-diagnosis", "cancer")
)
_GALLBLADDER_SYMPTOMATIC = all_of(equals("gallbladder-disease"), equals("gallbladder-symptomatic"))
_GALLBLADDER_TREATED = all_of(_GALLBLADDER_SYMPTOMATIC, equals("gallbladder-treated"))
_BENIGN_LIVER_TUMOR = all_of(equals("liver-tumor"), equals("liver-tumor-type", "benign"))


# ── Section 1: Menstrual history ───────────────────────────────────────────

_MENSTRUAL = "menstrual-history"

SECTION1_MENSTRUAL_RULES: list[Node] = [
    _rule(
        "age-under-18-dmpa", _MENSTRUAL,
        compare(AGE, "lt", 18),
        _effect([DMPA], 2, "Age <18: DMPA may affect bone density in adolescents"),
    ),
    _rule(
        "age-under-20-iud", _MENSTRUAL,
        compare(AGE, "lt", 20),
        _effect(IUDS, 2, "Age <20: IUDs have greater risk in nulliparous adolescents"),
    ),
    _rule(
        "age-20-38-sterilization", _MENSTRUAL,
        between(AGE, 20, 38),
        _effect(STERILIZATION, 3, "Age 20-38: Possible regret with permanent sterilization"),
    ),
    _rule(
        "age-over-39-combined", _MENSTRUAL,
        compare(AGE, "gt", 39),
        _effect(COMBINED, 2, "Age >39: Combined hormonal methods have increased cardiovascular risk"),
    ),
    _rule(
        "age-over-45-dmpa", _MENSTRUAL,
        compare(AGE, "gt", 45),
        _effect([DMPA], 2, "Age >45: DMPA may accelerate bone loss"),
    ),
    _rule(
        "prolonged-or-hmb", _MENSTRUAL,
        any_of(compare("bleeding-days", "gt", 8), equals("heavy-menstrual-bleeding")),
        _effect(
            [POP, DMPA, IMPLANT, CU_IUD], 2,
            "Prolonged bleeding or HMB: Progestin-only and IUDs may have different bleeding patterns",
        ),
    ),
    _rule(
        "irregular-periods", _MENSTRUAL,
        equals(IRREGULAR_PERIODS),
        _effect(PROGESTIN_ONLY, 2, "Irregular periods: Progestin-only methods may cause irregular bleeding"),
        _effect([CALENDAR], 3, "Irregular periods: Calendar-based fertile window is unreliable"),
        description="Cycle lengths varying by more than 7 days",
    ),
    _rule(
        "unexplained-bleeding-2", _MENSTRUAL,
        equals("unexplained-vaginal-bleeding"),
        _effect(
            [COC, CIC, POP, PATCH, RING], 2,
            "Unexplained vaginal bleeding: Combined/progestin methods may mask pathology",
        ),
    ),
    _rule(
        "unexplained-bleeding-3", _MENSTRUAL,
        equals("unexplained-vaginal-bleeding"),
        _effect([DMPA, IMPLANT], 3, "Unexplained vaginal bleeding: DMPA/implant may mask pathology"),
        _effect(
            FERTILITY_AWARENESS, 3,
            "Unexplained vaginal bleeding: Cycle tracking is unreliable until the cause is known",
        ),
    ),
    _rule(
        "unexplained-bleeding-4", _MENSTRUAL,
        equals("unexplained-vaginal-bleeding"),
        _effect(IUDS, 4, "Unexplained vaginal bleeding: IUDs contraindicated until cause established"),
    ),
    _rule(
        "endometriosis-copper-iud", _MENSTRUAL,
        equals("painful-menses-endometriosis"),
        _effect([CU_IUD], 2, "Endometriosis/painful menses: Copper IUD may worsen symptoms"),
    ),
    _rule(
        "latex-allergy", _MENSTRUAL,
        equals("latex-allergy"),
        _effect([MALE_CONDOM, FEMALE_CONDOM], 3, "Latex allergy: Male and female condoms contain latex"),
    ),
]


# ── Section 2: Pregnancy history ───────────────────────────────────────────

_PREGNANCY = "pregnancy-history"

SECTION2_PREGNANCY_RULES: list[Node] = [
    _rule(
        "never-pregnant-iud", _PREGNANCY,
        equals("ever-pregnant", False),
        _effect(IUDS, 2, "Never pregnant: IUD insertion may be more difficult in nulliparous women"),
    ),
    _rule(
        "breastfeeding-less-than-2-days", _PREGNANCY,
        all_of(_BREASTFEEDING, compare(DAYS_SINCE_BIRTH, "lt", 2)),
        _effect([LNG_IUD], 2, "Breastfeeding <2 days postpartum: LNG IUD caution"),
    ),
    _rule(
        "breastfeeding-2d-4w", _PREGNANCY,
        all_of(_BREASTFEEDING, between(DAYS_SINCE_BIRTH, 2, 28)),
        _effect(COMBINED, 4, "Breastfeeding 2 days-4 weeks: Combined hormonal methods reduce milk supply"),
        _effect(PROGESTIN_ONLY, 2, "Breastfeeding 2 days-4 weeks: Progestin-only methods acceptable"),
        _effect(IUDS, 3, "Breastfeeding 2 days-4 weeks: IUD insertion risk of perforation"),
    ),
    _rule(
        "breastfeeding-4w-6w", _PREGNANCY,
        all_of(_BREASTFEEDING, between(DAYS_SINCE_BIRTH, 28, 42)),
        _effect(COMBINED, 4, "Breastfeeding 4-6 weeks: Combined hormonal methods reduce milk supply"),
        _effect(PROGESTIN_ONLY, 2, "Breastfeeding 4-6 weeks: Progestin-only methods acceptable"),
        _effect([FEMALE_STERILIZATION], 4, "Breastfeeding 4-6 weeks: Female sterilization risk"),
    ),
    _rule(
        "breastfeeding-6w-6m", _PREGNANCY,
        all_of(_BREASTFEEDING, between(DAYS_SINCE_BIRTH, 42, 182)),
        _effect(
            COMBINED, 3,
            "Breastfeeding 6 weeks-6 months: Combined hormonal methods may reduce milk supply",
        ),
    ),
    _rule(
        "breastfeeding-over-6m", _PREGNANCY,
        all_of(_BREASTFEEDING, compare(DAYS_SINCE_BIRTH, "gt", 182)),
        _effect(COMBINED, 2, "Breastfeeding >6 months: Combined hormonal methods generally acceptable"),
    ),
    _rule(
        "not-breastfeeding-less-21d", _PREGNANCY,
        all_of(_NOT_BREASTFEEDING, compare(DAYS_SINCE_BIRTH, "lt", 21)),
        _effect(COMBINED, 3, "Postpartum <21 days: Combined hormonal methods increase VTE risk"),
    ),
    _rule(
        "not-breastfeeding-less-21d-risk", _PREGNANCY,
        all_of(
            _NOT_BREASTFEEDING,
            compare(DAYS_SINCE_BIRTH, "lt", 21),
            equals("postpartum-risk-factors"),
        ),
        _effect(
            COMBINED, 4,
            "Postpartum <21 days with risk factors: Combined hormonal methods increase VTE risk",
        ),
    ),
    _rule(
        "not-breastfeeding-21-42d-risk", _PREGNANCY,
        all_of(
            _NOT_BREASTFEEDING,
            between(DAYS_SINCE_BIRTH, 21, 42),
            equals("postpartum-risk-factors"),
        ),
        _effect(
            COMBINED, 3,
            "Postpartum 21-42 days with risk factors: Combined hormonal methods caution",
        ),
    ),
    _rule(
        "not-breastfeeding-21-42d-no-risk", _PREGNANCY,
        all_of(
            _NOT_BREASTFEEDING,
            between(DAYS_SINCE_BIRTH, 21, 42),
            equals("postpartum-risk-factors", False),
        ),
        _effect(COMBINED, 2, "Postpartum 21-42 days: Combined hormonal methods generally acceptable"),
    ),
    _rule(
        "postpartum-fertility-awareness-delay", _PREGNANCY,
        any_of(
            all_of(_BREASTFEEDING, compare(DAYS_SINCE_BIRTH, "lt", 42)),
            all_of(_NOT_BREASTFEEDING, compare(DAYS_SINCE_BIRTH, "lt", 28)),
        ),
        _effect(
            FERTILITY_AWARENESS, 4,
            "Recent childbirth: Delay fertility-awareness methods until regular cycles return",
        ),
    ),
    _rule(
        "postpartum-calendar-caution", _PREGNANCY,
        all_of(equals("birth-past-2y"), compare(DAYS_SINCE_BIRTH, "le", 182)),
        _effect(
            [CALENDAR], 3,
            "Within 6 months of childbirth: Cycle lengths are not yet predictable",
        ),
    ),
    _rule(
        "septic-abortion", _PREGNANCY,
        equals("septic-abortion"),
        _effect(IUDS, 4, "Septic abortion: IUD contraindicated until infection resolved"),
    ),
    _rule(
        "abortion-13-26-weeks", _PREGNANCY,
        all_of(equals("septic-abortion", False), between("abortion-week", 13, 26)),
        _effect(IUDS, 2, "Second trimester abortion: IUD insertion caution"),
    ),
    _rule(
        "ectopic-pregnancy", _PREGNANCY,
        equals("had-ectopic"),
        _effect([POP], 2, "Ectopic pregnancy history: POP may have reduced efficacy"),
    ),
]


# ── Section 3: Cardiovascular risk factors ─────────────────────────────────

_CVS = "cvs-risk-factors"

SECTION3_CVS_RULES: list[Node] = [
    _rule(
        "bmi-over-29-age-under-18", _CVS,
        all_of(compare(BMI, "gt", 29), compare(AGE, "lt", 18)),
        _effect([COC, CIC, RING, DMPA], 2, "BMI >29 and age <18: Hormonal methods may affect weight and bone"),
    ),
    _rule(
        "bmi-over-29-age-over-17", _CVS,
        all_of(compare(BMI, "gt", 29), compare(AGE, "gt", 17)),
        _effect([COC, CIC, RING], 2, "BMI >29: Combined hormonal methods may have reduced efficacy"),
    ),
    _rule(
        "smoking-age-over-34-less-15", _CVS,
        all_of(equals("smokes"), compare(AGE, "gt", 34), compare("cigarettes-per-day", "lt", 15)),
        _effect([COC, CIC, PATCH], 3, "Smoking >34 years: Combined hormonal methods increase cardiovascular risk"),
        _effect([RING], 2, "Smoking >34 years: Vaginal ring caution"),
    ),
    _rule(
        "smoking-age-over-34-more-14", _CVS,
        all_of(equals("smokes"), compare(AGE, "gt", 34), compare("cigarettes-per-day", "ge", 15)),
        _effect([COC, CIC, PATCH], 4, "Heavy smoking >34 years: Combined hormonal methods contraindicated"),
        _effect([RING], 3, "Heavy smoking >34 years: Vaginal ring not recommended"),
    ),
    _rule(
        "smoking-age-under-35", _CVS,
        all_of(equals("smokes"), compare(AGE, "lt", 35)),
        _effect(COMBINED, 2, "Smoking <35 years: Combined hormonal methods caution"),
    ),
    _rule(
        "hypertension-bp-unknown", _CVS,
        all_of(equals("has-hypertension"), equals("knows-bp", False)),
        _effect([COC, CIC, PATCH], 3, "Hypertension, BP unknown: Combined hormonal methods increase stroke risk"),
        _effect(_PROGESTIN_AND_LNG, 2, "Hypertension, BP unknown: Progestin methods generally acceptable"),
        _effect([RING], 3, "Hypertension, BP unknown: Vaginal ring caution"),
    ),
    _rule(
        "hypertension-stage1", _CVS,
        all_of(
            equals("has-hypertension"),
            any_of(between("systolic-bp", 140, 159), between("diastolic-bp", 90, 99)),
        ),
        _effect([COC, CIC, RING], 3, "Stage 1 hypertension: Combined hormonal methods increase cardiovascular risk"),
        _effect([DMPA], 2, "Stage 1 hypertension: DMPA may affect blood pressure"),
    ),
    _rule(
        "hypertension-stage2", _CVS,
        all_of(
            equals("has-hypertension"),
            any_of(compare("systolic-bp", "gt", 159), compare("diastolic-bp", "gt", 99)),
        ),
        _effect([COC, CIC, RING], 4, "Stage 2 hypertension: Combined hormonal methods contraindicated"),
        _effect(_PROGESTIN_NO_DMPA, 2, "Stage 2 hypertension: Progestin methods generally acceptable"),
        _effect([DMPA], 3, "Stage 2 hypertension: DMPA may worsen hypertension"),
    ),
    _rule(
        "hypertension-pregnancy-history", _CVS,
        all_of(
            equals("has-hypertension"),
            equals("hypertension-during-pregnancy"),
            compare("systolic-bp", "lt", 140),
            compare("diastolic-bp", "lt", 90),
        ),
        _effect(COMBINED, 2, "History of hypertension during pregnancy: Combined methods caution"),
        description="Controlled blood pressure after hypertension in pregnancy",
    ),
    _rule(
        "diabetes-more-than-20y", _CVS,
        all_of(equals("has-diabetes"), equals("diabetes-duration", "more-than-20")),
        _effect(COMBINED, 3, "Diabetes >20 years: Combined hormonal methods increase cardiovascular risk"),
        _effect(_PROGESTIN_NO_DMPA, 2, "Diabetes >20 years: Progestin methods generally acceptable"),
        _effect([DMPA], 3, "Diabetes >20 years: DMPA may affect glucose metabolism"),
    ),
    _rule(
        "diabetes-complications", _CVS,
        all_of(
            equals("has-diabetes"),
            equals("diabetes-duration", "less-than-20"),
            equals("diabetes-complications"),
        ),
        _effect((*COMBINED, DMPA), 3, "Diabetes with complications: Hormonal methods increase risk"),
        _effect(_PROGESTIN_NO_DMPA, 2, "Diabetes with complications: Progestin-only generally acceptable"),
    ),
    _rule(
        "diabetes-less-20y-no-complications", _CVS,
        all_of(
            equals("has-diabetes"),
            equals("diabetes-duration", "less-than-20"),
            equals("diabetes-complications", False),
        ),
        _effect(HORMONAL, 2, "Diabetes <20 years: Hormonal methods generally acceptable with monitoring"),
    ),
    _rule(
        "vascular-disease", _CVS,
        equals("vascular-disease"),
        _effect(COMBINED, 4, "Vascular disease: Combined hormonal methods contraindicated"),
        _effect(_PROGESTIN_NO_DMPA, 2, "Vascular disease: Progestin methods generally acceptable"),
        _effect([DMPA], 3, "Vascular disease: DMPA caution"),
    ),
    _rule(
        "ischemic-heart-disease", _CVS,
        equals("ischemic-heart-disease"),
        _effect(COMBINED, 4, "Ischemic heart disease: Combined hormonal methods contraindicated"),
        _effect(_PROGESTIN_AND_LNG, 3, "Ischemic heart disease: Progestin methods caution"),
    ),
    _rule(
        "stroke", _CVS,
        equals("had-stroke"),
        _effect(COMBINED, 4, "Stroke history: Combined hormonal methods contraindicated"),
        _effect(PROGESTIN_ONLY, 3, "Stroke history: Progestin methods caution"),
        _effect([LNG_IUD], 2, "Stroke history: LNG IUD generally acceptable"),
    ),
    _rule(
        "dyslipidemia-abnormal", _CVS,
        all_of(
            equals("has-dyslipidemia"),
            equals("knows-lipid-profile"),
            any_of(
                compare("ldl", "gt", 200),
                compare("hdl", "lt", 50),
                compare("total-cholesterol", "gt", 200),
                compare("triglycerides", "gt", 150),
            ),
        ),
        _effect(HORMONAL, 2, "Abnormal lipid profile: Hormonal methods may affect lipids"),
    ),
    _rule(
        "dyslipidemia-unknown-profile", _CVS,
        all_of(equals("has-dyslipidemia"), equals("knows-lipid-profile", False)),
        _effect(HORMONAL, 2, "Dyslipidemia, lipid profile unknown: Hormonal methods caution"),
    ),
]


# ── Section 4: Prothrombotic conditions ────────────────────────────────────

_PROTHROMBOTIC = "prothrombotic"

SECTION4_PROTHROMBOTIC_RULES: list[Node] = [
    _rule(
        "dvt-current", _PROTHROMBOTIC,
        all_of(equals("has-dvt"), equals("dvt-current")),
        _effect(COMBINED, 4, "Current DVT: Combined hormonal methods contraindicated (VTE risk)"),
        _effect(_PROGESTIN_AND_LNG, 3, "Current DVT: Progestin methods caution"),
    ),
    _rule(
        "dvt-history", _PROTHROMBOTIC,
        all_of(equals("has-dvt"), equals("dvt-current", False)),
        _effect(COMBINED, 4, "DVT history: Combined hormonal methods contraindicated"),
        _effect(_PROGESTIN_AND_LNG, 2, "DVT history: Progestin methods generally acceptable"),
    ),
    _rule(
        "family-dvt", _PROTHROMBOTIC,
        all_of(equals("has-dvt", False), equals("family-dvt")),
        _effect(COMBINED, 2, "Family history of DVT: Combined hormonal methods caution"),
    ),
    _rule(
        "surgery-bed-rest-over-3d", _PROTHROMBOTIC,
        all_of(equals("major-surgery"), compare("bed-rest-days", "gt", 3)),
        _effect(
            COMBINED, 4,
            "Major surgery with prolonged bed rest: Combined hormonal methods increase VTE risk",
        ),
        _effect(
            _PROGESTIN_AND_LNG, 2,
            "Major surgery with prolonged bed rest: Progestin methods generally acceptable",
        ),
    ),
    _rule(
        "surgery-bed-rest-under-4d", _PROTHROMBOTIC,
        all_of(equals("major-surgery"), compare("bed-rest-days", "lt", 4)),
        _effect(COMBINED, 2, "Major surgery with brief bed rest: Combined hormonal methods caution"),
    ),
    _rule(
        "valvular-complicated", _PROTHROMBOTIC,
        all_of(equals("valvular-heart-disease"), equals("valvular-complicated")),
        _effect(
            COMBINED, 4,
            "Complicated valvular heart disease: Combined hormonal methods contraindicated",
        ),
        _effect(
            IUDS, 2,
            "Complicated valvular heart disease: IUD insertion caution (endocarditis risk)",
        ),
    ),
    _rule(
        "valvular-uncomplicated", _PROTHROMBOTIC,
        all_of(equals("valvular-heart-disease"), equals("valvular-complicated", False)),
        _effect(COMBINED, 2, "Valvular heart disease: Combined hormonal methods caution"),
    ),
    _rule(
        "sle-antiphospholipid", _PROTHROMBOTIC,
        all_of(equals("has-sle"), equals("sle-diagnosis", "antiphospholipid")),
        _effect(
            [COC, CIC, RING], 4,
            "SLE with antiphospholipid antibodies: Combined hormonal methods contraindicated",
        ),
        _effect(
            _PROGESTIN_AND_LNG, 3,
            "SLE with antiphospholipid antibodies: Progestin methods caution",
        ),
    ),
    _rule(
        "sle-thrombocytopenia", _PROTHROMBOTIC,
        all_of(_SLE_CLINICAL, equals("severe-thrombocytopenia")),
        _effect(
            [COC, CIC, POP, IMPLANT, LNG_IUD, PATCH, RING], 2,
            "SLE with thrombocytopenia: Hormonal methods caution",
        ),
        _effect(
            [DMPA, CU_IUD], 3,
            "SLE with thrombocytopenia: DMPA and IUDs increase bleeding risk",
        ),
    ),
    _rule(
        "sle-immunosuppressive", _PROTHROMBOTIC,
        all_of(_SLE_CLINICAL, equals("severe-thrombocytopenia", False), equals("immunosuppressive")),
        _effect((*HORMONAL, CU_IUD), 2, "SLE on immunosuppressive: Hormonal methods caution"),
    ),
    _rule(
        "migraine-aura", _PROTHROMBOTIC,
        all_of(equals("has-headaches"), equals("migraine-like"), equals("migraine-aura")),
        _effect(COMBINED, 4, "Migraine with aura: Combined hormonal methods contraindicated (stroke risk)"),
        _effect(_PROGESTIN_AND_LNG, 3, "Migraine with aura: Progestin methods caution"),
    ),
    _rule(
        "migraine-no-aura-age-under-35", _PROTHROMBOTIC,
        all_of(_MIGRAINE_NO_AURA, compare(AGE, "lt", 35)),
        _effect(COMBINED, 3, "Migraine without aura, age <35: Combined hormonal methods caution"),
        _effect(
            _PROGESTIN_AND_LNG, 2,
            "Migraine without aura, age <35: Progestin methods generally acceptable",
        ),
    ),
    _rule(
        "migraine-no-aura-age-over-34", _PROTHROMBOTIC,
        all_of(_MIGRAINE_NO_AURA, compare(AGE, "gt", 34)),
        _effect(
            [COC, CIC, PATCH], 4,
            "Migraine without aura, age >34: Combined hormonal methods contraindicated",
        ),
        _effect([RING], 3, "Migraine without aura, age >34: Vaginal ring caution"),
        _effect(
            _PROGESTIN_AND_LNG, 2,
            "Migraine without aura, age >34: Progestin methods generally acceptable",
        ),
    ),
    _rule(
        "headaches-not-migraine", _PROTHROMBOTIC,
        all_of(equals("has-headaches"), equals("migraine-like", False)),
        _effect(COMBINED, 2, "Regular headaches: Combined hormonal methods caution"),
    ),
]


# ── Section 5: Gynecological history ───────────────────────────────────────

_GYN = "gyn-history"

SECTION5_GYN_RULES: list[Node] = [
    _rule(
        "gtd-hcg-decreasing", _GYN,
        all_of(equals("has-gtd"), equals("hcg-trend", "decreasing")),
        _effect(IUDS, 3, "GTD with decreasing hCG: IUDs may cause perforation"),
    ),
    _rule(
        "gtd-hcg-elevated", _GYN,
        all_of(equals("has-gtd"), equals("hcg-trend", "elevated")),
        _effect(IUDS, 4, "GTD with persistently elevated hCG: IUDs contraindicated"),
    ),
    _rule(
        "breast-undiagnosed", _GYN,
        all_of(equals("breast-swelling"), equals("breast-diagnosed", False)),
        _effect(HORMONAL, 2, "Undiagnosed breast swelling: Hormonal methods caution until evaluated"),
    ),
    _rule(
        "pap-cin", _GYN,
        all_of(equals("had-pap-smear"), equals("pap-result", "cin")),
        _effect(
            (*COMBINED, DMPA, IMPLANT, LNG_IUD), 2,
            "CIN: Hormonal methods may affect cervical neoplasia progression",
        ),
    ),
    _rule(
        "pap-cervical-cancer", _GYN,
        all_of(equals("had-pap-smear"), equals("pap-result", "cancer")),
        _effect((*COMBINED, DMPA, IMPLANT, DIAPHRAGM), 2, "Cervical cancer: Hormonal methods caution"),
        _effect(IUDS, 4, "Cervical cancer: IUDs contraindicated"),
    ),
    _rule(
        "breast-cancer-current", _GYN,
        all_of(_BREAST_CANCER, equals("breast-cancer-present", "current")),
        _effect(HORMONAL, 4, "Current breast cancer: Hormonal methods contraindicated"),
    ),
    _rule(
        "breast-cancer-past", _GYN,
        all_of(_BREAST_CANCER, equals("breast-cancer-present", "past")),
        _effect(HORMONAL, 3, "Breast cancer >5 years ago: Hormonal methods caution"),
    ),
    _rule(
        "endometrial-cancer", _GYN,
        equals("endometrial-cancer"),
        _effect(IUDS, 4, "Endometrial cancer: IUDs contraindicated"),
    ),
    _rule(
        "ovarian-cancer", _GYN,
        equals("ovarian-cancer"),
        _effect(IUDS, 3, "Ovarian cancer: IUDs caution"),
    ),
    _rule(
        "fibroids-distort", _GYN,
        all_of(equals("uterine-fibroids"), equals("fibroids-distort-uterus")),
        _effect(IUDS, 4, "Fibroids distorting uterine cavity: IUDs contraindicated"),
    ),
    _rule(
        "pelvic-distorts", _GYN,
        all_of(equals("pelvic-abnormalities"), equals("pelvic-distorts-uterus")),
        _effect(IUDS, 4, "Pelvic abnormalities distorting cavity: IUDs contraindicated"),
    ),
    _rule(
        "pelvic-no-distortion", _GYN,
        all_of(equals("pelvic-abnormalities"), equals("pelvic-distorts-uterus", False)),
        _effect(IUDS, 2, "Pelvic abnormalities: IUD insertion may be more difficult"),
    ),
]


# ── Section 6: Reproductive tract infections ───────────────────────────────

_RTI = "rti"

SECTION6_RTI_RULES: list[Node] = [
    _rule(
        "pid-current", _RTI,
        all_of(equals("has-pid"), equals("pid-current")),
        _effect(IUDS, 4, "Current PID: IUDs contraindicated until infection resolved"),
    ),
    _rule(
        "pid-past-no-pregnancy", _RTI,
        all_of(equals("has-pid"), equals("pid-current", False), equals("pid-subsequent-pregnancy", False)),
        _effect(IUDS, 2, "Past PID without subsequent pregnancy: IUD insertion caution"),
    ),
    _rule(
        "sti-purulent", _RTI,
        all_of(equals("has-sti"), equals("sti-type", "purulent")),
        _effect(IUDS, 4, "Purulent cervicitis/gonorrhea/chlamydia: IUDs contraindicated until treated"),
    ),
    _rule(
        "sti-other", _RTI,
        all_of(equals("has-sti"), equals("sti-type", "other")),
        _effect(IUDS, 2, "Other STI (trichomonas, BV): IUD insertion caution"),
    ),
    _rule(
        "hiv-stage1-2", _RTI,
        all_of(equals("has-hiv"), equals("hiv-who-stage", "stage1-2")),
        _effect(IUDS, 2, "HIV Stage 1-2: IUD insertion caution"),
        _effect([DIAPHRAGM], 3, "HIV Stage 1-2: Diaphragm may increase candidiasis risk"),
    ),
    _rule(
        "hiv-stage3-4", _RTI,
        all_of(equals("has-hiv"), equals("hiv-who-stage", "stage3-4")),
        _effect((*IUDS, DIAPHRAGM), 3, "HIV Stage 3-4: IUD and diaphragm caution"),
    ),
    _rule(
        "pelvic-tb", _RTI,
        equals("pelvic-tb"),
        _effect(IUDS, 4, "Pelvic TB: IUDs contraindicated"),
    ),
]


# ── Section 7: Other comorbidities ─────────────────────────────────────────

_COMORBIDITIES = "comorbidities"

SECTION7_COMORBIDITIES_RULES: list[Node] = [
    _rule(
        "gallbladder-asymptomatic", _COMORBIDITIES,
        all_of(equals("gallbladder-disease"), equals("gallbladder-symptomatic", False)),
        _effect(HORMONAL, 2, "Gallbladder disease (asymptomatic): Hormonal methods generally acceptable"),
    ),
    _rule(
        "gallbladder-symptomatic-untreated", _COMORBIDITIES,
        all_of(_GALLBLADDER_SYMPTOMATIC, equals("gallbladder-treated", False)),
        _effect(
            COMBINED, 3,
            "Symptomatic gallbladder disease (untreated): Combined hormonal methods may worsen disease",
        ),
        _effect(
            _PROGESTIN_AND_LNG, 2,
            "Symptomatic gallbladder disease (untreated): Progestin methods generally acceptable",
        ),
    ),
    _rule(
        "gallbladder-medical", _COMORBIDITIES,
        all_of(_GALLBLADDER_TREATED, equals("gallbladder-treatment", "medical")),
        _effect(
            COMBINED, 3,
            "Gallbladder disease (medically treated): Combined hormonal methods may worsen disease",
        ),
        _effect(
            _PROGESTIN_AND_LNG, 2,
            "Gallbladder disease (medically treated): Progestin methods generally acceptable",
        ),
    ),
    _rule(
        "gallbladder-surgical", _COMORBIDITIES,
        all_of(_GALLBLADDER_TREATED, equals("gallbladder-treatment", "surgical")),
        _effect(
            HORMONAL, 2,
            "Gallbladder disease (surgically treated): Hormonal methods generally acceptable",
        ),
    ),
    _rule(
        "cholestasis", _COMORBIDITIES,
        equals("cholestasis"),
        _effect(COMBINED, 2, "Pregnancy-related cholestasis history: Combined hormonal methods caution"),
    ),
    _rule(
        "hepatitis-acute", _COMORBIDITIES,
        all_of(equals("has-hepatitis"), equals("hepatitis-type", "acute")),
        _effect(COMBINED, 3, "Acute hepatitis: Combined hormonal methods contraindicated (liver metabolism)"),
    ),
    _rule(
        "cirrhosis-decompensated", _COMORBIDITIES,
        all_of(equals("has-cirrhosis"), equals("cirrhosis-decompensated")),
        _effect(COMBINED, 4, "Decompensated cirrhosis: Combined hormonal methods contraindicated"),
        _effect(_PROGESTIN_AND_LNG, 3, "Decompensated cirrhosis: Progestin methods caution"),
    ),
    _rule(
        "liver-tumor-adenoma", _COMORBIDITIES,
        all_of(_BENIGN_LIVER_TUMOR, equals("benign-liver-tumor-type", "hepatocellular-adenoma")),
        _effect(
            [COC, PATCH, RING], 4,
            "Hepatocellular adenoma: Estrogen-containing methods contraindicated",
        ),
        _effect((CIC, *_PROGESTIN_AND_LNG), 3, "Hepatocellular adenoma: Progestin methods caution"),
    ),
    _rule(
        "liver-tumor-fnh", _COMORBIDITIES,
        all_of(_BENIGN_LIVER_TUMOR, equals("benign-liver-tumor-type", "focal-nodular-hyperplasia")),
        _effect(HORMONAL, 2, "Focal nodular hyperplasia: Hormonal methods generally acceptable"),
    ),
    _rule(
        "liver-tumor-malignant", _COMORBIDITIES,
        all_of(equals("liver-tumor"), equals("liver-tumor-type", "malignant")),
        _effect(COMBINED, 4, "Malignant liver tumor: Combined hormonal methods contraindicated"),
        _effect(_PROGESTIN_AND_LNG, 3, "Malignant liver tumor: Progestin methods caution"),
    ),
    _rule(
        "iron-deficiency-anemia", _COMORBIDITIES,
        equals("iron-deficiency-anemia"),
        _effect([CU_IUD], 2, "Iron deficiency anemia: Copper IUD may increase menstrual bleeding"),
    ),
    _rule(
        "sickle-cell", _COMORBIDITIES,
        equals("sickle-cell"),
        _effect((*COMBINED, CU_IUD), 2, "Sickle cell disease: Combined hormonal methods and copper IUD caution"),
    ),
]


# ── Section 9: Medications ─────────────────────────────────────────────────

_MEDICATION = "medication-history"


def _taking(name: str) -> Node:
    return all_of(equals("on-medications"), equals("medication", name))


SECTION9_MEDICATIONS_RULES: list[Node] = [
    _rule(
        "ritonavir", _MEDICATION,
        _taking("ritonavir"),
        _effect([DIAPHRAGM], 3, "Ritonavir: Diaphragm efficacy may be reduced"),
        _effect((*HORMONAL, CU_IUD), 2, "Ritonavir: Hormonal contraceptive efficacy may be affected"),
    ),
    _rule(
        "carbamazepine", _MEDICATION,
        _taking("carbamazepine"),
        _effect([COC, POP, PATCH, RING], 3, "Carbamazepine: Reduces efficacy of COC, POP, patch, ring"),
        _effect([CIC, IMPLANT], 2, "Carbamazepine: May reduce efficacy of injectable and implant"),
    ),
    _rule(
        "lamotrigine", _MEDICATION,
        _taking("lamotrigine"),
        _effect([COC, PATCH, RING], 3, "Lamotrigine: COC/patch/ring reduce lamotrigine levels"),
        _effect([CIC], 2, "Lamotrigine: Combined injectable may affect drug levels"),
    ),
    _rule(
        "rifampicin", _MEDICATION,
        _taking("rifampicin"),
        _effect([COC, POP, PATCH, RING], 3, "Rifampicin: Reduces efficacy of COC, POP, patch, ring"),
        _effect([CIC, IMPLANT], 2, "Rifampicin: May reduce efficacy of injectable and implant"),
    ),
]


RULE_DEFINITIONS: list[Node] = [
    *SECTION1_MENSTRUAL_RULES,
    *SECTION2_PREGNANCY_RULES,
    *SECTION3_CVS_RULES,
    *SECTION4_PROTHROMBOTIC_RULES,
    *SECTION5_GYN_RULES,
    *SECTION6_RTI_RULES,
    *SECTION7_COMORBIDITIES_RULES,
    *SECTION9_MEDICATIONS_RULES,
]
