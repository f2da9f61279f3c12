"""Questionnaire definitions for the WHO MEC eligibility questionnaire.

Questions are grouped by section in the order they are asked. A question
with `asked_when` only applies once its parent question has been answered
with the expected value.
"""

from __future__ import annotations

from typing import Any

from src.catalog.builders import numeric, when, yes_no

# Question ids referenced outside the rule tables
AGE = "age"
WEIGHT = "weight-kg"
HEIGHT = "height-cm"
AVERAGE_CYCLE_LENGTH = "average-cycle-length"
SHORTEST_CYCLE_LENGTH = "shortest-cycle-length"
LONGEST_CYCLE_LENGTH = "longest-cycle-length"
DAYS_SINCE_BIRTH = "days-since-birth"
WANTS_FUTURE_PREGNANCY = "wants-future-pregnancy"
WANTS_SURGICAL_METHOD = "wants-surgical-method"
OKAY_WITH_IRREGULAR_PERIODS = "okay-with-irregular-periods"
PREFERRED_FREQUENCY = "preferred-frequency"

FREQUENCY_OPTIONS = (
    "daily",
    "every-3-weeks",
    "monthly",
    "every-3-months",
    "every-3-years",
    "every-8-years",
)


def _lipid(qid: str, text: str, low: int, high: int) -> dict[str, Any]:
    return numeric(
        qid, text, "cvs-risk-factors", low, high, "mg/dL",
        asked_when=when("knows-lipid-profile", True),
    )


QUESTION_DEFINITIONS: list[dict[str, Any]] = [
    # ── Section 1: Menstrual history ─────────────────────────────────
    {
        "id": AGE,
        "text": "What is your age?",
        "kind": "numeric",
        "section": "menstrual-history",
        "minimum": 10,
        "maximum": 70,
        "integer": True,
        "unit": "years",
    },
    {
        "id": "bleeding-days",
        "text": "Number of bleeding days per cycle?",
        "kind": "numeric",
        "section": "menstrual-history",
        "minimum": 1,
        "maximum": 14,
        "integer": True,
        "unit": "days",
    },
    yes_no(
        "heavy-menstrual-bleeding",
        "Do you have heavy menstrual bleeding (an amount that interferes with daily life)?",
        "menstrual-history",
    ),
    yes_no(
        "unexplained-vaginal-bleeding",
        "Do you have unexplained vaginal bleeding?",
        "menstrual-history",
    ),
    yes_no(
        "painful-menses-endometriosis",
        "Do you have severely painful menses or a history of endometriosis?",
        "menstrual-history",
    ),
    yes_no("latex-allergy", "Are you allergic to latex?", "menstrual-history"),
    # ── Cycle history ────────────────────────────────────────────────
    {
        "id": AVERAGE_CYCLE_LENGTH,
        "text": "What is your average cycle length (days from one period start to the next)?",
        "kind": "numeric",
        "section": "cycle-history",
        "minimum": 15,
        "maximum": 60,
        "integer": True,
        "unit": "days",
    },
    {
        "id": SHORTEST_CYCLE_LENGTH,
        "text": "Shortest of your last 6 cycles?",
        "kind": "numeric",
        "section": "cycle-history",
        "minimum": 15,
        "maximum": 60,
        "integer": True,
        "unit": "days",
    },
    {
        "id": LONGEST_CYCLE_LENGTH,
        "text": "Longest of your last 6 cycles?",
        "kind": "numeric",
        "section": "cycle-history",
        "minimum": 15,
        "maximum": 60,
        "integer": True,
        "unit": "days",
    },
    # ── Section 2: Pregnancy history ─────────────────────────────────
    yes_no("ever-pregnant", "Have you ever been pregnant?", "pregnancy-history"),
    yes_no(
        "birth-past-2y",
        "Have you given birth in the past 2 years?",
        "pregnancy-history",
        asked_when=when("ever-pregnant", True),
    ),
    {
        "id": DAYS_SINCE_BIRTH,
        "text": "How many days ago did you give birth?",
        "kind": "numeric",
        "section": "pregnancy-history",
        "minimum": 0,
        "maximum": 730,
        "integer": True,
        "unit": "days",
        "asked_when": when("birth-past-2y", True),
    },
    yes_no(
        "breastfeeding",
        "Are you currently breastfeeding?",
        "pregnancy-history",
        asked_when=when("birth-past-2y", True),
    ),
    yes_no(
        "postpartum-risk-factors",
        "Do you have any of: previous DVT, cancer requiring treatment, heart failure, "
        "varicose veins, recent or planned surgery, being bedridden, or smoking?",
        "pregnancy-history",
        asked_when=when("breastfeeding", False),
    ),
    yes_no(
        "had-abortion",
        "Have you ever had an abortion?",
        "pregnancy-history",
        asked_when=when("ever-pregnant", True),
    ),
    yes_no(
        "septic-abortion",
        "Was it a septic abortion (with signs of infection)?",
        "pregnancy-history",
        asked_when=when("had-abortion", True),
    ),
    {
        "id": "abortion-week",
        "text": "In what week of pregnancy did the abortion occur?",
        "kind": "numeric",
        "section": "pregnancy-history",
        "minimum": 1,
        "maximum": 42,
        "integer": True,
        "unit": "weeks",
        "asked_when": when("septic-abortion", False),
    },
    yes_no(
        "had-ectopic",
        "Have you ever had an ectopic pregnancy?",
        "pregnancy-history",
        asked_when=when("ever-pregnant", True),
    ),
    # ── Section 3: Cardiovascular risk factors ───────────────────────
    {
        "id": WEIGHT,
        "text": "What is your weight?",
        "kind": "numeric",
        "section": "cvs-risk-factors",
        "minimum": 30,
        "maximum": 200,
        "unit": "kg",
    },
    {
        "id": HEIGHT,
        "text": "What is your height?",
        "kind": "numeric",
        "section": "cvs-risk-factors",
        "minimum": 100,
        "maximum": 250,
        "unit": "cm",
    },
    yes_no("smokes", "Do you smoke?", "cvs-risk-factors"),
    {
        "id": "cigarettes-per-day",
        "text": "How many cigarettes do you smoke per day?",
        "kind": "numeric",
        "section": "cvs-risk-factors",
        "minimum": 1,
        "maximum": 100,
        "integer": True,
        "asked_when": when("smokes", True),
    },
    yes_no("has-hypertension", "Have you been diagnosed with hypertension?", "cvs-risk-factors"),
    yes_no(
        "knows-bp",
        "Do you know your most recent blood pressure reading?",
        "cvs-risk-factors",
        asked_when=when("has-hypertension", True),
    ),
    {
        "id": "systolic-bp",
        "text": "Most recent systolic blood pressure?",
        "kind": "numeric",
        "section": "cvs-risk-factors",
        "minimum": 60,
        "maximum": 250,
        "integer": True,
        "unit": "mmHg",
        "asked_when": when("knows-bp", True),
    },
    {
        "id": "diastolic-bp",
        "text": "Most recent diastolic blood pressure?",
        "kind": "numeric",
        "section": "cvs-risk-factors",
        "minimum": 40,
        "maximum": 150,
        "integer": True,
        "unit": "mmHg",
        "asked_when": when("knows-bp", True),
    },
    yes_no(
        "hypertension-during-pregnancy",
        "Did you have high blood pressure during a pregnancy?",
        "cvs-risk-factors",
        asked_when=when("has-hypertension", True),
    ),
    yes_no("has-diabetes", "Do you have diabetes?", "cvs-risk-factors"),
    {
        "id": "diabetes-duration",
        "text": "How long ago were you diagnosed with diabetes?",
        "kind": "choice",
        "section": "cvs-risk-factors",
        "options": ("less-than-20", "more-than-20"),
        "asked_when": when("has-diabetes", True),
    },
    yes_no(
        "diabetes-complications",
        "Do you have complications of diabetes (kidney, eye, or nerve damage)?",
        "cvs-risk-factors",
        asked_when=when("has-diabetes", True),
    ),
    yes_no("vascular-disease", "Do you have vascular disease?", "cvs-risk-factors"),
    yes_no(
        "ischemic-heart-disease",
        "Do you have current or past ischemic heart disease?",
        "cvs-risk-factors",
    ),
    yes_no("had-stroke", "Have you ever had a stroke?", "cvs-risk-factors"),
    yes_no(
        "has-dyslipidemia",
        "Have you ever been diagnosed with dyslipidemia?",
        "cvs-risk-factors",
    ),
    yes_no(
        "knows-lipid-profile",
        "Do you know your latest lipid profile?",
        "cvs-risk-factors",
        asked_when=when("has-dyslipidemia", True),
    ),
    _lipid("ldl", "LDL cholesterol?", 10, 500),
    _lipid("hdl", "HDL cholesterol?", 5, 200),
    _lipid("total-cholesterol", "Total cholesterol?", 50, 800),
    _lipid("triglycerides", "Triglycerides?", 10, 2000),
    # ── Section 4: Prothrombotic conditions ──────────────────────────
    yes_no("has-dvt", "Have you ever had deep vein thrombosis (DVT)?", "prothrombotic"),
    yes_no(
        "dvt-current",
        "Do you currently have DVT?",
        "prothrombotic",
        asked_when=when("has-dvt", True),
    ),
    yes_no(
        "family-dvt",
        "Has a first-degree relative had DVT?",
        "prothrombotic",
        asked_when=when("has-dvt", False),
    ),
    yes_no(
        "major-surgery",
        "Did you have major surgery in the past 4 weeks?",
        "prothrombotic",
    ),
    {
        "id": "bed-rest-days",
        "text": "For how many days were you on bed rest after the surgery?",
        "kind": "numeric",
        "section": "prothrombotic",
        "minimum": 0,
        "maximum": 28,
        "integer": True,
        "unit": "days",
        "asked_when": when("major-surgery", True),
    },
    yes_no(
        "valvular-heart-disease",
        "Have you ever been diagnosed with valvular heart disease?",
        "prothrombotic",
    ),
    yes_no(
        "valvular-complicated",
        "Was it complicated (pulmonary hypertension, atrial fibrillation, "
        "or subacute bacterial endocarditis)?",
        "prothrombotic",
        asked_when=when("valvular-heart-disease", True),
    ),
    yes_no(
        "has-sle",
        "Have you ever been diagnosed with systemic lupus erythematosus (SLE)?",
        "prothrombotic",
    ),
    {
        "id": "sle-diagnosis",
        "text": "How was it diagnosed?",
        "kind": "choice",
        "section": "prothrombotic",
        "options": ("antiphospholipid", "clinical"),
        "asked_when": when("has-sle", True),
    },
    yes_no(
        "severe-thrombocytopenia",
        "Do you currently have severe thrombocytopenia (platelets below 50,000)?",
        "prothrombotic",
        asked_when=when("sle-diagnosis", "clinical"),
    ),
    yes_no(
        "immunosuppressive",
        "Are you on immunosuppressive treatment?",
        "prothrombotic",
        asked_when=when("sle-diagnosis", "clinical"),
    ),
    yes_no("has-headaches", "Do you have regular headaches?", "prothrombotic"),
    yes_no(
        "migraine-like",
        "Are they migraine-like (throbbing, one-sided, with nausea or light sensitivity)?",
        "prothrombotic",
        asked_when=when("has-headaches", True),
    ),
    yes_no(
        "migraine-aura",
        "Do you see an aura before the headache?",
        "prothrombotic",
        asked_when=when("migraine-like", True),
    ),
    # ── Section 5: Gynecological history ─────────────────────────────
    yes_no(
        "has-gtd",
        "Have you recently been diagnosed with gestational trophoblastic disease (GTD)?",
        "gyn-history",
    ),
    {
        "id": "hcg-trend",
        "text": "What is the trend of your hCG level?",
        "kind": "choice",
        "section": "gyn-history",
        "options": ("decreasing", "elevated"),
        "asked_when": when("has-gtd", True),
    },
    yes_no("breast-swelling", "Do you have, or have you had, a breast lump?", "gyn-history"),
    yes_no(
        "breast-diagnosed",
        "Has it been diagnosed?",
        "gyn-history",
        asked_when=when("breast-swelling", True),
    ),
    {
        "id": "breast-diagnosis",
        "text": "What was the diagnosis?",
        "kind": "choice",
        "section": "gyn-history",
        "options": ("benign", "cancer"),
        "asked_when": when("breast-diagnosed", True),
    },
    {
        "id": "breast-cancer-present",
        "text": "Is the cancer present now, or was it more than 5 years ago?",
        "kind": "choice",
        "section": "gyn-history",
        "options": ("current", "past"),
        "asked_when": when("breast-diagnosis", "cancer"),
    },
    yes_no("had-pap-smear", "Have you ever had a PAP smear?", "gyn-history"),
    {
        "id": "pap-result",
        "text": "What was the result of your last PAP smear?",
        "kind": "choice",
        "section": "gyn-history",
        "options": ("normal", "cin", "cancer"),
        "asked_when": when("had-pap-smear", True),
    },
    yes_no("endometrial-cancer", "Do you have endometrial cancer?", "gyn-history"),
    yes_no("ovarian-cancer", "Do you have ovarian cancer?", "gyn-history"),
    yes_no("uterine-fibroids", "Do you have uterine fibroids?", "gyn-history"),
    yes_no(
        "fibroids-distort-uterus",
        "Do the fibroids distort the uterine cavity?",
        "gyn-history",
        asked_when=when("uterine-fibroids", True),
    ),
    yes_no(
        "pelvic-abnormalities",
        "Have you been diagnosed with an anatomical abnormality of the pelvis?",
        "gyn-history",
    ),
    yes_no(
        "pelvic-distorts-uterus",
        "Does it distort the uterine cavity?",
        "gyn-history",
        asked_when=when("pelvic-abnormalities", True),
    ),
    # ── Section 6: Reproductive tract infections ─────────────────────
    yes_no("has-pid", "Have you ever had pelvic inflammatory disease (PID)?", "rti"),
    yes_no(
        "pid-current",
        "Do you currently have PID?",
        "rti",
        asked_when=when("has-pid", True),
    ),
    yes_no(
        "pid-subsequent-pregnancy",
        "Have you been pregnant since the PID?",
        "rti",
        asked_when=when("pid-current", False),
    ),
    yes_no("has-sti", "Do you currently have a sexually transmitted infection?", "rti"),
    {
        "id": "sti-type",
        "text": "Which kind of infection?",
        "kind": "choice",
        "section": "rti",
        "options": ("purulent", "other"),
        "asked_when": when("has-sti", True),
    },
    yes_no("has-hiv", "Are you living with HIV?", "rti"),
    {
        "id": "hiv-who-stage",
        "text": "What is your WHO clinical stage?",
        "kind": "choice",
        "section": "rti",
        "options": ("stage1-2", "stage3-4"),
        "asked_when": when("has-hiv", True),
    },
    yes_no("pelvic-tb", "Have you been diagnosed with pelvic tuberculosis?", "rti"),
    # ── Section 7: Other comorbidities ───────────────────────────────
    yes_no(
        "gallbladder-disease",
        "Have you ever been diagnosed with gallbladder disease?",
        "comorbidities",
    ),
    yes_no(
        "gallbladder-symptomatic",
        "Does it cause symptoms?",
        "comorbidities",
        asked_when=when("gallbladder-disease", True),
    ),
    yes_no(
        "gallbladder-treated",
        "Is it, or was it, treated?",
        "comorbidities",
        asked_when=when("gallbladder-symptomatic", True),
    ),
    {
        "id": "gallbladder-treatment",
        "text": "How was it treated?",
        "kind": "choice",
        "section": "comorbidities",
        "options": ("medical", "surgical"),
        "asked_when": when("gallbladder-treated", True),
    },
    yes_no(
        "cholestasis",
        "Have you ever had cholestasis related to pregnancy?",
        "comorbidities",
    ),
    yes_no("has-hepatitis", "Do you have viral hepatitis?", "comorbidities"),
    {
        "id": "hepatitis-type",
        "text": "Is the hepatitis acute, chronic, or are you a carrier?",
        "kind": "choice",
        "section": "comorbidities",
        "options": ("acute", "chronic", "carrier"),
        "asked_when": when("has-hepatitis", True),
    },
    yes_no("has-cirrhosis", "Do you have cirrhosis of the liver?", "comorbidities"),
    yes_no(
        "cirrhosis-decompensated",
        "Is the cirrhosis severe (decompensated)?",
        "comorbidities",
        asked_when=when("has-cirrhosis", True),
    ),
    yes_no("liver-tumor", "Have you ever been diagnosed with a liver tumor?", "comorbidities"),
    {
        "id": "liver-tumor-type",
        "text": "Is or was it benign or malignant?",
        "kind": "choice",
        "section": "comorbidities",
        "options": ("benign", "malignant"),
        "asked_when": when("liver-tumor", True),
    },
    {
        "id": "benign-liver-tumor-type",
        "text": "What kind of benign liver tumor?",
        "kind": "choice",
        "section": "comorbidities",
        "options": ("hepatocellular-adenoma", "focal-nodular-hyperplasia"),
        "asked_when": when("liver-tumor-type", "benign"),
    },
    yes_no(
        "iron-deficiency-anemia",
        "Do you have iron deficiency anemia?",
        "comorbidities",
    ),
    yes_no("sickle-cell", "Do you have sickle cell disease?", "comorbidities"),
    # ── Section 9: Medications ───────────────────────────────────────
    yes_no(
        "on-medications",
        "Do you take any regular medication?",
        "medication-history",
    ),
    {
        "id": "medication",
        "text": "Which of these medications do you take?",
        "kind": "choice",
        "section": "medication-history",
        "options": ("ritonavir", "carbamazepine", "lamotrigine", "rifampicin", "other"),
        "asked_when": when("on-medications", True),
    },
    # ── Personalization (preferences, never medical rules) ───────────
    yes_no(
        WANTS_FUTURE_PREGNANCY,
        "Would you like to become pregnant in the future?",
        "personalization",
    ),
    yes_no(
        WANTS_SURGICAL_METHOD,
        "Are you okay with surgery that gives permanent contraception?",
        "personalization",
        asked_when=when(WANTS_FUTURE_PREGNANCY, False),
    ),
    yes_no(
        OKAY_WITH_IRREGULAR_PERIODS,
        "Are you okay with irregular or no periods while using your contraceptive?",
        "personalization",
    ),
    {
        "id": PREFERRED_FREQUENCY,
        "text": "How often would you like to take or renew your method?",
        "kind": "choice",
        "section": "personalization",
        "options": FREQUENCY_OPTIONS,
    },
]
