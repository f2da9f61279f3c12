"""Tests for the question catalog and its load-time validation.

Tests cover:
- The built-in WHO MEC tables
- Required question sets (parents, derived inputs, calculator inputs)
- Conditional questions
- Rejection of inconsistent rule tables
- JSON loading
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from src.catalog import (
    BMI,
    IRREGULAR_PERIODS,
    body_mass_index,
    build_default_catalog,
    load_catalog,
)
from src.catalog.catalog import QuestionCatalog
from src.catalog.derived import resolve_facts
from src.eligibility import RuleEngine
from src.errors import RuleEvaluationError, UnknownMethod, UnknownQuestion
from src.models.enums import AnswerKind, MecCategory
from src.profile import ProfileStore
from src.schemas.questionnaire import Question
from src.schemas.rules import MethodDefinition, RuleDefinition


def _question(qid: str, kind: str = "boolean", **extra) -> Question:
    if kind == "choice" and "options" not in extra:
        extra["options"] = ("a", "b")
    return Question.model_validate({"id": qid, "text": qid, "kind": kind, **extra})


def _method(mid: str, **extra) -> MethodDefinition:
    return MethodDefinition.model_validate(
        {"id": mid, "name": mid.upper(), "short_name": mid, "family": "hormonal", **extra}
    )


def _rule(rid: str, when: dict, *effects: tuple[list[str], int]) -> RuleDefinition:
    return RuleDefinition.model_validate({
        "id": rid,
        "section": "test",
        "when": when,
        "effects": [
            {"methods": methods, "category": category, "reason": f"{rid} reason"}
            for methods, category in effects
        ],
    })


def _is(qid: str, value: object = True) -> dict:
    return {"kind": "compare", "question": qid, "op": "eq", "value": value}


# WHO MEC criteria, one id per method group. The built-in tables author
# criteria that share a trigger as one rule with several effects.
WHO_MEC_CRITERIA = (
    # menstrual history
    "age-under-18-dmpa", "age-under-20-iud", "age-20-38-sterilization",
    "age-over-39-combined", "age-over-45-dmpa", "prolonged-or-hmb", "irregular-periods",
    "unexplained-bleeding-2", "unexplained-bleeding-3", "unexplained-bleeding-4",
    "endometriosis-copper-iud", "latex-allergy",
    # pregnancy history
    "never-pregnant-iud", "breastfeeding-less-than-2-days",
    "breastfeeding-2d-4w-combined", "breastfeeding-2d-4w-pop", "breastfeeding-2d-4w-iud",
    "breastfeeding-4w-6w-combined", "breastfeeding-4w-6w-progestin",
    "breastfeeding-4w-6w-sterilization", "breastfeeding-6w-6m", "breastfeeding-over-6m",
    "not-breastfeeding-less-21d-risk", "not-breastfeeding-less-21d-no-risk",
    "not-breastfeeding-21-42d-risk", "not-breastfeeding-21-42d-no-risk",
    "septic-abortion", "abortion-13-26-weeks", "ectopic-pregnancy",
    # cardiovascular risk factors
    "bmi-over-29-age-under-18", "bmi-over-29-age-over-17", "smoking-age-over-34-less-15",
    "smoking-age-over-34-more-14", "smoking-age-under-35", "hypertension-cannot-measure",
    "hypertension-stage1", "hypertension-stage2-combined",
    "hypertension-stage2-progestin", "hypertension-pregnancy-history",
    "diabetes-more-than-20y", "diabetes-complications",
    "diabetes-less-20y-no-complications", "vascular-disease-combined",
    "vascular-disease-progestin", "ischemic-heart-disease", "stroke-combined",
    "stroke-progestin", "dyslipidemia-abnormal", "dyslipidemia-unknown-profile",
    # prothrombotic conditions
    "dvt-current-combined", "dvt-current-progestin", "dvt-history-combined",
    "dvt-history-progestin", "family-dvt", "surgery-bed-rest-over-3d-combined",
    "surgery-bed-rest-over-3d-progestin", "surgery-bed-rest-under-4d",
    "valvular-complicated-combined", "valvular-complicated-iud", "valvular-uncomplicated",
    "sle-antiphospholipid-combined", "sle-antiphospholipid-progestin",
    "sle-thrombocytopenia", "sle-immunosuppressive", "migraine-aura-combined",
    "migraine-aura-progestin", "migraine-no-aura-age-under-35-combined",
    "migraine-no-aura-age-under-35-progestin", "migraine-no-aura-age-over-34-combined",
    "migraine-no-aura-age-over-34-progestin", "headaches-not-migraine",
    # gynecological history
    "gtd-hcg-decreasing", "gtd-hcg-elevated", "pap-cin", "pap-cervical-cancer-combined",
    "pap-cervical-cancer-iud", "breast-undiagnosed", "breast-cancer-current-combined",
    "breast-cancer-past", "endometrial-cancer", "ovarian-cancer", "fibroids-distort",
    "pelvic-distorts", "pelvic-no-distortion",
    # reproductive tract infections
    "pid-current", "pid-past-no-pregnancy", "sti-purulent", "sti-other", "hiv-stage1-2-iud",
    "hiv-stage1-2-diaphragm", "hiv-stage3-4", "pelvic-tb",
    # comorbidities
    "gallbladder-medical-combined", "gallbladder-medical-progestin",
    "gallbladder-symptomatic-untreated-combined",
    "gallbladder-symptomatic-untreated-progestin", "gallbladder-surgical",
    "gallbladder-asymptomatic", "cholestasis", "hepatitis-acute",
    "cirrhosis-decompensated-combined", "cirrhosis-decompensated-progestin",
    "liver-tumor-adenoma-combined", "liver-tumor-adenoma-progestin", "liver-tumor-fnh",
    "liver-tumor-malignant-combined", "liver-tumor-malignant-progestin",
    "iron-deficiency-anemia", "sickle-cell",
    # medications
    "ritonavir-diaphragm", "ritonavir-hormonal", "carbamazepine-combined",
    "carbamazepine-injectable-implant", "lamotrigine-combined", "rifampicin-combined",
    "rifampicin-injectable-implant",
)

_GROUP_SUFFIXES = (
    "-combined", "-progestin", "-pop", "-iud", "-sterilization",
    "-diaphragm", "-hormonal", "-injectable-implant",
)
_RENAMED = {
    "hypertension-cannot-measure": "hypertension-bp-unknown",
    "not-breastfeeding-less-21d-no-risk": "not-breastfeeding-less-21d",
}


def _authored_id(criterion: str, authored: set[str]) -> str:
    if criterion in authored:
        return criterion
    if criterion in _RENAMED:
        return _RENAMED[criterion]
    for suffix in _GROUP_SUFFIXES:
        if criterion.endswith(suffix):
            return criterion.removesuffix(suffix)
    return criterion


@pytest.fixture(scope="module")
def default_catalog() -> QuestionCatalog:
    return build_default_catalog()


class TestDefaultCatalog:
    """The shipped tables build and hold every method."""

    def test_builds(self, default_catalog: QuestionCatalog) -> None:
        assert len(default_catalog.methods) == 17
        assert len(default_catalog.rule_definitions) > 50

    def test_method_order(self, default_catalog: QuestionCatalog) -> None:
        ids = [m.id for m in default_catalog.methods]
        assert ids[:3] == ["coc", "cic", "pop"]
        assert ids[-2:] == ["sdm", "calendar"]

    def test_get_question(self, default_catalog: QuestionCatalog) -> None:
        question = default_catalog.get("age")
        assert question.kind == AnswerKind.NUMERIC
        assert (question.minimum, question.maximum) == (10, 70)

    def test_unknown_question(self, default_catalog: QuestionCatalog) -> None:
        with pytest.raises(UnknownQuestion):
            default_catalog.get("favourite-colour")

    def test_unknown_method(self, default_catalog: QuestionCatalog) -> None:
        with pytest.raises(UnknownMethod):
            default_catalog.rules_for("pill-for-men")

    def test_derived_facts_available(self, default_catalog: QuestionCatalog) -> None:
        assert default_catalog.is_known_fact(BMI)
        assert default_catalog.is_known_fact("age")
        assert not default_catalog.is_known_fact("shoe-size")

    def test_rules_for_keep_registration_order(self, default_catalog: QuestionCatalog) -> None:
        orders = [r.order for r in default_catalog.rules_for("coc")]
        assert orders == sorted(orders)
        assert all(r.method_id == "coc" for r in default_catalog.rules_for("coc"))


class TestWhoMecCoverage:
    """Every WHO MEC criterion is authored, with the questions it reads."""

    def test_every_criterion_is_authored(self, default_catalog: QuestionCatalog) -> None:
        authored = {d.id for d in default_catalog.rule_definitions}
        missing = [c for c in WHO_MEC_CRITERIA if _authored_id(c, authored) not in authored]
        assert missing == []

    def test_criteria_list_has_no_duplicates(self) -> None:
        assert len(set(WHO_MEC_CRITERIA)) == len(WHO_MEC_CRITERIA) == 116

    @pytest.mark.parametrize(
        "question_id",
        [
            "has-sle",
            "valvular-heart-disease",
            "major-surgery",
            "gallbladder-disease",
            "cholestasis",
            "liver-tumor",
            "has-gtd",
            "has-dyslipidemia",
            "breast-swelling",
            "hypertension-during-pregnancy",
            "pelvic-abnormalities",
            "abortion-week",
        ],
    )
    def test_criterion_questions_declared(
        self, default_catalog: QuestionCatalog, question_id: str
    ) -> None:
        assert default_catalog.has_question(question_id)

    @pytest.mark.parametrize(
        "rule_id",
        [
            "sle-antiphospholipid",
            "valvular-complicated",
            "surgery-bed-rest-over-3d",
            "liver-tumor-malignant",
        ],
    )
    def test_combined_contraindications(
        self, default_catalog: QuestionCatalog, rule_id: str
    ) -> None:
        categories = {r.category for r in default_catalog.rules_for("coc") if r.rule_id == rule_id}
        assert categories == {MecCategory.UNACCEPTABLE}

    def test_method_frequencies_are_offered(self, default_catalog: QuestionCatalog) -> None:
        options = default_catalog.get("preferred-frequency").options
        assert default_catalog.method("cic").frequency in options
        assert {m.frequency for m in default_catalog.methods if m.frequency} <= set(options)


class TestRequiredQuestions:
    """Questions whose answers can affect a method."""

    def test_includes_conditional_parents(self, default_catalog: QuestionCatalog) -> None:
        required = default_catalog.required_ids_for("coc")
        assert "migraine-aura" in required
        assert "migraine-like" in required
        assert "has-headaches" in required

    def test_derived_fact_expands_to_inputs(self, default_catalog: QuestionCatalog) -> None:
        required = default_catalog.required_ids_for("coc")
        assert BMI not in required
        assert {"weight-kg", "height-cm"} <= required

    def test_calculator_inputs_required(self, default_catalog: QuestionCatalog) -> None:
        assert "average-cycle-length" in default_catalog.required_ids_for("sdm")
        assert {"shortest-cycle-length", "longest-cycle-length"} <= (
            default_catalog.required_ids_for("calendar")
        )

    def test_all_required_for_returns_questions(self, default_catalog: QuestionCatalog) -> None:
        questions = default_catalog.all_required_for("male-condom")
        assert default_catalog.get("latex-allergy") in questions


class TestConditionalQuestions:
    """asked_when gating."""

    def test_unconditional_always_asked(self, default_catalog: QuestionCatalog) -> None:
        assert default_catalog.is_asked("age", {})

    def test_follow_up_needs_matching_parent(self, default_catalog: QuestionCatalog) -> None:
        assert not default_catalog.is_asked("cigarettes-per-day", {})
        assert not default_catalog.is_asked("cigarettes-per-day", {"smokes": False})
        assert default_catalog.is_asked("cigarettes-per-day", {"smokes": True})

    def test_chain(self, default_catalog: QuestionCatalog) -> None:
        values = {"has-headaches": True, "migraine-like": True}
        assert default_catalog.is_asked("migraine-aura", values)
        assert not default_catalog.is_asked("migraine-aura", {"migraine-like": True})

    def test_inapplicable_through_ancestor(self, default_catalog: QuestionCatalog) -> None:
        values = {"has-headaches": False}
        assert default_catalog.is_inapplicable("migraine-like", values)
        assert default_catalog.is_inapplicable("migraine-aura", values)
        assert not default_catalog.is_inapplicable("migraine-aura", {})

    def test_pending_questions_in_catalog_order(self, default_catalog: QuestionCatalog) -> None:
        pending = default_catalog.pending_questions({})
        ids = [q.id for q in pending]
        assert ids[0] == "age"
        assert "cigarettes-per-day" not in ids

    def test_pending_questions_for_method(self, default_catalog: QuestionCatalog) -> None:
        ids = {q.id for q in default_catalog.pending_questions({}, "male-condom")}
        assert "latex-allergy" in ids
        assert ids <= default_catalog.required_ids_for("male-condom")


class TestLoadTimeValidation:
    """Inconsistent rule tables never build."""

    def test_unknown_question_in_rule(self) -> None:
        with pytest.raises(RuleEvaluationError, match="unknown question"):
            QuestionCatalog([_question("smokes")], [_method("coc")], [
                _rule("r1", _is("vapes"), (["coc"], 3)),
            ])

    def test_value_of_wrong_kind(self) -> None:
        with pytest.raises(RuleEvaluationError, match="does not fit"):
            QuestionCatalog([_question("smokes")], [_method("coc")], [
                _rule("r1", _is("smokes", 5), (["coc"], 3)),
            ])

    def test_choice_value_not_in_options(self) -> None:
        with pytest.raises(RuleEvaluationError):
            QuestionCatalog([_question("colour", "choice")], [_method("coc")], [
                _rule("r1", _is("colour", "c"), (["coc"], 3)),
            ])

    def test_ordering_operator_on_boolean(self) -> None:
        when = {"kind": "compare", "question": "smokes", "op": "gt", "value": True}
        with pytest.raises(RuleEvaluationError, match="operator"):
            QuestionCatalog([_question("smokes")], [_method("coc")], [
                _rule("r1", when, (["coc"], 3)),
            ])

    def test_in_needs_values(self) -> None:
        when = {"kind": "compare", "question": "colour", "op": "in", "value": "a"}
        with pytest.raises(RuleEvaluationError, match="non-empty"):
            QuestionCatalog([_question("colour", "choice")], [_method("coc")], [
                _rule("r1", when, (["coc"], 3)),
            ])

    def test_duplicate_rule_id(self) -> None:
        with pytest.raises(RuleEvaluationError, match="duplicate"):
            QuestionCatalog([_question("smokes")], [_method("coc")], [
                _rule("r1", _is("smokes"), (["coc"], 3)),
                _rule("r1", _is("smokes", False), (["coc"], 1)),
            ])

    def test_unknown_method(self) -> None:
        with pytest.raises(UnknownMethod):
            QuestionCatalog([_question("smokes")], [_method("coc")], [
                _rule("r1", _is("smokes"), (["pop"], 3)),
            ])

    def test_duplicate_question(self) -> None:
        with pytest.raises(RuleEvaluationError):
            QuestionCatalog([_question("smokes"), _question("smokes")], [_method("coc")], [])

    def test_condition_on_unknown_parent(self) -> None:
        child = _question("per-day", "numeric", asked_when={"question": "smokes", "equals": True})
        with pytest.raises(UnknownQuestion):
            QuestionCatalog([child], [_method("coc")], [])

    def test_condition_parent_declared_later(self) -> None:
        child = _question("per-day", "numeric", asked_when={"question": "smokes", "equals": True})
        with pytest.raises(RuleEvaluationError, match="declared before"):
            QuestionCatalog([child, _question("smokes")], [_method("coc")], [])

    def test_calculator_without_input_question(self) -> None:
        with pytest.raises(RuleEvaluationError, match="calculator"):
            QuestionCatalog([_question("smokes")], [_method("sdm", calculator="standard_days")], [])

    def test_frequency_not_offered(self) -> None:
        frequency = _question("preferred-frequency", "choice", options=("daily",))
        with pytest.raises(RuleEvaluationError, match="does not offer"):
            QuestionCatalog([frequency], [_method("cic", frequency="monthly")], [])

    def test_valid_small_catalog(self) -> None:
        catalog = QuestionCatalog([_question("smokes")], [_method("coc")], [
            _rule("r1", _is("smokes"), (["coc"], 3)),
        ])
        (rule,) = catalog.rules_for("coc")
        assert rule.category == MecCategory.RISKS_OUTWEIGH
        assert catalog.required_ids_for("coc") == frozenset({"smokes"})


class TestLoadCatalog:
    """Rule tables read from JSON."""

    def test_default_when_no_path(self) -> None:
        assert len(load_catalog().methods) == 17

    def test_json_document(self, tmp_path: Path) -> None:
        document = {
            "questions": [{"id": "smokes", "text": "Do you smoke?", "kind": "boolean"}],
            "methods": [{"id": "coc", "name": "COC", "short_name": "COC", "family": "hormonal"}],
            "rules": [{
                "id": "smoker",
                "section": "cvs",
                "when": _is("smokes"),
                "effects": [{"methods": ["coc"], "category": 4, "reason": "Smoker"}],
            }],
        }
        path = tmp_path / "rules.json"
        path.write_text(json.dumps(document), encoding="utf-8")

        catalog = load_catalog(path)
        assert [m.id for m in catalog.methods] == ["coc"]
        assert catalog.rules_for("coc")[0].category == MecCategory.UNACCEPTABLE

    def test_malformed_json_document(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({"questions": []}), encoding="utf-8")
        with pytest.raises(RuleEvaluationError, match="Malformed"):
            load_catalog(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "missing.json")


class TestDerivedFacts:
    """BMI and cycle irregularity computed from answers."""

    def test_bmi(self) -> None:
        assert body_mass_index(70, 175) == pytest.approx(22.857, abs=1e-3)

    def test_bmi_rejects_zero_height(self) -> None:
        with pytest.raises(ValueError, match="positive"):
            body_mass_index(60, 0)

    def test_zero_height_leaves_bmi_unresolved(self) -> None:
        facts = resolve_facts({"weight-kg": 60, "height-cm": 0})
        assert BMI not in facts

    def test_catalog_allowing_zero_height(self, tmp_path: Path) -> None:
        document = {
            "questions": [
                {"id": "weight-kg", "text": "Weight?", "kind": "numeric", "minimum": 30},
                {"id": "height-cm", "text": "Height?", "kind": "numeric", "minimum": 0},
            ],
            "methods": [{"id": "coc", "name": "COC", "short_name": "COC", "family": "hormonal"}],
            "rules": [{
                "id": "obese",
                "section": "cvs",
                "when": {"kind": "compare", "question": "bmi", "op": "gt", "value": 30},
                "effects": [{"methods": ["coc"], "category": 2, "reason": "BMI >30"}],
            }],
        }
        path = tmp_path / "rules.json"
        path.write_text(json.dumps(document), encoding="utf-8")
        catalog = load_catalog(path)

        store = ProfileStore(catalog)
        store.set_answer("weight-kg", 60)
        store.set_answer("height-cm", 0)
        (result,) = RuleEngine(catalog).evaluate(store.freeze())
        assert result.deciding_rule is None

    def test_irregular_periods(self) -> None:
        facts = resolve_facts({"shortest-cycle-length": 24, "longest-cycle-length": 32})
        assert facts[IRREGULAR_PERIODS] is True
        facts = resolve_facts({"shortest-cycle-length": 25, "longest-cycle-length": 32})
        assert facts[IRREGULAR_PERIODS] is False
