"""Tests for the predicate interpreter and the MEC rule engine.

Tests cover:
- Predicate evaluation and referenced facts
- Severity-max resolution and tie-breaking
- Unknown vs. default category
- Monotonicity as answers are added
- Derived facts (BMI)
- Scenarios on the built-in WHO MEC tables
"""

from __future__ import annotations

import pytest

from src.catalog import build_default_catalog
from src.catalog.catalog import QuestionCatalog
from src.eligibility import RuleEngine
from src.eligibility.engine import NO_RESTRICTION_RATIONALE, UNKNOWN_RATIONALE
from src.eligibility.predicates import evaluate, references
from src.errors import RuleEvaluationError, UnknownMethod
from src.models.enums import EvaluationStatus, MecCategory, Operator
from src.profile import ProfileStore
from src.schemas.questionnaire import HealthProfile, Question
from src.schemas.rules import AllOf, Always, AnyOf, Comparison, MethodDefinition, RuleDefinition


def _is(qid: str, value: object = True) -> dict:
    return {"kind": "compare", "question": qid, "op": "eq", "value": value}


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


def _small_catalog() -> QuestionCatalog:
    questions = [
        Question(id="smokes", text="Smoker?", kind="boolean"),
        Question(id="age", text="Age?", kind="numeric", minimum=10, maximum=70, integer=True),
        Question(id="headaches", text="Headaches?", kind="boolean"),
        Question(
            id="aura",
            text="Aura?",
            kind="boolean",
            asked_when={"question": "headaches", "equals": True},
        ),
        Question(id="weight-kg", text="Weight?", kind="numeric", minimum=30, maximum=200),
        Question(id="height-cm", text="Height?", kind="numeric", minimum=100, maximum=250),
    ]
    methods = [
        MethodDefinition(id="coc", name="COC", short_name="COC", family="hormonal"),
        MethodDefinition(id="pop", name="POP", short_name="POP", family="hormonal"),
        MethodDefinition(
            id="condom",
            name="Condom",
            short_name="Condom",
            family="barrier",
            protects_against_sti=True,
        ),
    ]
    rules = [
        _rule("smoker", _is("smokes"), (["coc"], 2), (["pop"], 1)),
        _rule(
            "smoker-35",
            {"kind": "all", "terms": [_is("smokes"), {
                "kind": "compare", "question": "age", "op": "ge", "value": 35,
            }]},
            (["coc"], 4),
        ),
        _rule("aura", _is("aura"), (["coc"], 4), (["pop"], 3)),
        _rule("headaches", _is("headaches"), (["coc"], 2)),
        _rule(
            "obese",
            {"kind": "compare", "question": "bmi", "op": "ge", "value": 30},
            (["pop"], 2),
        ),
    ]
    return QuestionCatalog(questions, methods, rules)


def _profile(catalog: QuestionCatalog, answers: dict) -> HealthProfile:
    store = ProfileStore(catalog)
    for question_id, value in answers.items():
        store.set_answer(question_id, value)
    return store.freeze()


@pytest.fixture()
def catalog() -> QuestionCatalog:
    return _small_catalog()


@pytest.fixture()
def engine(catalog: QuestionCatalog) -> RuleEngine:
    return RuleEngine(catalog)


class TestPredicates:
    """Predicate trees evaluated against answered facts."""

    def test_references_nested(self) -> None:
        tree = AllOf(terms=(
            Comparison(question="a", op=Operator.EQ, value=True),
            AnyOf(terms=(
                Comparison(question="b", op=Operator.GT, value=3),
                Comparison(question="c", op=Operator.IN, value=("x", "y")),
            )),
        ))
        assert references(tree) == frozenset({"a", "b", "c"})
        assert references(Always()) == frozenset()

    def test_evaluate(self) -> None:
        tree = AnyOf(terms=(
            Comparison(question="b", op=Operator.GT, value=3),
            Comparison(question="c", op=Operator.IN, value=("x", "y")),
        ))
        assert evaluate(tree, {"b": 2, "c": "y"}) is True
        assert evaluate(tree, {"b": 2, "c": "z"}) is False
        assert evaluate(Always(), {}) is True

    def test_missing_fact_is_an_error(self) -> None:
        with pytest.raises(RuleEvaluationError, match="not answered"):
            evaluate(Comparison(question="b", op=Operator.EQ, value=1), {}, "r1")

    def test_incomparable_values(self) -> None:
        with pytest.raises(RuleEvaluationError, match="cannot compare"):
            evaluate(Comparison(question="b", op=Operator.LT, value=3), {"b": "text"})


class TestSeverityMax:
    """The highest category among satisfied rules wins."""

    def test_highest_category_wins(self, catalog: QuestionCatalog, engine: RuleEngine) -> None:
        result = engine.evaluate_method("coc", _profile(catalog, {"smokes": True, "age": 40}))
        assert result.category == MecCategory.UNACCEPTABLE
        assert result.deciding_rule.rule_id == "smoker-35"
        assert [m.rule_id for m in result.matched_rules] == ["smoker-35", "smoker"]

    def test_tie_goes_to_first_registered(
        self, catalog: QuestionCatalog, engine: RuleEngine
    ) -> None:
        profile = _profile(
            catalog, {"smokes": True, "age": 40, "headaches": True, "aura": True}
        )
        result = engine.evaluate_method("coc", profile)
        assert result.category == MecCategory.UNACCEPTABLE
        assert result.deciding_rule.rule_id == "smoker-35"
        assert result.rationale == "smoker-35 reason"

    def test_rule_with_missing_fact_is_skipped(
        self, catalog: QuestionCatalog, engine: RuleEngine
    ) -> None:
        result = engine.evaluate_method("coc", _profile(catalog, {"smokes": True}))
        assert result.status == EvaluationStatus.DETERMINED
        assert result.category == MecCategory.BENEFITS_OUTWEIGH
        assert result.deciding_rule.rule_id == "smoker"

    def test_adding_answers_never_lowers_category(
        self, catalog: QuestionCatalog, engine: RuleEngine
    ) -> None:
        answers = [("smokes", True), ("headaches", True), ("aura", False), ("age", 50)]
        store = ProfileStore(catalog)
        previous = 0
        for question_id, value in answers:
            store.set_answer(question_id, value)
            result = engine.evaluate_method("coc", store.freeze())
            assert result.category is not None
            assert result.category >= previous
            previous = result.category


class TestUnknownAndDefault:
    """Methods without a satisfied rule."""

    def test_incomplete_profile_is_unknown(
        self, catalog: QuestionCatalog, engine: RuleEngine
    ) -> None:
        result = engine.evaluate_method("coc", _profile(catalog, {"smokes": False}))
        assert result.is_unknown
        assert result.category is None
        assert result.rationale == UNKNOWN_RATIONALE

    def test_complete_profile_gets_default(
        self, catalog: QuestionCatalog, engine: RuleEngine
    ) -> None:
        profile = _profile(catalog, {"smokes": False, "age": 30, "headaches": False})
        result = engine.evaluate_method("coc", profile)
        assert result.status == EvaluationStatus.DETERMINED
        assert result.category == MecCategory.NO_RESTRICTION
        assert result.deciding_rule is None
        assert result.rationale == NO_RESTRICTION_RATIONALE

    def test_method_without_rules_is_determined(self, engine: RuleEngine) -> None:
        result = engine.evaluate_method("condom", HealthProfile())
        assert result.category == MecCategory.NO_RESTRICTION

    def test_sti_caveat(self, engine: RuleEngine) -> None:
        results = {r.method_id: r for r in engine.evaluate(HealthProfile())}
        assert results["coc"].sti_caveat is True
        assert results["condom"].sti_caveat is False

    def test_evaluate_keeps_declaration_order(self, engine: RuleEngine) -> None:
        assert [r.method_id for r in engine.evaluate(HealthProfile())] == ["coc", "pop", "condom"]

    def test_unknown_method(self, engine: RuleEngine) -> None:
        with pytest.raises(UnknownMethod):
            engine.evaluate_method("patch", HealthProfile())


class TestDerivedFacts:
    """Rules on BMI fire once weight and height are answered."""

    def test_bmi_rule(self, catalog: QuestionCatalog, engine: RuleEngine) -> None:
        profile = _profile(catalog, {"weight-kg": 90, "height-cm": 170})
        result = engine.evaluate_method("pop", profile)
        assert result.category == MecCategory.BENEFITS_OUTWEIGH
        assert result.deciding_rule.rule_id == "obese"

    def test_bmi_below_threshold(self, catalog: QuestionCatalog, engine: RuleEngine) -> None:
        profile = _profile(catalog, {"weight-kg": 60, "height-cm": 170})
        assert engine.evaluate_method("pop", profile).is_unknown

    def test_bmi_inputs_required(self, catalog: QuestionCatalog) -> None:
        assert {"weight-kg", "height-cm"} <= catalog.required_ids_for("pop")


class TestDefaultTables:
    """Scenarios on the built-in WHO MEC tables."""

    @pytest.fixture(scope="class")
    def who(self) -> QuestionCatalog:
        return build_default_catalog()

    def test_migraine_with_aura(self, who: QuestionCatalog) -> None:
        profile = _profile(
            who, {"has-headaches": True, "migraine-like": True, "migraine-aura": True}
        )
        results = {r.method_id: r for r in RuleEngine(who).evaluate(profile)}
        assert results["coc"].category == MecCategory.UNACCEPTABLE
        assert results["coc"].deciding_rule.rule_id == "migraine-aura"
        assert results["pop"].category == MecCategory.RISKS_OUTWEIGH

    def test_latex_allergy(self, who: QuestionCatalog) -> None:
        results = {
            r.method_id: r
            for r in RuleEngine(who).evaluate(_profile(who, {"latex-allergy": True}))
        }
        assert results["male-condom"].category == MecCategory.RISKS_OUTWEIGH
        assert results["female-condom"].category == MecCategory.RISKS_OUTWEIGH

    def test_empty_profile(self, who: QuestionCatalog) -> None:
        results = {r.method_id: r for r in RuleEngine(who).evaluate(HealthProfile())}
        assert results["coc"].is_unknown
        assert results["barrier"].category == MecCategory.NO_RESTRICTION

    def test_deterministic(self, who: QuestionCatalog) -> None:
        profile = _profile(who, {"age": 40, "smokes": True, "cigarettes-per-day": 20})
        engine = RuleEngine(who)
        assert engine.evaluate(profile) == engine.evaluate(profile)

    @pytest.mark.parametrize(
        ("answers", "rule_id"),
        [
            ({"has-sle": True, "sle-diagnosis": "antiphospholipid"}, "sle-antiphospholipid"),
            (
                {"valvular-heart-disease": True, "valvular-complicated": True},
                "valvular-complicated",
            ),
            ({"major-surgery": True, "bed-rest-days": 5}, "surgery-bed-rest-over-3d"),
            (
                {"liver-tumor": True, "liver-tumor-type": "malignant"},
                "liver-tumor-malignant",
            ),
            (
                {
                    "liver-tumor": True,
                    "liver-tumor-type": "benign",
                    "benign-liver-tumor-type": "hepatocellular-adenoma",
                },
                "liver-tumor-adenoma",
            ),
        ],
    )
    def test_combined_contraindications(
        self, who: QuestionCatalog, answers: dict, rule_id: str
    ) -> None:
        results = {r.method_id: r for r in RuleEngine(who).evaluate(_profile(who, answers))}
        assert results["coc"].category == MecCategory.UNACCEPTABLE
        assert results["coc"].deciding_rule.rule_id == rule_id
        assert results["ring"].category == MecCategory.UNACCEPTABLE

    def test_brief_bed_rest(self, who: QuestionCatalog) -> None:
        profile = _profile(who, {"major-surgery": True, "bed-rest-days": 2})
        results = {r.method_id: r for r in RuleEngine(who).evaluate(profile)}
        assert results["coc"].category == MecCategory.BENEFITS_OUTWEIGH
        assert results["coc"].deciding_rule.rule_id == "surgery-bed-rest-under-4d"

    def test_gtd_elevated_hcg(self, who: QuestionCatalog) -> None:
        profile = _profile(who, {"has-gtd": True, "hcg-trend": "elevated"})
        results = {r.method_id: r for r in RuleEngine(who).evaluate(profile)}
        assert results["cu-iud"].category == MecCategory.UNACCEPTABLE
        assert results["lng-iud"].category == MecCategory.UNACCEPTABLE

    def test_sle_thrombocytopenia(self, who: QuestionCatalog) -> None:
        profile = _profile(who, {
            "has-sle": True,
            "sle-diagnosis": "clinical",
            "severe-thrombocytopenia": True,
        })
        results = {r.method_id: r for r in RuleEngine(who).evaluate(profile)}
        assert results["dmpa"].category == MecCategory.RISKS_OUTWEIGH
        assert results["cu-iud"].category == MecCategory.RISKS_OUTWEIGH
        assert results["pop"].category == MecCategory.BENEFITS_OUTWEIGH

    def test_abnormal_lipids(self, who: QuestionCatalog) -> None:
        profile = _profile(who, {
            "has-dyslipidemia": True,
            "knows-lipid-profile": True,
            "ldl": 120,
            "hdl": 45,
            "total-cholesterol": 180,
            "triglycerides": 100,
        })
        results = {r.method_id: r for r in RuleEngine(who).evaluate(profile)}
        assert results["coc"].category == MecCategory.BENEFITS_OUTWEIGH
        assert results["coc"].deciding_rule.rule_id == "dyslipidemia-abnormal"

    def test_undiagnosed_breast_lump(self, who: QuestionCatalog) -> None:
        profile = _profile(who, {"breast-swelling": True, "breast-diagnosed": False})
        results = {r.method_id: r for r in RuleEngine(who).evaluate(profile)}
        assert results["implant"].category == MecCategory.BENEFITS_OUTWEIGH
        assert results["implant"].deciding_rule.rule_id == "breast-undiagnosed"
