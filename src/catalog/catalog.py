"""Question catalog — immutable questions, methods, and per-method rules.

Everything is validated once, at construction. A catalog that builds is
internally consistent: every predicate reads a known question or derived
fact with a comparable value, every effect names a known method, and every
calculator input is a declared question.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from pydantic import ValidationError

from src.calculators import CALCULATOR_INPUTS
from src.catalog.derived import DERIVED_FACTS, DerivedFact
from src.catalog.methods import METHOD_DEFINITIONS
from src.catalog.questions import PREFERRED_FREQUENCY, QUESTION_DEFINITIONS
from src.catalog.rules import RULE_DEFINITIONS
from src.config import settings
from src.eligibility.predicates import references
from src.errors import RuleEvaluationError, UnknownMethod, UnknownQuestion
from src.models.enums import AnswerKind, Operator
from src.schemas.questionnaire import AnswerValue, Question
from src.schemas.rules import (
    AllOf,
    AnyOf,
    CatalogDocument,
    Comparison,
    MethodDefinition,
    MethodRule,
    RuleDefinition,
)

logger = logging.getLogger(__name__)

_EQUALITY_OPS = frozenset({Operator.EQ, Operator.NE, Operator.IN})


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _fits(kind: AnswerKind, options: tuple[str, ...], value: object) -> bool:
    """True if `value` is a legal answer value for a question of `kind`."""
    if kind == AnswerKind.BOOLEAN:
        return isinstance(value, bool)
    if kind == AnswerKind.NUMERIC:
        return _is_number(value)
    return isinstance(value, str) and value in options


class QuestionCatalog:
    """Read-only registry of questions, methods, and rules.

    Shared by every session; no method mutates it after __init__.
    """

    def __init__(
        self,
        questions: Iterable[Question],
        methods: Iterable[MethodDefinition],
        rules: Iterable[RuleDefinition],
        derived: Mapping[str, DerivedFact] = DERIVED_FACTS,
    ) -> None:
        self._questions: tuple[Question, ...] = tuple(questions)
        self._methods: tuple[MethodDefinition, ...] = tuple(methods)
        self._definitions: tuple[RuleDefinition, ...] = tuple(rules)

        question_index: dict[str, Question] = {}
        for question in self._questions:
            if question.id in question_index:
                raise RuleEvaluationError(f"Duplicate question id '{question.id}'")
            question_index[question.id] = question
        self._question_index = MappingProxyType(question_index)

        method_index: dict[str, MethodDefinition] = {}
        for method in self._methods:
            if method.id in method_index:
                raise RuleEvaluationError(f"Duplicate method id '{method.id}'")
            method_index[method.id] = method
        self._method_index = MappingProxyType(method_index)

        # Derived facts are only offered when the catalog asks for their inputs
        available: dict[str, DerivedFact] = {}
        for name, fact in derived.items():
            if name in question_index:
                raise RuleEvaluationError(f"Derived fact '{name}' shadows a question id")
            if all(i in question_index for i in fact.inputs):
                available[name] = fact
        self._derived = MappingProxyType(available)

        self._validate_conditions()
        self._validate_calculators()
        self._validate_frequencies()
        self._rules_by_method = self._flatten_rules()
        self._required_ids = MappingProxyType(
            {m.id: self._compute_required(m) for m in self._methods}
        )

    # ── Read-only views ────────────────────────────────────────────────

    @property
    def questions(self) -> tuple[Question, ...]:
        """Questions in declaration order."""
        return self._questions

    @property
    def methods(self) -> tuple[MethodDefinition, ...]:
        """Methods in declaration order."""
        return self._methods

    @property
    def rule_definitions(self) -> tuple[RuleDefinition, ...]:
        return self._definitions

    @property
    def derived_facts(self) -> Mapping[str, DerivedFact]:
        return self._derived

    def get(self, question_id: str) -> Question:
        try:
            return self._question_index[question_id]
        except KeyError:
            raise UnknownQuestion(question_id) from None

    def has_question(self, question_id: str) -> bool:
        return question_id in self._question_index

    def method(self, method_id: str) -> MethodDefinition:
        try:
            return self._method_index[method_id]
        except KeyError:
            raise UnknownMethod(method_id) from None

    def rules_for(self, method_id: str) -> tuple[MethodRule, ...]:
        """Rules of one method, in registration order."""
        self.method(method_id)
        return self._rules_by_method[method_id]

    def is_known_fact(self, name: str) -> bool:
        return name in self._question_index or name in self._derived

    # ── Required questions and completeness ────────────────────────────

    def required_ids_for(self, method_id: str) -> frozenset[str]:
        self.method(method_id)
        return self._required_ids[method_id]

    def all_required_for(self, method_id: str) -> frozenset[Question]:
        """Every question whose answer can affect the method's result."""
        return frozenset(self._question_index[q] for q in self.required_ids_for(method_id))

    def is_asked(self, question_id: str, values: Mapping[str, AnswerValue]) -> bool:
        """True once every condition on the question is met by an answer."""
        condition = self.get(question_id).asked_when
        if condition is None:
            return True
        parent = condition.question
        return (
            self.is_asked(parent, values)
            and parent in values
            and values[parent] == condition.equals
        )

    def is_inapplicable(self, question_id: str, values: Mapping[str, AnswerValue]) -> bool:
        """True if an answered ancestor rules the question out."""
        condition = self.get(question_id).asked_when
        if condition is None:
            return False
        parent = condition.question
        if self.is_inapplicable(parent, values):
            return True
        return parent in values and values[parent] != condition.equals

    def is_complete_for(self, method_id: str, values: Mapping[str, AnswerValue]) -> bool:
        return all(
            qid in values or self.is_inapplicable(qid, values)
            for qid in self.required_ids_for(method_id)
        )

    def is_fully_complete(self, values: Mapping[str, AnswerValue]) -> bool:
        return all(self.is_complete_for(m.id, values) for m in self._methods)

    def pending_questions(
        self,
        values: Mapping[str, AnswerValue],
        method_id: str | None = None,
    ) -> tuple[Question, ...]:
        """Unanswered questions that apply now, in catalog order."""
        scope = self.required_ids_for(method_id) if method_id is not None else None
        return tuple(
            q
            for q in self._questions
            if (scope is None or q.id in scope)
            and q.id not in values
            and self.is_asked(q.id, values)
        )

    # ── Construction helpers ───────────────────────────────────────────

    def _fact_shape(self, name: str) -> tuple[AnswerKind, tuple[str, ...]]:
        if name in self._question_index:
            question = self._question_index[name]
            return question.kind, question.options
        return self._derived[name].kind, ()

    def _validate_conditions(self) -> None:
        seen: set[str] = set()
        for question in self._questions:
            condition = question.asked_when
            if condition is not None:
                if condition.question not in self._question_index:
                    raise UnknownQuestion(condition.question)
                if condition.question not in seen:
                    raise RuleEvaluationError(
                        f"Question '{question.id}' depends on '{condition.question}', "
                        "which must be declared before it"
                    )
                parent = self._question_index[condition.question]
                if not _fits(parent.kind, parent.options, condition.equals):
                    raise RuleEvaluationError(
                        f"Question '{question.id}' expects {condition.equals!r} "
                        f"from '{parent.id}', which is not a valid answer"
                    )
            seen.add(question.id)

    def _validate_calculators(self) -> None:
        for method in self._methods:
            if method.calculator is None:
                continue
            for input_id in CALCULATOR_INPUTS[method.calculator]:
                question = self._question_index.get(input_id)
                if question is None or question.kind != AnswerKind.NUMERIC:
                    raise RuleEvaluationError(
                        f"Method '{method.id}' needs numeric question '{input_id}' "
                        f"for the {method.calculator.value} calculator"
                    )

    def _validate_frequencies(self) -> None:
        question = self._question_index.get(PREFERRED_FREQUENCY)
        if question is None or question.kind != AnswerKind.CHOICE:
            return
        for method in self._methods:
            if method.frequency is not None and method.frequency not in question.options:
                raise RuleEvaluationError(
                    f"Method '{method.id}' has frequency '{method.frequency}', "
                    f"which '{PREFERRED_FREQUENCY}' does not offer"
                )

    def _validate_predicate(self, node: object, rule_id: str) -> None:
        if isinstance(node, (AllOf, AnyOf)):
            for term in node.terms:
                self._validate_predicate(term, rule_id)
            return
        if not isinstance(node, Comparison):
            return

        if not self.is_known_fact(node.question):
            raise RuleEvaluationError(f"references unknown question '{node.question}'", rule_id)
        kind, options = self._fact_shape(node.question)

        if kind != AnswerKind.NUMERIC and node.op not in _EQUALITY_OPS:
            raise RuleEvaluationError(
                f"operator '{node.op.value}' cannot be applied to {kind.value} '{node.question}'",
                rule_id,
            )

        if node.op == Operator.IN:
            if not isinstance(node.value, tuple) or not node.value:
                raise RuleEvaluationError(
                    f"'in' on '{node.question}' needs a non-empty list of values", rule_id
                )
            candidates = node.value
        else:
            if isinstance(node.value, tuple):
                raise RuleEvaluationError(
                    f"'{node.op.value}' on '{node.question}' needs a single value", rule_id
                )
            candidates = (node.value,)

        for value in candidates:
            if not _fits(kind, options, value):
                raise RuleEvaluationError(
                    f"value {value!r} does not fit {kind.value} '{node.question}'", rule_id
                )

    def _flatten_rules(self) -> Mapping[str, tuple[MethodRule, ...]]:
        per_method: dict[str, list[MethodRule]] = {m.id: [] for m in self._methods}
        seen_ids: set[str] = set()
        order = 0
        for definition in self._definitions:
            if definition.id in seen_ids:
                raise RuleEvaluationError("duplicate rule id", definition.id)
            seen_ids.add(definition.id)
            self._validate_predicate(definition.when, definition.id)

            for effect in definition.effects:
                for method_id in effect.methods:
                    if method_id not in per_method:
                        raise UnknownMethod(method_id)
                    per_method[method_id].append(MethodRule(
                        rule_id=definition.id,
                        method_id=method_id,
                        category=effect.category,
                        reason=effect.reason,
                        when=definition.when,
                        order=order,
                    ))
                    order += 1
        return MappingProxyType({m: tuple(rules) for m, rules in per_method.items()})

    def _expand(self, names: Iterable[str]) -> set[str]:
        """Replace derived facts by the questions they are computed from."""
        expanded: set[str] = set()
        for name in names:
            if name in self._derived:
                expanded.update(self._derived[name].inputs)
            else:
                expanded.add(name)
        return expanded

    def _compute_required(self, method: MethodDefinition) -> frozenset[str]:
        required: set[str] = set()
        for rule in self._rules_by_method[method.id]:
            required |= self._expand(references(rule.when))
        if method.calculator is not None:
            required.update(CALCULATOR_INPUTS[method.calculator])

        # A conditional question is reached only through its parents
        pending = list(required)
        while pending:
            condition = self._question_index[pending.pop()].asked_when
            if condition is not None and condition.question not in required:
                required.add(condition.question)
                pending.append(condition.question)
        return frozenset(required)

    @classmethod
    def from_document(cls, document: CatalogDocument) -> QuestionCatalog:
        return cls(document.questions, document.methods, document.rules)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def _build(document: CatalogDocument, source: str) -> QuestionCatalog:
    catalog = QuestionCatalog.from_document(document)
    logger.info(
        "Catalog loaded from %s: %d questions, %d methods, %d rules",
        source,
        len(catalog.questions),
        len(catalog.methods),
        len(catalog.rule_definitions),
    )
    return catalog


def build_default_catalog() -> QuestionCatalog:
    """The WHO MEC catalog shipped with the package."""
    try:
        document = CatalogDocument.model_validate({
            "questions": QUESTION_DEFINITIONS,
            "methods": METHOD_DEFINITIONS,
            "rules": RULE_DEFINITIONS,
        })
    except ValidationError as exc:
        raise RuleEvaluationError(f"Malformed built-in rule tables: {exc}") from exc
    return _build(document, "built-in tables")


def load_catalog(path: Path | None = None) -> QuestionCatalog:
    """Build the default catalog, or load rule tables from a JSON document.

    Raises:
        RuleEvaluationError: the document is malformed or inconsistent.
        FileNotFoundError: `path` does not exist.
    """
    if path is None:
        return build_default_catalog()
    path = Path(path)
    try:
        document = CatalogDocument.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as exc:
        raise RuleEvaluationError(f"Malformed rule tables in {path}: {exc}") from exc
    return _build(document, str(path))


@lru_cache(maxsize=1)
def get_catalog() -> QuestionCatalog:
    """Process-wide catalog, built once from `settings.catalog_path`."""
    return load_catalog(settings.catalog_path)
