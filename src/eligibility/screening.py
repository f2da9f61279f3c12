"""Screening forms — small questionnaires scored with letter categories.

Pure Python, deterministic. Used for sterilization readiness and for the
fertility awareness-based methods. Rules are data (`ScreeningRule`) and
share the predicate interpreter of the WHO MEC engine:
- a rule is evaluated only once every fact it reads is answered
- on each track, the most restrictive category among satisfied effects wins
- no satisfied effect on a track: the form's least restrictive category

Categories are ordered by their declaration order in the form's enum.
"""

from __future__ import annotations

import logging
import string
from collections.abc import Iterable, Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from src.catalog.derived import DerivedFact, resolve_facts
from src.eligibility.predicates import evaluate, references
from src.errors import InvalidAnswer, RuleEvaluationError, UnknownQuestion
from src.profile.validators import validate_answer
from src.schemas.questionnaire import AnswerValue, Question
from src.schemas.screening import (
    Advisory,
    Finding,
    ScreeningOutcome,
    ScreeningRule,
    TrackOutcome,
)

logger = logging.getLogger(__name__)

_FORMATTER = string.Formatter()


def _placeholders(template: str) -> set[str]:
    """Fact ids quoted by a reason template, e.g. {fs-bmi:.1f} -> fs-bmi."""
    try:
        return {field for _, field, _, _ in _FORMATTER.parse(template) if field}
    except ValueError as exc:
        raise RuleEvaluationError(f"malformed template {template!r}: {exc}") from exc


class ScreeningForm:
    """Read-only questions and rule table of one screening.

    Validated once, at construction: every predicate reads a declared
    question or derived fact, every effect names a known track and category,
    and every reason only quotes facts its rule reads.
    """

    def __init__(
        self,
        name: str,
        questions: Iterable[Question],
        rules: Iterable[ScreeningRule],
        categories: type[StrEnum],
        tracks: Iterable[str],
        derived: Mapping[str, DerivedFact] | None = None,
    ) -> None:
        self.name = name
        self._questions: tuple[Question, ...] = tuple(questions)
        self._rules: tuple[ScreeningRule, ...] = tuple(rules)
        self._categories = categories
        self._severity = {member.value: rank for rank, member in enumerate(categories)}
        self._tracks: tuple[str, ...] = tuple(tracks)
        self._derived = MappingProxyType(dict(derived or {}))

        index: dict[str, Question] = {}
        for question in self._questions:
            if question.id in index:
                raise RuleEvaluationError(f"Duplicate question id '{question.id}' in {name}")
            condition = question.asked_when
            if condition is not None and condition.question not in index:
                raise RuleEvaluationError(
                    f"Question '{question.id}' depends on '{condition.question}', "
                    "which must be declared before it"
                )
            index[question.id] = question
        self._index = MappingProxyType(index)

        self._validate_rules()

    # ── Read-only views ────────────────────────────────────────────────

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def rules(self) -> tuple[ScreeningRule, ...]:
        return self._rules

    @property
    def tracks(self) -> tuple[str, ...]:
        return self._tracks

    def get(self, question_id: str) -> Question:
        try:
            return self._index[question_id]
        except KeyError:
            raise UnknownQuestion(question_id) from None

    def is_asked(self, question_id: str, values: Mapping[str, AnswerValue]) -> bool:
        condition = self.get(question_id).asked_when
        if condition is None:
            return True
        parent = condition.question
        return (
            self.is_asked(parent, values)
            and parent in values
            and values[parent] == condition.equals
        )

    def is_complete(self, values: Mapping[str, AnswerValue]) -> bool:
        """True once every question that applies is answered."""
        return all(q.id in values or not self.is_asked(q.id, values) for q in self._questions)

    def pending_questions(self, values: Mapping[str, AnswerValue]) -> tuple[Question, ...]:
        return tuple(
            q for q in self._questions if q.id not in values and self.is_asked(q.id, values)
        )

    # ── Answers ────────────────────────────────────────────────────────

    def validate(self, answers: Mapping[str, object]) -> dict[str, AnswerValue]:
        """Validate raw answers, parents before follow-ups.

        Raises:
            UnknownQuestion: an answer names a question the form does not ask.
            InvalidAnswer: a value violates its question's constraints, or the
                question does not apply given the other answers.
        """
        for question_id in answers:
            if question_id not in self._index:
                raise UnknownQuestion(question_id)

        values: dict[str, AnswerValue] = {}
        for question in self._questions:
            if question.id not in answers:
                continue
            raw = answers[question.id]
            if not self.is_asked(question.id, values):
                raise InvalidAnswer(question.id, raw, "question does not apply to earlier answers")
            values[question.id] = validate_answer(question, raw)
        return values

    # ── Evaluation ─────────────────────────────────────────────────────

    def evaluate(self, values: Mapping[str, AnswerValue]) -> ScreeningOutcome:
        """Score validated answers on every track."""
        facts = resolve_facts(values, self._derived)
        findings: dict[str, list[Finding]] = {track: [] for track in self._tracks}
        advisories: list[Advisory] = []

        for rule in self._rules:
            if not references(rule.when) <= facts.keys():
                continue  # not enough is known yet
            if not evaluate(rule.when, facts, rule.id):
                continue
            for effect in rule.effects:
                findings[effect.track].append(Finding(
                    rule_id=rule.id,
                    category=effect.category,
                    reason=effect.reason.format_map(facts),
                ))
            advisories.extend(
                Advisory(rule_id=rule.id, message=alert.format_map(facts)) for alert in rule.alerts
            )

        outcome = ScreeningOutcome(
            tracks=tuple(
                TrackOutcome(
                    track=track,
                    category=self.most_restrictive(f.category for f in findings[track]),
                    findings=tuple(findings[track]),
                )
                for track in self._tracks
            ),
            advisories=tuple(advisories),
            complete=self.is_complete(values),
        )
        logger.debug(
            "Screened %s: %s complete=%s",
            self.name,
            ", ".join(f"{t.track}={t.category}" for t in outcome.tracks),
            outcome.complete,
        )
        return outcome

    def most_restrictive(self, categories: Iterable[str]) -> StrEnum:
        """Highest-ranked category; the least restrictive one when empty."""
        least = next(iter(self._categories))
        best = max(categories, key=self._severity.__getitem__, default=least)
        return self._categories(best)

    # ── Construction helpers ───────────────────────────────────────────

    def _is_known_fact(self, name: str) -> bool:
        return name in self._index or name in self._derived

    def _validate_rules(self) -> None:
        seen: set[str] = set()
        for rule in self._rules:
            if rule.id in seen:
                raise RuleEvaluationError("duplicate rule id", rule.id)
            seen.add(rule.id)

            reads = references(rule.when)
            for name in reads:
                if not self._is_known_fact(name):
                    raise RuleEvaluationError(f"references unknown question '{name}'", rule.id)

            for effect in rule.effects:
                if effect.track not in self._tracks:
                    raise RuleEvaluationError(f"unknown track '{effect.track}'", rule.id)
                if effect.category not in self._severity:
                    raise RuleEvaluationError(
                        f"category '{effect.category}' is not one of "
                        f"{', '.join(self._severity)}",
                        rule.id,
                    )

            for template in (*(e.reason for e in rule.effects), *rule.alerts):
                quoted = _placeholders(template) - reads
                if quoted:
                    raise RuleEvaluationError(
                        f"text quotes {', '.join(sorted(quoted))}, which the rule does not read",
                        rule.id,
                    )


def build_form(
    name: str,
    questions: Iterable[dict[str, Any]],
    rules: Iterable[dict[str, Any]],
    categories: type[StrEnum],
    tracks: Iterable[str],
    derived: Mapping[str, DerivedFact] | None = None,
) -> ScreeningForm:
    """Validate authored tables into a `ScreeningForm`.

    Raises:
        RuleEvaluationError: the tables are malformed or inconsistent.
    """
    try:
        parsed_questions = [Question.model_validate(q) for q in questions]
        parsed_rules = [ScreeningRule.model_validate(r) for r in rules]
    except ValidationError as exc:
        raise RuleEvaluationError(f"Malformed {name} tables: {exc}") from exc
    form = ScreeningForm(name, parsed_questions, parsed_rules, categories, tracks, derived)
    logger.info(
        "Screening form %s loaded: %d questions, %d rules",
        name,
        len(form.questions),
        len(form.rules),
    )
    return form
