"""Pydantic schemas for questions, answers, and the frozen health profile.

Pure data classes — no evaluation logic. Questions are defined once by the
catalog; answers are produced by the profile store.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator

from src.models.enums import AnswerKind

# Primitive answer values. bool comes first so True/False never coerce to int.
AnswerValue = bool | int | float | str


class AskedWhen(BaseModel):
    """The question only applies when `question` was answered with `equals`."""

    model_config = ConfigDict(frozen=True)

    question: str
    equals: AnswerValue


class Question(BaseModel):
    """A single questionnaire item and its validity constraints."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    kind: AnswerKind
    section: str = "general"

    # Numeric constraints
    minimum: float | None = None
    maximum: float | None = None
    integer: bool = False
    unit: str | None = None

    # Choice constraints
    options: tuple[str, ...] = ()

    asked_when: AskedWhen | None = None

    @model_validator(mode="after")
    def _check_constraints(self) -> Question:
        if self.kind == AnswerKind.CHOICE and not self.options:
            msg = f"Choice question '{self.id}' declares no options"
            raise ValueError(msg)
        if self.kind != AnswerKind.CHOICE and self.options:
            msg = f"Only choice questions may declare options ('{self.id}')"
            raise ValueError(msg)
        if (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        ):
            msg = f"Question '{self.id}': minimum {self.minimum} exceeds maximum {self.maximum}"
            raise ValueError(msg)
        return self


class Answer(BaseModel):
    """A validated answer to one question."""

    model_config = ConfigDict(frozen=True)

    question_id: str
    value: AnswerValue


class HealthProfile(BaseModel):
    """Snapshot of a questionnaire session submitted for evaluation.

    Answers keep the order in which their questions were first answered.
    `complete` is true iff every applicable question required by at least
    one method is answered.
    """

    model_config = ConfigDict(frozen=True)

    answers: tuple[Answer, ...] = ()
    complete: bool = False

    def get(self, question_id: str) -> Answer | None:
        for answer in self.answers:
            if answer.question_id == question_id:
                return answer
        return None

    def values(self) -> dict[str, AnswerValue]:
        """Return a fresh question id → value mapping."""
        return {a.question_id: a.value for a in self.answers}

    def __contains__(self, question_id: object) -> bool:
        return any(a.question_id == question_id for a in self.answers)
