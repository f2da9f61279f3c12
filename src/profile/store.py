"""Profile store — accumulates validated answers for one questionnaire session.

Each session owns its own store; the catalog it reads is shared and
read-only. Rejected answers leave the store unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from src.errors import InvalidAnswer, UnknownQuestion
from src.profile.validators import validate_answer
from src.schemas.questionnaire import Answer, AnswerValue, HealthProfile, Question

if TYPE_CHECKING:
    from src.catalog.catalog import QuestionCatalog

logger = logging.getLogger(__name__)


class ProfileStore:
    """Mutable answer set for one session.

    Usage:
        store = ProfileStore(catalog)
        store.set_answer("age", 34)
        profile = store.freeze()
    """

    def __init__(self, catalog: QuestionCatalog) -> None:
        self._catalog = catalog
        self._values: dict[str, AnswerValue] = {}

    @property
    def catalog(self) -> QuestionCatalog:
        return self._catalog

    # ── Answers ────────────────────────────────────────────────────────

    def set_answer(self, question_id: str, value: object) -> Answer:
        """Validate and record an answer, replacing any earlier one.

        Changing an answer drops answers to follow-up questions that no
        longer apply.

        Raises:
            UnknownQuestion: the catalog does not declare `question_id`.
            InvalidAnswer: the value violates the question's constraints, or
                the question does not apply given earlier answers.
        """
        question = self._catalog.get(question_id)
        try:
            if not self._catalog.is_asked(question_id, self._values):
                raise InvalidAnswer(question_id, value, "question does not apply to earlier answers")
            normalized = validate_answer(question, value)
        except InvalidAnswer as exc:
            # Reasons may quote the value; keep health data out of WARNING
            logger.warning("Rejected answer for %s", question_id)
            logger.debug("Rejection reason for %s: %s", question_id, exc.reason)
            raise

        self._values[question_id] = normalized
        logger.debug("Answer recorded: %s=%r", question_id, normalized)
        self._drop_unreachable()
        return Answer(question_id=question_id, value=normalized)

    def clear_answer(self, question_id: str) -> None:
        """Remove an answer, and the answers to its follow-up questions."""
        self._catalog.get(question_id)
        if self._values.pop(question_id, None) is not None:
            logger.debug("Answer cleared: %s", question_id)
            self._drop_unreachable()

    def get_answer(self, question_id: str) -> Answer | None:
        if question_id not in self._values:
            return None
        return Answer(question_id=question_id, value=self._values[question_id])

    @property
    def answers(self) -> tuple[Answer, ...]:
        """Answers in the order their questions were first answered."""
        return tuple(Answer(question_id=q, value=v) for q, v in self._values.items())

    def values(self) -> dict[str, AnswerValue]:
        return dict(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def _drop_unreachable(self) -> None:
        while True:
            stale = [q for q in self._values if not self._catalog.is_asked(q, self._values)]
            if not stale:
                return
            for question_id in stale:
                del self._values[question_id]
                logger.debug("Answer dropped, question no longer applies: %s", question_id)

    # ── Completion ─────────────────────────────────────────────────────

    def is_complete(self, method_id: str) -> bool:
        """True iff every applicable question the method depends on is answered."""
        return self._catalog.is_complete_for(method_id, self._values)

    def is_fully_complete(self) -> bool:
        return self._catalog.is_fully_complete(self._values)

    def pending_questions(self, method_id: str | None = None) -> tuple[Question, ...]:
        """Applicable, unanswered questions in catalog order."""
        return self._catalog.pending_questions(self._values, method_id)

    # ── Snapshots ──────────────────────────────────────────────────────

    def freeze(self) -> HealthProfile:
        """Immutable snapshot for evaluation."""
        return HealthProfile(answers=self.answers, complete=self.is_fully_complete())

    def snapshot(self) -> dict[str, AnswerValue]:
        """Primitive question id → value mapping, suitable for JSON."""
        return dict(self._values)

    @classmethod
    def restore(cls, catalog: QuestionCatalog, mapping: Mapping[str, object]) -> ProfileStore:
        """Rebuild a store from `snapshot()` output, re-validating every value.

        Answers are replayed in catalog order so that follow-up questions
        always come after the answers they depend on.
        """
        for question_id in mapping:
            if not catalog.has_question(question_id):
                raise UnknownQuestion(question_id)

        store = cls(catalog)
        for question in catalog.questions:
            if question.id in mapping:
                store.set_answer(question.id, mapping[question.id])
        return store
