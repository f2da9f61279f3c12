"""Exceptions raised by the catalog, profile store, and rule engine.

Only `InvalidAnswer` is user-correctable. The others signal a mismatch
between the rule tables and the question catalog and must stop the
engine from starting.
"""

from __future__ import annotations


class EligibilityError(Exception):
    """Base class for all eligibility engine errors."""


class InvalidAnswer(EligibilityError, ValueError):
    """Raised when a value violates the constraints of its question."""

    def __init__(self, question_id: str, value: object, reason: str) -> None:
        super().__init__(f"Invalid answer for '{question_id}': {reason}")
        self.question_id = question_id
        self.value = value
        self.reason = reason


class UnknownQuestion(EligibilityError, LookupError):
    """Raised when a question id is not declared in the catalog."""

    def __init__(self, question_id: str) -> None:
        super().__init__(f"Unknown question: '{question_id}'")
        self.question_id = question_id


class UnknownMethod(EligibilityError, LookupError):
    """Raised when a method id is not declared in the catalog."""

    def __init__(self, method_id: str) -> None:
        super().__init__(f"Unknown method: '{method_id}'")
        self.method_id = method_id


class RuleEvaluationError(EligibilityError):
    """Raised on malformed rule data (bad reference, bad comparison value)."""

    def __init__(self, message: str, rule_id: str | None = None) -> None:
        super().__init__(f"Rule '{rule_id}': {message}" if rule_id else message)
        self.rule_id = rule_id
