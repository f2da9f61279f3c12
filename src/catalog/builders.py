"""Predicate builders for the rule tables.

Each helper returns the plain dict form of a predicate node, validated
into `src.schemas.rules` models when the tables are loaded.
"""

from __future__ import annotations

from typing import Any

Node = dict[str, Any]


def compare(question: str, op: str, value: Any) -> Node:
    return {"kind": "compare", "question": question, "op": op, "value": value}


def equals(question: str, value: Any = True) -> Node:
    return compare(question, "eq", value)


def all_of(*terms: Node) -> Node:
    return {"kind": "all", "terms": list(terms)}


def any_of(*terms: Node) -> Node:
    return {"kind": "any", "terms": list(terms)}


def between(question: str, low: float, high: float) -> Node:
    """Inclusive range check."""
    return all_of(compare(question, "ge", low), compare(question, "le", high))


# ── Questions ──────────────────────────────────────────────────────────────


def yes_no(qid: str, text: str, section: str, **extra: Any) -> dict[str, Any]:
    return {"id": qid, "text": text, "kind": "boolean", "section": section, **extra}


def numeric(
    qid: str,
    text: str,
    section: str,
    low: float,
    high: float,
    unit: str,
    **extra: Any,
) -> dict[str, Any]:
    return {
        "id": qid,
        "text": text,
        "kind": "numeric",
        "section": section,
        "minimum": low,
        "maximum": high,
        "unit": unit,
        **extra,
    }


def choice(qid: str, text: str, section: str, options: tuple[str, ...], **extra: Any) -> dict[str, Any]:
    return {"id": qid, "text": text, "kind": "choice", "section": section, "options": list(options), **extra}


def when(question: str, equals: Any) -> dict[str, Any]:
    return {"question": question, "equals": equals}
