"""Command-line entry point — evaluates a saved questionnaire session.

Usage:
    python -m src.main answers.json [--catalog rules.json] [--lmp 2026-03-01]
    python -m src.main answers.json --form male-sterilization

`answers.json` holds a ProfileStore snapshot (question id → value). The
recommendation envelope, or the screening result for `--form`, is printed
to stdout as JSON; logs go to stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

import structlog

from src.catalog import get_catalog, load_catalog
from src.config import settings
from src.eligibility import (
    build_recommendations,
    evaluate_fab,
    evaluate_female_sterilization,
    evaluate_male_sterilization,
)
from src.errors import InvalidAnswer, RuleEvaluationError, UnknownQuestion
from src.profile import ProfileStore

logger = logging.getLogger(__name__)

EXIT_INVALID_INPUT = 2
EXIT_BAD_CATALOG = 3

MEC = "mec"
SCREENINGS = {
    "female-sterilization": evaluate_female_sterilization,
    "male-sterilization": evaluate_male_sterilization,
    "fab": evaluate_fab,
}


# ── Logging setup ────────────────────────────────────────────────────


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        stream=sys.stderr,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


# ── CLI ──────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.main",
        description="Evaluate contraceptive eligibility for a saved questionnaire session.",
    )
    parser.add_argument("answers", type=Path, help="JSON snapshot of answers")
    parser.add_argument(
        "--form",
        choices=(MEC, *SCREENINGS),
        default=MEC,
        help="questionnaire the answers belong to (default: WHO MEC eligibility)",
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="JSON rule tables (defaults to CATALOG_PATH or the built-in WHO MEC tables)",
    )
    parser.add_argument(
        "--lmp",
        type=date.fromisoformat,
        default=None,
        help="first day of the last menstrual period (YYYY-MM-DD)",
    )
    return parser


def _read_answers(path: Path) -> dict[str, object] | None:
    """Load a JSON answers object; None (logged) when it cannot be used."""
    try:
        with open(path, encoding="utf-8") as f:
            snapshot = json.load(f)
    except json.JSONDecodeError as exc:
        logger.error("Answers file is not valid JSON: %s", exc.msg)
        return None
    except UnicodeDecodeError:
        logger.error("Answers file is not UTF-8 text: %s", path)
        return None
    except OSError as exc:
        logger.error("Answers file could not be read: %s", exc)
        return None
    if not isinstance(snapshot, dict):
        logger.error("Answers file must hold a JSON object, got %s", type(snapshot).__name__)
        return None
    return snapshot


def _run_screening(form: str, path: Path) -> int:
    snapshot = _read_answers(path)
    if snapshot is None:
        return EXIT_INVALID_INPUT
    try:
        result = SCREENINGS[form](snapshot)
    except (InvalidAnswer, UnknownQuestion) as exc:
        logger.error("Session rejected at question %s", exc.question_id)
        logger.debug("Session rejected: %s", exc)
        return EXIT_INVALID_INPUT
    except RuleEvaluationError as exc:
        logger.error("Screening tables rejected: %s", exc)
        return EXIT_BAD_CATALOG

    logger.info(
        "Screened %d answers with %s (env=%s, complete=%s)",
        len(snapshot),
        form,
        settings.environment,
        result.complete,
    )
    print(result.model_dump_json(indent=2))
    return 0


def run(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = build_parser().parse_args(argv)
    if args.form != MEC:
        return _run_screening(args.form, args.answers)

    try:
        catalog = load_catalog(args.catalog) if args.catalog else get_catalog()
    except RuleEvaluationError as exc:
        logger.error("Rule tables rejected: %s", exc)
        return EXIT_BAD_CATALOG
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Rule tables could not be read: %s", exc)
        return EXIT_BAD_CATALOG

    snapshot = _read_answers(args.answers)
    if snapshot is None:
        return EXIT_INVALID_INPUT

    try:
        store = ProfileStore.restore(catalog, snapshot)
    except (InvalidAnswer, UnknownQuestion) as exc:
        logger.error("Session rejected at question %s", exc.question_id)
        logger.debug("Session rejected: %s", exc)
        return EXIT_INVALID_INPUT

    envelope = build_recommendations(catalog, store.freeze(), lmp_date=args.lmp)
    logger.info(
        "Evaluated %d answers (env=%s, complete=%s)",
        len(store),
        settings.environment,
        envelope.complete,
    )
    print(envelope.model_dump_json(indent=2))
    return 0


def main() -> None:
    configure_logging()
    sys.exit(run())


if __name__ == "__main__":
    main()
