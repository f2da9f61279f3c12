"""Question catalog — WHO MEC questions, methods, and rule tables."""

from src.catalog.catalog import (
    QuestionCatalog,
    build_default_catalog,
    get_catalog,
    load_catalog,
)
from src.catalog.derived import BMI, DERIVED_FACTS, IRREGULAR_PERIODS, body_mass_index

__all__ = [
    "QuestionCatalog",
    "build_default_catalog",
    "get_catalog",
    "load_catalog",
    "BMI",
    "IRREGULAR_PERIODS",
    "DERIVED_FACTS",
    "body_mass_index",
]
