"""Profile store — validated answer accumulation per session."""

from src.profile.store import ProfileStore
from src.profile.validators import validate_answer

__all__ = ["ProfileStore", "validate_answer"]
