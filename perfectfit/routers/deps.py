import random
from typing import Any, Dict, Optional

from ..config import settings
from ..errors import MissingProfile
from ..services.profile_store import ProfileStore


def resolve_unit(unit: Optional[str]) -> str:
    return unit or settings.default_unit


def user_measurements_or_profile(measurements: Optional[Dict[str, Any]], store: ProfileStore) -> Dict[str, Any]:
    if measurements:
        return measurements
    profile = store.load_profile()
    if not profile:
        raise MissingProfile()
    return profile


def mock_rng() -> random.Random | None:
    # A fresh generator per request so a pinned seed gives repeatable responses
    return random.Random(settings.mock_seed) if settings.mock_seed is not None else None
