import os
from pydantic import BaseModel


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


class Settings(BaseModel):
    api_key: str = os.getenv("API_KEY", "change-me")

    # Unit assumed for measurement records that don't declare one ("inch" or "cm")
    default_unit: str = os.getenv("DEFAULT_UNIT", "inch")

    # Flat key-value store for the measurement profile and last verdict
    storage_dir: str = os.getenv("STORAGE_DIR", os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "storage")))

    # Pins the mock garment source and brand size jitter; unset = nondeterministic
    mock_seed: int | None = _optional_int("MOCK_SEED")

    # JWT
    jwt_secret: str = os.getenv("JWT_SECRET", "dev-secret")
    jwt_audience: str | None = os.getenv("JWT_AUDIENCE")
    jwt_issuer: str | None = os.getenv("JWT_ISSUER")
    jwt_ttl_seconds: int = int(os.getenv("JWT_TTL_SECONDS", "3600"))

    # Rate limit (token bucket)
    rate_limit_per_min: int = int(os.getenv("RATE_LIMIT_PER_MIN", "60"))
    rate_limit_burst: int = int(os.getenv("RATE_LIMIT_BURST", "30"))


settings = Settings()
