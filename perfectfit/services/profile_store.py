import json
import os
import time
from typing import Any, Dict, Optional

import structlog

from ..config import settings


logger = structlog.get_logger("perfectfit.store")

STORE_FILENAME = "perfectfit_store.json"

PROFILE_KEY = "user_measurements"
GENDER_KEY = "user_gender"
LAST_RESULT_KEY = "last_result"


class KeyValueStore:
    """Flat JSON key-value file. Every call reads or rewrites the whole file."""

    def __init__(self, path: str) -> None:
        self.path = path

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError:
                logger.warning("store_corrupt", path=self.path)
                return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, Any]) -> None:
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        tmp_path = self.path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, self.path)

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)


def _now() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


class ProfileStore:
    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv

    def load_profile(self) -> Optional[Dict[str, Any]]:
        return self.kv.get(PROFILE_KEY)

    def save_profile(self, measurements: Dict[str, Any], gender: str | None = None) -> Dict[str, Any]:
        profile = dict(measurements)
        profile["gender"] = gender or self.kv.get(GENDER_KEY) or "male"
        profile["timestamp"] = _now()
        self.kv.set(PROFILE_KEY, profile)
        self.kv.set(GENDER_KEY, profile["gender"])
        logger.info("profile_saved", fields=sorted(measurements))
        return profile

    def clear_profile(self) -> None:
        self.kv.delete(PROFILE_KEY)
        self.kv.delete(GENDER_KEY)

    def save_last_result(self, result: Dict[str, Any]) -> None:
        self.kv.set(LAST_RESULT_KEY, {"result": result, "timestamp": _now()})

    def last_result(self) -> Optional[Dict[str, Any]]:
        return self.kv.get(LAST_RESULT_KEY)


def get_profile_store() -> ProfileStore:
    return ProfileStore(KeyValueStore(os.path.join(settings.storage_dir, STORE_FILENAME)))
