import pytest

from perfectfit import main
from perfectfit.config import settings


@pytest.fixture(autouse=True)
def isolated_state(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "storage_dir", str(tmp_path))
    monkeypatch.setattr(settings, "mock_seed", None)
    main._buckets.clear()
    yield
    main._buckets.clear()
