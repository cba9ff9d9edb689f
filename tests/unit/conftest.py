import pytest

from circbuf.config_manager.config import _ENV_MAP
from circbuf.store import ListStore, NumpyStore


@pytest.fixture(autouse=True)
def clean_circbuf_env(monkeypatch):
    """Fixture to keep CIRCBUF_* variables from the caller's shell out of tests."""
    for env_var_name in _ENV_MAP.values():
        monkeypatch.delenv(env_var_name, raising=False)


@pytest.fixture(
    params=["list", "numpy-object", "numpy-int64"],
)
def store_factory(request):
    """Fixture returning a callable that builds an empty store of a given size."""
    if request.param == "list":
        return ListStore
    if request.param == "numpy-object":
        return NumpyStore
    return lambda capacity: NumpyStore(capacity, dtype="int64")
