import pytest

from tests.helpers import make_registry

from jsonhelpers.bootstrap.config.settings import JsonHelpersSettings
from jsonhelpers.bootstrap.deps import get_settings
from jsonhelpers.core.helpers.utils import setup_logging
from jsonhelpers.core.registry import TypeRegistry


@pytest.fixture(scope="session", autouse=True)
def logging_setup():
    setup_logging("DEBUG")


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in ("ENCODING", "INDENT", "TYPE_KEY", "TYPE_NAME_HANDLING", "ENSURE_ASCII"):
        monkeypatch.delenv(f"JSONHELPERS_{name}", raising=False)

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def registry() -> TypeRegistry:
    return make_registry()


@pytest.fixture
def settings() -> JsonHelpersSettings:
    return JsonHelpersSettings()
