import pytest
from pytest import MonkeyPatch

from fileshortener.registry import clear_registries
from fileshortener.utils.constants import APP_ENV_ENV, PROJECT_ROOT_ENV, LINKS_FILE_ENV, DEBUG_ENV, LOG_LEVEL_ENV


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: MonkeyPatch):
    """Keep tests independent from the developer's environment and from each other."""
    for name in (APP_ENV_ENV, PROJECT_ROOT_ENV, LINKS_FILE_ENV, DEBUG_ENV, LOG_LEVEL_ENV):
        monkeypatch.delenv(name, raising=False)
    clear_registries()
    yield
    clear_registries()
