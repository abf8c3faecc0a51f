import pytest

from hrsw.config import ENV_CLOCK_SOURCE, ENV_REGRESSION_POLICY, get_default_config


@pytest.fixture(autouse=True)
def clean_default_config(monkeypatch):
    monkeypatch.delenv(ENV_CLOCK_SOURCE, raising=False)
    monkeypatch.delenv(ENV_REGRESSION_POLICY, raising=False)
    get_default_config.cache_clear()
    yield
    get_default_config.cache_clear()
