import pytest

from yapmesh import config


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep a developer's own settings file out of the test run."""
    monkeypatch.delenv(config.YAPMESH_CONFIG, raising=False)
    monkeypatch.setattr(config, 'user_config_path', lambda: tmp_path / 'no-such-config.yaml')
    config.clear_cache()
    yield
    config.clear_cache()
