import pytest

from calc_engine import Calculator, Engine


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the settings file at a temporary location for every test."""
    path = tmp_path / "config.json"
    monkeypatch.setenv("CALC_ENGINE_CONFIG", str(path))
    monkeypatch.setattr(Calculator, "_default_engine", None)
    return path


@pytest.fixture
def engine():
    return Engine()


@pytest.fixture
def radians_engine():
    return Engine(radians=True)
