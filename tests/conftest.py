import pytest

from Calculus import config_manager


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config_manager at a fresh, not yet existing config.json."""
    config_file = tmp_path / "config.json"
    monkeypatch.setattr(config_manager, "config_json", config_file)
    monkeypatch.setattr(config_manager, "ui_strings", tmp_path / "ui_strings.json")
    return config_file
