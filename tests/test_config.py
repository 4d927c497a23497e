from __future__ import annotations

import pytest

from app.config import AppConfig


def test_defaults(monkeypatch):
    for name in ("GARDENGUARD_PAGE_SIZE", "GARDENGUARD_CONDITION_SORT_MODE", "GARDENGUARD_MAX_UPLOAD_MB"):
        monkeypatch.delenv(name, raising=False)
    config = AppConfig()
    assert config.page_size == 10
    assert config.condition_sort_mode == "display_order"
    assert config.as_flask_config()["MAX_CONTENT_LENGTH"] == 16 * 1024 * 1024


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("GARDENGUARD_PAGE_SIZE", "25")
    monkeypatch.setenv("GARDENGUARD_CONDITION_SORT_MODE", "plant_identifier")
    monkeypatch.setenv("GARDENGUARD_SEED_CATALOG", "false")
    config = AppConfig()
    assert config.page_size == 25
    assert config.condition_sort_mode == "plant_identifier"
    assert config.seed_catalog is False


def test_invalid_sort_mode_rejected(monkeypatch):
    monkeypatch.setenv("GARDENGUARD_CONDITION_SORT_MODE", "random")
    with pytest.raises(ValueError):
        AppConfig()


def test_default_secret_rejected_in_production(monkeypatch):
    monkeypatch.setenv("GARDENGUARD_ENV", "production")
    monkeypatch.delenv("GARDENGUARD_SECRET_KEY", raising=False)
    with pytest.raises(RuntimeError):
        AppConfig()


@pytest.mark.parametrize("overrides", [{"page_size": 0}, {"condition_sort_mode": "random"}])
def test_create_app_validates_overrides(tmp_path, overrides):
    from app import create_app

    overrides.update(database_path=str(tmp_path / "test.db"), media_dir=str(tmp_path / "media"))
    with pytest.raises(ValueError):
        create_app(overrides)


def test_create_app_applies_overrides(make_app):
    app = make_app(page_size=5, condition_sort_mode="plant_identifier")
    assert app.config["PAGE_SIZE"] == 5
    assert app.config["CONTAINER"].report_service.page_size == 5
    assert str(app.config["CONTAINER"].report_service.condition_sort_mode) == "plant_identifier"
