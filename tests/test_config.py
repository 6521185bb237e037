import logging
import sys
from pathlib import Path

import pytest
from flask import Flask

import tabsettle
from tabsettle import app as app_module
from tabsettle.config import Settings
from tabsettle.log import configure_logging


def test_cors_origins_from_comma_separated_string():
    settings = Settings(CORS_ORIGINS="http://localhost:3000, https://tab.example.com,")

    assert settings.CORS_ORIGINS == ["http://localhost:3000", "https://tab.example.com"]


def test_cors_wildcard_left_alone():
    assert Settings(CORS_ORIGINS="*").CORS_ORIGINS == "*"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.PORT == 8080
    assert settings.LOG_LEVEL == "DEBUG"


def test_configure_logging_quiets_werkzeug():
    configure_logging("INFO")

    assert logging.getLogger().level == logging.INFO
    assert logging.getLogger("werkzeug").level == logging.WARNING


@pytest.mark.skipif(sys.version_info < (3, 10), reason="needs sys.stdlib_module_names")
def test_no_module_hides_the_standard_library():
    # `python tabsettle/app.py` puts the package directory first on sys.path
    package_dir = Path(tabsettle.__file__).parent
    modules = {path.stem for path in package_dir.glob("*.py")}

    assert not modules & set(sys.stdlib_module_names)


def test_main_configures_logging_and_runs_app(monkeypatch):
    calls = {}
    monkeypatch.setattr(app_module, "configure_logging", lambda level: calls.setdefault("level", level))
    monkeypatch.setattr(Flask, "run", lambda self, **kwargs: calls.setdefault("run", (self, kwargs)))

    app_module.main()

    assert calls["level"] == app_module.default_settings.LOG_LEVEL
    app, kwargs = calls["run"]
    assert isinstance(app, Flask)
    assert kwargs == {
        "host": app_module.default_settings.HOST,
        "port": app_module.default_settings.PORT,
        "debug": app_module.default_settings.DEBUG,
    }
