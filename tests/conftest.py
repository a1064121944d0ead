import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Select the configuration environment so that settings and log levels
    resolve the same way they will for the code under test.
    """
    os.environ["DESSERTSHOP_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.path)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    """Start every test from default shop settings."""
    for name in ("DESSERTSHOP_CURRENCY", "DESSERTSHOP_TAX_RATE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
