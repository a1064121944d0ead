"""Tests for environment-driven settings and log levels."""

import logging

import pytest
import structlog
from dessertshop.config import get_settings
from dessertshop.errors import ConfigurationError
from dessertshop.shared.money import Currency
from dessertshop.utils.logging import configure_logging, get_log_level


def test_defaults():
    settings = get_settings()
    assert settings.currency == Currency.USD
    assert settings.tax_rate == 0
    assert settings.environment == "test"


def test_reads_currency_and_tax_rate(monkeypatch):
    monkeypatch.setenv("DESSERTSHOP_CURRENCY", "eur")
    monkeypatch.setenv("DESSERTSHOP_TAX_RATE", "0.075")
    settings = get_settings()
    assert settings.currency == Currency.EUR
    assert settings.tax_rate == 0.075


@pytest.mark.parametrize(
    "name, value",
    [
        ("DESSERTSHOP_CURRENCY", "JPY"),
        ("DESSERTSHOP_TAX_RATE", "ten percent"),
        ("DESSERTSHOP_TAX_RATE", "-0.1"),
    ],
    ids=["unsupported_currency", "non_numeric_tax", "negative_tax"],
)
def test_invalid_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationError) as exc:
        get_settings()
    assert name in exc.value.messages


@pytest.mark.parametrize(
    "environment, expected",
    [("production", "INFO"), ("staging", "INFO"), ("development", "DEBUG"), ("test", "WARNING")],
)
def test_log_level_follows_environment(monkeypatch, environment, expected):
    monkeypatch.setenv("DESSERTSHOP_ENV", environment)
    assert get_log_level() == expected


def test_log_level_override(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "error")
    assert get_log_level() == "ERROR"


def test_configure_logging(monkeypatch):
    monkeypatch.setenv("DESSERTSHOP_ENV", "production")
    root_logger = logging.getLogger()
    saved_level, saved_handlers = root_logger.level, list(root_logger.handlers)

    configure_logging()
    try:
        assert root_logger.level == logging.INFO
        assert structlog.is_configured()
        assert isinstance(structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer)
    finally:
        structlog.reset_defaults()
        root_logger.setLevel(saved_level)
        root_logger.handlers = saved_handlers
