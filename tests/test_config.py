"""Tests for app configuration and logging setup."""

import logging

from mountain_taxes import config


def test_configure_logging_reads_env(monkeypatch):
    monkeypatch.setenv(config.LOG_LEVEL_ENV, "debug")
    assert config.configure_logging() == logging.DEBUG
    assert logging.getLogger("mountain_taxes").level == logging.DEBUG


def test_configure_logging_unknown_level_falls_back():
    assert config.configure_logging("chatty") == logging.INFO


def test_default_table_is_packaged():
    assert config.TAX_TABLE_PATH.name == "state_tax_tables.json"
    assert config.TAX_TABLE_PATH.exists()
