"""Tests for environment configuration."""

import pytest


def test_string_default_and_required(helper_config, monkeypatch):
    monkeypatch.delenv("FITPLAN_TEST_KEY", raising=False)
    assert helper_config.get_string_val("fitplan_test_key", default="x") == "x"
    with pytest.raises(ValueError, match="FITPLAN_TEST_KEY"):
        helper_config.get_string_val("fitplan_test_key")


def test_empty_string_counts_as_unset(helper_config, monkeypatch):
    monkeypatch.setenv("FITPLAN_TEST_KEY", "")
    assert helper_config.get_optional_string_val("FITPLAN_TEST_KEY") is None


def test_number_parsing(helper_config, monkeypatch):
    monkeypatch.setenv("FITPLAN_TEST_NUM", "5")
    assert helper_config.get_number_val("FITPLAN_TEST_NUM") == 5
    monkeypatch.setenv("FITPLAN_TEST_NUM", "2.5")
    assert helper_config.get_number_val("FITPLAN_TEST_NUM") == 2.5
    monkeypatch.setenv("FITPLAN_TEST_NUM", "five")
    with pytest.raises(ValueError, match="not a valid number"):
        helper_config.get_number_val("FITPLAN_TEST_NUM")


def test_bool_parsing(helper_config, monkeypatch):
    monkeypatch.setenv("FITPLAN_TEST_BOOL", "Yes")
    assert helper_config.get_bool_val("FITPLAN_TEST_BOOL") is True
    monkeypatch.setenv("FITPLAN_TEST_BOOL", "off")
    assert helper_config.get_bool_val("FITPLAN_TEST_BOOL") is False
    monkeypatch.delenv("FITPLAN_TEST_BOOL")
    assert helper_config.get_bool_val("FITPLAN_TEST_BOOL", default=True) is True
