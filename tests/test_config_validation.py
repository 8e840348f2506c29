"""Tests for settings loading and validation."""

from __future__ import annotations

import json
from typing import Dict

import pytest

from config_validation import (
    DEFAULT_SETTINGS,
    ConfigurationError,
    load_settings,
    resolve_log_level,
    validate_configuration,
)


def build_settings(**overrides: Dict[str, object]):
    settings = dict(DEFAULT_SETTINGS)
    settings.update(overrides)
    return settings


def validate_single_issue(settings, field):
    issues = validate_configuration(settings)
    assert issues, "Expected at least one validation issue"
    assert issues[0].field == field
    return issues[0]


def test_default_configuration_passes():
    assert validate_configuration(build_settings()) == []


def test_flags_must_be_boolean():
    issue = validate_single_issue(build_settings(required="yes"), 'required')
    assert 'true or false' in issue.message


def test_error_color_must_be_hex():
    issue = validate_single_issue(build_settings(error_color='pink'), 'error_color')
    assert '#ffcccc' in issue.message


def test_log_level_must_be_known():
    issue = validate_single_issue(build_settings(log_level='VERBOSE'), 'log_level')
    assert 'DEBUG' in issue.message


def test_unknown_setting_reported():
    issue = validate_single_issue(build_settings(colour='#ffffff'), 'colour')
    assert issue.title == "Unknown Setting"


def test_load_settings_merges_file_over_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({'required': True}), encoding='utf-8')

    settings = load_settings(path)

    assert settings['required'] is True
    assert settings['error_color'] == DEFAULT_SETTINGS['error_color']


def test_load_settings_rejects_non_object(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2]", encoding='utf-8')

    with pytest.raises(ConfigurationError):
        load_settings(path)


def test_resolve_log_level_supports_trace():
    assert resolve_log_level(build_settings(log_level='trace')) == 5
    assert resolve_log_level(build_settings()) == 20
