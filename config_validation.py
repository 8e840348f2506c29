"""Settings loading and validation for OctetField widgets."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from logger import LogLevel

DEFAULT_SETTINGS: Dict[str, Any] = {
    'required': False,
    'auto_advance': True,
    'error_color': '#ffcccc',
    'log_level': 'INFO',
}

LOG_LEVELS = tuple(level.name for level in LogLevel)


@dataclass(frozen=True)
class ValidationIssue:
    """Represents a configuration validation problem."""

    field: str
    title: str
    message: str


class ConfigurationError(Exception):
    """Raised when a settings file cannot be read or parsed."""


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """Return the defaults overlaid with the JSON object stored at ``path``."""

    settings = dict(DEFAULT_SETTINGS)
    if path is None:
        return settings
    try:
        payload = json.loads(Path(path).read_text(encoding='utf-8'))
    except OSError as exc:
        raise ConfigurationError(f"Cannot read settings file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Settings file {path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigurationError(f"Settings file {path} must contain a JSON object")
    settings.update(payload)
    return settings


def validate_configuration(settings: Dict[str, Any]) -> List[ValidationIssue]:
    """Validate a settings payload.

    Parameters
    ----------
    settings:
        Mapping of setting names to values, usually from :func:`load_settings`.

    Returns
    -------
    list[ValidationIssue]
        A collection of validation issues. An empty list denotes success.
    """

    issues: List[ValidationIssue] = []

    unknown = sorted(set(settings) - set(DEFAULT_SETTINGS))
    for key in unknown:
        issues.append(
            ValidationIssue(
                field=key,
                title="Unknown Setting",
                message=f"'{key}' is not a recognised setting and would be ignored.",
            )
        )

    for key in ('required', 'auto_advance'):
        if key in settings and not isinstance(settings[key], bool):
            issues.append(
                ValidationIssue(
                    field=key,
                    title="Flag Must Be Boolean",
                    message=f"Set '{key}' to true or false.",
                )
            )

    error_color = settings.get('error_color', DEFAULT_SETTINGS['error_color'])
    if not isinstance(error_color, str) or not re.fullmatch(r"#[0-9A-Fa-f]{6}", error_color):
        issues.append(
            ValidationIssue(
                field='error_color',
                title="Error Color Invalid",
                message="Use a hex color such as #ffcccc for the invalid-octet highlight.",
            )
        )

    log_level = settings.get('log_level', DEFAULT_SETTINGS['log_level'])
    if not isinstance(log_level, str) or log_level.upper() not in LOG_LEVELS:
        issues.append(
            ValidationIssue(
                field='log_level',
                title="Log Level Invalid",
                message=f"Choose one of {', '.join(LOG_LEVELS)}.",
            )
        )

    return issues


def resolve_log_level(settings: Dict[str, Any]) -> int:
    """Map the ``log_level`` setting onto a :mod:`logging` level number."""

    name = str(settings.get('log_level', DEFAULT_SETTINGS['log_level'])).upper()
    return LogLevel[name].value
