"""User-facing and diagnostic message catalog for OctetField."""

from __future__ import annotations

from typing import Dict, Mapping

INVALID_OCTET = "invalid-octet"
INCOMPLETE_ADDRESS = "incomplete-address"
INVALID_VALUE = "invalid-value"
INVALID_INITIAL_VALUE = "invalid-initial-value"

DEFAULT_MESSAGES: Dict[str, str] = {
    INVALID_OCTET: "Invalid octet.",
    INCOMPLETE_ADDRESS: "Please fill out this field.",
    INVALID_VALUE: "The specified value '{value}' is not a valid IPv4 address.",
    INVALID_INITIAL_VALUE: "The initial value '{value}' is not a valid IPv4 address.",
}

_messages: Dict[str, str] = dict(DEFAULT_MESSAGES)


def get_message(tag: str, **params: object) -> str:
    """Return the message registered for ``tag`` formatted with ``params``.

    Raises ``KeyError`` for tags that were never registered.
    """

    template = _messages[tag]
    return template.format(**params) if params else template


def register_messages(overrides: Mapping[str, str]) -> None:
    """Replace catalog entries, e.g. with a host application's translations."""

    _messages.update(overrides)


def reset_messages() -> None:
    _messages.clear()
    _messages.update(DEFAULT_MESSAGES)
