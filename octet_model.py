"""Four-slot IPv4 octet model.

Holds the raw text of each octet, its error flag and the rules that decide
whether the slots form a complete address and what its canonical dotted form
is. Nothing in here knows about Qt; the widget layer mirrors the slots.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from logger import LoggableMixin
from messages import INVALID_VALUE, get_message

SLOT_COUNT = 4
MAX_OCTET = 255
MAX_OCTET_LENGTH = 3
SEPARATOR = "."
DIGITS = "0123456789"


class OctetError(ValueError):
    """Base class for octet and address problems."""

    def __init__(self, message: str, slot: Optional[int] = None, value: str = ""):
        super().__init__(message)
        self.slot = slot
        self.value = value


class OutOfRangeOctet(OctetError):
    """A numeric octet outside 0-255."""


class NonNumericOctet(OctetError):
    """An octet that is not a non-negative decimal integer."""


class IncompleteAddress(OctetError):
    """Some, but not all, octets are populated."""


class MalformedBulkAssignment(OctetError):
    """A whole-address assignment that is not exactly four valid octets."""


def _is_digits(text: str) -> bool:
    # str.isdigit() accepts superscripts and other Unicode digits
    return bool(text) and all(char in DIGITS for char in text)


def parse_octet(text: str, slot: Optional[int] = None) -> int:
    """Parse one octet, raising ``NonNumericOctet`` or ``OutOfRangeOctet``."""

    trimmed = (text or "").strip()
    if not _is_digits(trimmed):
        raise NonNumericOctet(f"Octet {trimmed!r} is not numeric", slot=slot, value=trimmed)
    number = int(trimmed)
    if number > MAX_OCTET:
        raise OutOfRangeOctet(
            f"Octet {trimmed!r} is outside 0-{MAX_OCTET}", slot=slot, value=trimmed
        )
    return number


def is_valid_octet(text: str) -> bool:
    """True when ``text`` (trimmed) is a decimal integer in 0-255."""

    try:
        parse_octet(text)
    except OctetError:
        return False
    return True


def canonicalize(text: str) -> str:
    """Collapse redundant leading zeros: ``"007" -> "7"``, ``"000" -> "0"``."""

    if not text:
        return ""
    if text in ("00", "000"):
        return "0"
    if len(text) > 1 and text.startswith("0"):
        return text.lstrip("0") or "0"
    return text


def parse_address(text: str) -> List[str]:
    """Split a dotted address into four trimmed octet strings.

    Raises ``MalformedBulkAssignment`` unless there are exactly four parts and
    each one is a valid octet. The parts are returned as written, without
    canonicalization.
    """

    parts = text.split(SEPARATOR)
    if len(parts) != SLOT_COUNT:
        raise MalformedBulkAssignment(
            f"Expected {SLOT_COUNT} octets, got {len(parts)}", value=text
        )
    for index, part in enumerate(parts):
        try:
            parse_octet(part, slot=index)
        except OctetError as exc:
            raise MalformedBulkAssignment(str(exc), slot=index, value=text) from exc
    return [part.strip() for part in parts]


def get_canonical_address(texts: Iterable[str]) -> str:
    """Dotted join of the canonical octets, or ``""`` unless all four are valid."""

    octets = [canonicalize((text or "").strip()) for text in texts]
    if len(octets) != SLOT_COUNT or not all(is_valid_octet(octet) for octet in octets):
        return ""
    return SEPARATOR.join(octets)


def clamp_focus(index: int) -> int:
    return max(0, min(index, SLOT_COUNT - 1))


@dataclass
class OctetSlot:
    """One octet position of the address."""

    raw_text: str = ""
    has_error: bool = False
    validity_message: str = ""

    @property
    def is_empty(self) -> bool:
        return self.raw_text == ""

    @property
    def numeric_value(self) -> Optional[int]:
        """Integer value of the raw text; may exceed 255 while the user types."""
        if not _is_digits(self.raw_text):
            return None
        return int(self.raw_text)

    def clear(self) -> None:
        self.raw_text = ""
        self.has_error = False
        self.validity_message = ""


class OctetModel(LoggableMixin):
    """The ordered four slots of one address field."""

    def __init__(self):
        LoggableMixin.__init__(self)
        self.slots: List[OctetSlot] = [OctetSlot() for _ in range(SLOT_COUNT)]

    def __getitem__(self, index: int) -> OctetSlot:
        return self.slots[index]

    def __len__(self) -> int:
        return SLOT_COUNT

    def snapshot(self) -> Tuple[str, ...]:
        return tuple(slot.raw_text for slot in self.slots)

    def error_flags(self) -> Tuple[bool, ...]:
        return tuple(slot.has_error for slot in self.slots)

    def load_snapshot(self, texts: Sequence[str]) -> None:
        """Overwrite the raw texts, keeping digits only and at most three of them."""
        if len(texts) != SLOT_COUNT:
            raise ValueError(f"Snapshot must hold {SLOT_COUNT} octets, got {len(texts)}")
        for slot, text in zip(self.slots, texts):
            slot.raw_text = "".join(char for char in (text or "") if char in DIGITS)[:MAX_OCTET_LENGTH]

    def clear(self) -> None:
        for slot in self.slots:
            slot.clear()

    def clear_errors(self) -> None:
        for slot in self.slots:
            slot.has_error = False
            slot.validity_message = ""

    def is_all_empty(self) -> bool:
        return all(slot.is_empty for slot in self.slots)

    def canonical_address(self) -> str:
        return get_canonical_address(self.snapshot())

    def set_from_address(self, text: str, message_tag: str = INVALID_VALUE) -> bool:
        """All-or-nothing assignment of a dotted address.

        On failure every slot is cleared and the rejected value is logged under
        ``message_tag``; the caller never sees an exception.
        """
        try:
            parts = parse_address(text)
        except MalformedBulkAssignment as exc:
            self.clear()
            self.log_validation_event(
                get_message(message_tag, value=text),
                reason=str(exc),
                slot=exc.slot,
            )
            return False
        for slot, part in zip(self.slots, parts):
            # "0001" is a valid octet but does not fit a three-character slot
            slot.raw_text = part if len(part) <= MAX_OCTET_LENGTH else str(int(part))
            slot.has_error = False
            slot.validity_message = ""
        return True
