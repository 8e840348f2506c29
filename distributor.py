"""Input distributor for the four-slot IPv4 field.

Turns one raw interaction (a keystroke, an edited text, a paste, a blur, a
whole-address assignment, a form submit or reset) into slot updates, a focus
decision and error flags on the :class:`~octet_model.OctetModel`. Every
operation runs to completion and recomputes the mirror value before it
returns.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Union

from logger import LoggableMixin
from messages import (
    INCOMPLETE_ADDRESS,
    INVALID_INITIAL_VALUE,
    INVALID_OCTET,
    INVALID_VALUE,
    get_message,
)
from octet_model import (
    DIGITS,
    MAX_OCTET,
    MAX_OCTET_LENGTH,
    SEPARATOR,
    SLOT_COUNT,
    IncompleteAddress,
    OctetError,
    OctetModel,
    canonicalize,
    clamp_focus,
    parse_octet,
)

SEPARATOR_KEY = SEPARATOR
BACKSPACE_KEY = "Backspace"


@dataclass(frozen=True)
class KeyModifiers:
    ctrl: bool = False
    meta: bool = False
    alt: bool = False

    @property
    def any(self) -> bool:
        return self.ctrl or self.meta or self.alt


NO_MODIFIERS = KeyModifiers()


# Typed event payloads accepted by InputDistributor.dispatch()
@dataclass(frozen=True)
class KeystrokeEvent:
    slot: int
    key: str
    modifiers: KeyModifiers = NO_MODIFIERS
    replacing: bool = False


@dataclass(frozen=True)
class InputEvent:
    slot: int
    text: str


@dataclass(frozen=True)
class PasteEvent:
    slot: int
    text: str


@dataclass(frozen=True)
class BlurEvent:
    slot: int


@dataclass(frozen=True)
class BulkSetEvent:
    value: Optional[str]


@dataclass(frozen=True)
class FormSubmitEvent:
    snapshot: Optional[Sequence[str]] = None


@dataclass(frozen=True)
class FormResetEvent:
    snapshot: Sequence[str]


Event = Union[
    KeystrokeEvent, InputEvent, PasteEvent, BlurEvent,
    BulkSetEvent, FormSubmitEvent, FormResetEvent,
]


@dataclass(frozen=True)
class InteractionResult:
    """Outcome of one interaction.

    ``accept`` is False when the host must suppress its native handling of the
    event. ``focus`` names the slot that should receive focus, or None to leave
    focus where it is.
    """

    accept: bool = True
    focus: Optional[int] = None


class AddressStatus(Enum):
    ALL_EMPTY = "all-empty"
    COMPLETE = "complete-valid"
    INCOMPLETE = "incomplete"
    INVALID_OCTET = "invalid-octet"


@dataclass(frozen=True)
class SubmissionResult:
    ok: bool
    status: AddressStatus
    value: str = ""
    first_error_slot: Optional[int] = None
    message: str = ""
    error: Optional[OctetError] = None


class InputDistributor(LoggableMixin):
    """State machine mapping raw input onto the four octet slots."""

    def __init__(
        self,
        initial_value: Optional[str] = "",
        *,
        required: bool = False,
        auto_advance: bool = True,
        on_mirror_changed: Optional[Callable[[str], None]] = None,
    ):
        LoggableMixin.__init__(self)
        self.model = OctetModel()
        self.required = required
        self.auto_advance = auto_advance
        self.on_mirror_changed = on_mirror_changed
        self.mirror_value = ""
        self.focus_index = 0
        if initial_value:
            self.set_value(initial_value, message_tag=INVALID_INITIAL_VALUE)

    # ------------------------------------------------------------------
    # Value access
    # ------------------------------------------------------------------
    @property
    def value(self) -> str:
        return self.model.canonical_address()

    @value.setter
    def value(self, new_value: Optional[str]) -> None:
        self.set_value(new_value)

    def slot_texts(self) -> List[str]:
        return list(self.model.snapshot())

    def error_flags(self) -> List[bool]:
        return list(self.model.error_flags())

    def set_value(self, new_value: Optional[str], message_tag: str = INVALID_VALUE) -> bool:
        """Bulk assignment: empty clears everything, anything else must be a full address."""
        if not isinstance(new_value, str):
            new_value = ""
        if new_value == "":
            self.model.clear()
            self._sync_mirror()
            return True
        accepted = self.model.set_from_address(new_value, message_tag=message_tag)
        self._sync_mirror()
        return accepted

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------
    def on_keystroke(
        self, slot: int, key: str, modifiers: KeyModifiers = NO_MODIFIERS,
        replacing: bool = False,
    ) -> InteractionResult:
        """Classify a key press before the host applies it.

        ``replacing`` is True when the host has text selected in the slot, so a
        digit typed into a full slot overwrites instead of overflowing.
        """
        self._check_slot(slot)
        if key in (SEPARATOR_KEY, BACKSPACE_KEY):
            return self.on_separator_or_backspace(slot, key)
        if len(key) == 1 and key not in DIGITS and not modifiers.any:
            self.log_input_event("keystroke_rejected", slot, key=key)
            return InteractionResult(accept=False)
        if (
            len(key) == 1 and key in DIGITS and not replacing
            and len(self.model[slot].raw_text) >= MAX_OCTET_LENGTH
        ):
            self.log_input_event("keystroke_over_length", slot, key=key)
            return InteractionResult(accept=False)
        return InteractionResult()

    def on_separator_or_backspace(self, slot: int, key: str) -> InteractionResult:
        """Navigation keys move focus without touching slot content."""
        self._check_slot(slot)
        current = self.model[slot]
        if key == SEPARATOR_KEY:
            number = current.numeric_value
            if number is not None and number <= MAX_OCTET and slot < SLOT_COUNT - 1:
                return self._move_focus(slot + 1, accept=False)
            return InteractionResult(accept=False)
        if key == BACKSPACE_KEY:
            if current.is_empty and slot > 0:
                return self._move_focus(slot - 1)
            return InteractionResult()
        raise ValueError(f"Unsupported navigation key: {key!r}")

    # ------------------------------------------------------------------
    # Text changes
    # ------------------------------------------------------------------
    def on_input(self, slot: int, text: str) -> InteractionResult:
        """Apply the new text of a slot after the host edited it."""
        self._check_slot(slot)
        text = text or ""
        if SEPARATOR in text or len(text) > MAX_OCTET_LENGTH:
            return self.distribute(text, slot)
        target = self.model[slot]
        target.validity_message = ""
        target.raw_text = "".join(char for char in text if char in DIGITS)[:MAX_OCTET_LENGTH]
        number = target.numeric_value
        # Out-of-range text stays visible so the user can correct it
        target.has_error = number is not None and number > MAX_OCTET
        self._sync_mirror()
        if (
            self.auto_advance
            and len(target.raw_text) == MAX_OCTET_LENGTH
            and not target.has_error
            and slot < SLOT_COUNT - 1
        ):
            return self._move_focus(slot + 1)
        return InteractionResult()

    def on_paste(self, slot: int, text: str) -> InteractionResult:
        """Distribute clipboard text; the native paste is always suppressed."""
        self._check_slot(slot)
        self.log_input_event("paste", slot, length=len(text or ""))
        return self.distribute(text or "", slot, accept=False)

    def distribute(self, payload: str, start: int, accept: bool = True) -> InteractionResult:
        """Spread a dotted payload across the slots starting at ``start``.

        Valid segments are written in canonical form, empty segments clear
        their slot, and the first segment that is not an octet clears and flags
        its slot and ends the distribution. Segments past the last slot are
        dropped. A payload without digits or dots changes nothing.
        """
        self._check_slot(start)
        cleaned = "".join(char for char in payload if char in DIGITS or char == SEPARATOR)
        if not cleaned:
            return InteractionResult(accept=accept)
        index = start
        for segment in cleaned.split(SEPARATOR):
            if index >= SLOT_COUNT:
                break
            target = self.model[index]
            target.validity_message = ""
            index += 1
            if segment == "":
                target.raw_text = ""
                target.has_error = False
                continue
            try:
                number = parse_octet(segment, slot=index - 1)
            except OctetError as exc:
                target.raw_text = ""
                target.has_error = True
                self.log_debug("Distribution stopped at invalid segment",
                               slot=exc.slot, segment=segment)
                break
            target.raw_text = str(number)
            target.has_error = False
        self._sync_mirror()
        return self._move_focus(min(index, SLOT_COUNT - 1), accept=accept)

    def on_blur(self, slot: int) -> InteractionResult:
        self._check_slot(slot)
        target = self.model[slot]
        target.raw_text = canonicalize(target.raw_text)
        self._sync_mirror()
        return InteractionResult()

    # ------------------------------------------------------------------
    # Form integration
    # ------------------------------------------------------------------
    def validate_for_submission(
        self, snapshot: Optional[Sequence[str]] = None
    ) -> SubmissionResult:
        """Classify the slots for form submission and report the first offender."""
        texts = self.model.snapshot() if snapshot is None else tuple(snapshot)
        if len(texts) != SLOT_COUNT:
            raise ValueError(f"Snapshot must hold {SLOT_COUNT} octets, got {len(texts)}")
        octets = [canonicalize((text or "").strip()) for text in texts]
        if all(octet == "" for octet in octets):
            if not self.required:
                return SubmissionResult(ok=True, status=AddressStatus.ALL_EMPTY)
            error: Optional[OctetError] = IncompleteAddress("Address is required", slot=0)
        else:
            error = self._first_error(octets)
        if error is None:
            return SubmissionResult(
                ok=True, status=AddressStatus.COMPLETE, value=SEPARATOR.join(octets)
            )

        if isinstance(error, IncompleteAddress):
            status, tag = AddressStatus.INCOMPLETE, INCOMPLETE_ADDRESS
        else:
            status, tag = AddressStatus.INVALID_OCTET, INVALID_OCTET
        message = get_message(tag)
        self.model[error.slot].validity_message = message
        self.focus_index = error.slot
        self.log_validation_event(
            "Submission blocked", kind=status.value, slot=error.slot, reason=str(error)
        )
        return SubmissionResult(
            ok=False,
            status=status,
            first_error_slot=error.slot,
            message=message,
            error=error,
        )

    @staticmethod
    def _first_error(octets: Sequence[str]) -> Optional[OctetError]:
        partial = any(octet == "" for octet in octets)
        for index, octet in enumerate(octets):
            if octet == "":
                if partial:
                    return IncompleteAddress(f"Octet {index + 1} is empty", slot=index)
                continue
            try:
                parse_octet(octet, slot=index)
            except OctetError as exc:
                return exc
        return None

    def on_form_reset(self, snapshot: Sequence[str]) -> InteractionResult:
        """Re-synchronise after the host restored its default texts."""
        self.model.load_snapshot(snapshot)
        self.model.clear_errors()
        self.set_value(self.model.canonical_address())
        return InteractionResult()

    def dispatch(self, event: Event) -> Union[InteractionResult, SubmissionResult, bool]:
        if isinstance(event, KeystrokeEvent):
            return self.on_keystroke(event.slot, event.key, event.modifiers, event.replacing)
        if isinstance(event, InputEvent):
            return self.on_input(event.slot, event.text)
        if isinstance(event, PasteEvent):
            return self.on_paste(event.slot, event.text)
        if isinstance(event, BlurEvent):
            return self.on_blur(event.slot)
        if isinstance(event, BulkSetEvent):
            return self.set_value(event.value)
        if isinstance(event, FormSubmitEvent):
            return self.validate_for_submission(event.snapshot)
        if isinstance(event, FormResetEvent):
            return self.on_form_reset(event.snapshot)
        raise TypeError(f"Unsupported event: {type(event).__name__}")

    # ------------------------------------------------------------------
    def _move_focus(self, index: int, accept: bool = True) -> InteractionResult:
        self.focus_index = clamp_focus(index)
        return InteractionResult(accept=accept, focus=self.focus_index)

    def _sync_mirror(self) -> None:
        value = self.model.canonical_address()
        changed = value != self.mirror_value
        self.mirror_value = value
        if changed and self.on_mirror_changed is not None:
            self.on_mirror_changed(value)

    @staticmethod
    def _check_slot(slot: int) -> None:
        if not 0 <= slot < SLOT_COUNT:
            raise IndexError(f"Slot {slot} outside 0-{SLOT_COUNT - 1}")
