"""
IPv4 Address Edit Module for OctetField.
Four-octet address field built from QLineEdit slots. Key presses, paste,
text edits and focus changes are routed to the InputDistributor, which
decides slot contents, error flags and where focus goes next.
"""
from PySide6.QtWidgets import (
    QWidget, QHBoxLayout, QLineEdit, QLabel, QApplication, QToolTip
)
from PySide6.QtCore import Qt, Signal, QObject, QEvent
from PySide6.QtGui import QKeySequence, QKeyEvent
from typing import Optional, List, Dict, Any, Tuple
from logger import LoggableMixin
from config_validation import DEFAULT_SETTINGS
from distributor import (
    BACKSPACE_KEY, InputDistributor, InteractionResult, KeyModifiers, SubmissionResult
)
from octet_model import SEPARATOR, SLOT_COUNT
class OctetLineEdit(QLineEdit):
    """A single octet slot of an address edit."""
    def __init__(self, index: int, parent=None):
        super().__init__(parent)
        self.index = index
        self.setObjectName(f"octet{index + 1}")
        self.setAlignment(Qt.AlignCenter)
        self.setFixedWidth(42)
        self.setProperty("error", False)
    def set_error(self, flagged: bool):
        """Flag the slot; the stylesheet highlights ``[error="true"]``."""
        if self.has_error() == flagged:
            return
        self.setProperty("error", flagged)
        # Dynamic properties only restyle after a re-polish
        self.style().unpolish(self)
        self.style().polish(self)
    def has_error(self) -> bool:
        return bool(self.property("error"))
class OctetEventFilter(QObject):
    """Routes key, paste and focus-out events of one octet to its address edit."""
    def __init__(self, octet: OctetLineEdit, edit: "IPv4AddressEdit"):
        super().__init__(octet)
        self.octet = octet
        self.edit = edit
    def eventFilter(self, obj, event):
        if obj == self.octet:
            try:
                if event.type() == QEvent.KeyPress:
                    return self.edit.handle_key_press(self.octet.index, event)
                elif event.type() == QEvent.FocusOut:
                    self.edit.handle_focus_out(self.octet.index)
            except Exception as e:
                self.edit.log_error("Error handling octet event", exception=e,
                                    slot=self.octet.index)
        return super().eventFilter(obj, event)
class IPv4AddressEdit(QWidget, LoggableMixin):
    """Segmented IPv4 address input."""
    # Emitted with the canonical address, or "" while it is incomplete/invalid
    value_changed = Signal(str)
    def __init__(self, value: str = "", parent=None, settings: Optional[Dict[str, Any]] = None):
        QWidget.__init__(self, parent)
        LoggableMixin.__init__(self)
        self.settings = dict(DEFAULT_SETTINGS)
        if settings:
            self.settings.update(settings)
        self.octets: List[OctetLineEdit] = []
        self.event_filters: List[OctetEventFilter] = []
        self.setup_ui()
        self.apply_styling()
        self.distributor = InputDistributor(
            value,
            required=bool(self.settings['required']),
            auto_advance=bool(self.settings['auto_advance']),
            on_mirror_changed=self.value_changed.emit,
        )
        # What a form reset brings back; invalid initial values were already rejected
        self.default_texts: Tuple[str, ...] = tuple(self.distributor.slot_texts())
        self.sync_from_model()
        self.log_debug("IPv4 address edit initialized", value=self.distributor.value)
    def setup_ui(self):
        """Create the four octet fields separated by dot labels."""
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(2)
        for index in range(SLOT_COUNT):
            octet = OctetLineEdit(index, self)
            event_filter = OctetEventFilter(octet, self)
            octet.installEventFilter(event_filter)
            octet.textEdited.connect(lambda text, i=index: self.handle_text_edited(i, text))
            layout.addWidget(octet)
            self.octets.append(octet)
            self.event_filters.append(event_filter)
            if index < SLOT_COUNT - 1:
                dot = QLabel(SEPARATOR)
                dot.setAlignment(Qt.AlignCenter)
                layout.addWidget(dot)
        for previous, following in zip(self.octets, self.octets[1:]):
            QWidget.setTabOrder(previous, following)
        self.setFocusProxy(self.octets[0])
    def apply_styling(self):
        self.setStyleSheet(
            f'QLineEdit[error="true"] {{ background-color: {self.settings["error_color"]}; }}'
        )
    # ------------------------------------------------------------------
    # Value access
    # ------------------------------------------------------------------
    def value(self) -> str:
        """Canonical dotted address, or "" unless all four octets are valid."""
        return self.distributor.value
    def setValue(self, value: Optional[str]) -> bool:
        """Assign a whole address; malformed values clear the field."""
        accepted = self.distributor.set_value(value)
        self.sync_from_model()
        return accepted
    def clear(self):
        self.setValue("")
    def snapshot(self) -> Tuple[str, ...]:
        """Texts currently shown in the octet fields."""
        return tuple(octet.text() for octet in self.octets)
    @property
    def focus_index(self) -> int:
        return self.distributor.focus_index
    # ------------------------------------------------------------------
    # Event routing
    # ------------------------------------------------------------------
    def handle_key_press(self, index: int, event: QKeyEvent) -> bool:
        """Return True when the key press must not reach the octet field."""
        if event.matches(QKeySequence.StandardKey.Paste):
            self.paste_into(index, QApplication.clipboard().text())
            return True
        modifiers = event.modifiers()
        key_modifiers = KeyModifiers(
            ctrl=bool(modifiers & Qt.ControlModifier),
            meta=bool(modifiers & Qt.MetaModifier),
            alt=bool(modifiers & Qt.AltModifier),
        )
        if event.key() == Qt.Key_Backspace:
            key = BACKSPACE_KEY
        else:
            text = event.text()
            # Tab, Return and arrows carry no printable text and keep their native handling
            if not text or not text.isprintable():
                return False
            key = text
        result = self.distributor.on_keystroke(
            index, key, key_modifiers, replacing=self.octets[index].hasSelectedText()
        )
        self.apply_focus(result)
        return not result.accept
    def handle_text_edited(self, index: int, text: str):
        try:
            result = self.distributor.on_input(index, text)
        except Exception as e:
            self.log_error("Error applying octet edit", exception=e, slot=index)
            return
        self.sync_from_model()
        self.apply_focus(result)
    def handle_focus_out(self, index: int):
        self.distributor.on_blur(index)
        self.sync_from_model()
    def paste_into(self, index: int, text: str):
        """Distribute clipboard text starting at octet ``index``."""
        self.log_user_action("ipv4_paste", {"slot": index})
        result = self.distributor.on_paste(index, text)
        self.sync_from_model()
        self.apply_focus(result)
    def apply_focus(self, result: InteractionResult):
        if result.focus is None:
            return
        target = self.octets[result.focus]
        if not target.hasFocus():
            target.setFocus()
    def sync_from_model(self):
        """Write slot texts, error flags and validity messages to the octet fields."""
        for octet, slot in zip(self.octets, self.distributor.model.slots):
            if octet.text() != slot.raw_text:
                octet.setText(slot.raw_text)
            octet.set_error(slot.has_error)
            octet.setToolTip(slot.validity_message)
    # ------------------------------------------------------------------
    # Form integration
    # ------------------------------------------------------------------
    def validate_for_submission(self) -> SubmissionResult:
        """Check the field for submission; focus and explain the first bad octet."""
        result = self.distributor.validate_for_submission(self.snapshot())
        if not result.ok:
            octet = self.octets[result.first_error_slot]
            octet.setToolTip(result.message)
            octet.setFocus()
            QToolTip.showText(octet.mapToGlobal(octet.rect().bottomLeft()), result.message, octet)
        return result
    def restore_defaults(self):
        """Put the default texts back without touching error flags (native reset)."""
        for octet, text in zip(self.octets, self.default_texts):
            octet.setText(text)
    def finish_reset(self):
        """Clear error flags and re-sync once the default texts are back."""
        self.distributor.on_form_reset(self.snapshot())
        self.sync_from_model()
