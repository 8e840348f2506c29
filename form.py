"""
Form Controller Module for OctetField.
Submit and reset handling for every IPv4AddressEdit under a form widget.
"""
from PySide6.QtWidgets import QWidget
from PySide6.QtCore import Signal, QObject, QTimer
from typing import Dict, List, Optional
from logger import LogCategory, LoggableMixin
from ipv4_edit import IPv4AddressEdit
class IPv4FormController(QObject, LoggableMixin):
    """Validates address fields on submit and re-syncs them after a reset."""
    # Signals
    submitted = Signal(dict)  # field name -> canonical address
    submission_blocked = Signal(str, int, str)  # field name, slot, message
    reset_completed = Signal()
    def __init__(self, form_widget: QWidget, parent: Optional[QObject] = None):
        QObject.__init__(self, parent or form_widget)
        LoggableMixin.__init__(self)
        self.form_widget = form_widget
    def address_fields(self) -> List[IPv4AddressEdit]:
        return self.form_widget.findChildren(IPv4AddressEdit)
    @staticmethod
    def field_name(field: IPv4AddressEdit, position: int) -> str:
        return field.objectName() or f"address_{position + 1}"
    def submit(self) -> bool:
        """Validate all fields left to right; stop at the first one that fails."""
        values: Dict[str, str] = {}
        for position, field in enumerate(self.address_fields()):
            name = self.field_name(field, position)
            result = field.validate_for_submission()
            if not result.ok:
                self.log_warning(f"Submission blocked by {name}",
                                 category=LogCategory.FORM, slot=result.first_error_slot,
                                 kind=result.status.value)
                self.submission_blocked.emit(name, result.first_error_slot, result.message)
                return False
            values[name] = result.value
        self.log_user_action("form_submitted", {"fields": len(values)})
        self.submitted.emit(values)
        return True
    def reset(self):
        """Restore default texts now and clear error state on the next loop turn."""
        fields = self.address_fields()
        for field in fields:
            field.restore_defaults()
        # The clean-up must see the restored defaults, so it is deferred
        QTimer.singleShot(0, lambda: self._finish_reset(fields))
        self.log_user_action("form_reset", {"fields": len(fields)})
    def _finish_reset(self, fields: List[IPv4AddressEdit]):
        for field in fields:
            field.finish_reset()
        self.reset_completed.emit()
