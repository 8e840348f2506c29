"""
OctetField - Segmented IPv4 Address Input
Demo Application Module
A small network-settings form built from IPv4AddressEdit fields, wired to
the form controller for submit and reset.
"""
import sys
from typing import Dict, Optional, Any
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QFormLayout, QGroupBox, QPushButton, QStatusBar, QLabel, QMessageBox
)
from logger import LogCategory, get_logger, setup_logger
from config_validation import DEFAULT_SETTINGS, resolve_log_level
from ipv4_edit import IPv4AddressEdit
from form import IPv4FormController
APP_NAME = "OctetField"
APP_VERSION = "1.0.0"
LOG_RETENTION_DAYS = 30
# Field name, label, default value
DEMO_FIELDS = (
    ("address", "IP address", ""),
    ("gateway", "Default gateway", "192.168.1.1"),
    ("dns", "DNS server", "1.1.1.1"),
)
class DemoWindow(QMainWindow):
    """Network settings form showcasing the address fields."""
    def __init__(self, settings: Optional[Dict[str, Any]] = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle(f"{APP_NAME} - Network Settings")
        self.setMinimumSize(420, 220)
        self.settings = dict(DEFAULT_SETTINGS)
        if settings:
            self.settings.update(settings)
        self.logger = get_logger()
        self.fields: Dict[str, IPv4AddressEdit] = {}
        self.setup_ui()
        self.controller = IPv4FormController(self.form_box)
        self.controller.submitted.connect(self.on_submitted)
        self.controller.submission_blocked.connect(self.on_submission_blocked)
        self.controller.reset_completed.connect(
            lambda: self.status_bar.showMessage("Form reset", 3000)
        )
        self.submit_button.clicked.connect(self.controller.submit)
        self.reset_button.clicked.connect(self.controller.reset)
    def setup_ui(self):
        central = QWidget()
        layout = QVBoxLayout(central)
        self.form_box = QGroupBox("IPv4 configuration")
        form_layout = QFormLayout(self.form_box)
        for name, label, default in DEMO_FIELDS:
            field = IPv4AddressEdit(default, settings=self.settings)
            field.setObjectName(name)
            form_layout.addRow(QLabel(label), field)
            self.fields[name] = field
        layout.addWidget(self.form_box)
        buttons = QHBoxLayout()
        buttons.addStretch()
        self.reset_button = QPushButton("Reset")
        self.submit_button = QPushButton("Apply")
        self.submit_button.setDefault(True)
        buttons.addWidget(self.reset_button)
        buttons.addWidget(self.submit_button)
        layout.addLayout(buttons)
        self.setCentralWidget(central)
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
    def on_submitted(self, values: Dict[str, str]):
        summary = ", ".join(f"{name}={value or '-'}" for name, value in values.items())
        self.status_bar.showMessage(f"Applied: {summary}", 5000)
        self.logger.info("Network settings applied", **values)
    def on_submission_blocked(self, name: str, slot: int, message: str):
        self.status_bar.showMessage(f"{name}, octet {slot + 1}: {message}", 5000)
def main(settings: Optional[Dict[str, Any]] = None, log_dir=None, argv=None):
    """Start the demo application."""
    settings = dict(DEFAULT_SETTINGS, **(settings or {}))
    logger = setup_logger("octetfield", log_dir)
    logger.set_log_level(resolve_log_level(settings))
    logger.cleanup_old_logs(LOG_RETENTION_DAYS)
    logger.info(f"{APP_NAME} {APP_VERSION} starting")
    logger.info("Settings in effect", category=LogCategory.CONFIG, **settings)
    app = QApplication.instance() or QApplication(argv if argv is not None else sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    try:
        window = DemoWindow(settings)
        window.show()
        exit_code = app.exec()
        logger.info(f"{APP_NAME} exited with code: {exit_code}")
        return exit_code
    except Exception as e:
        logger.critical("Critical error starting the demo window", exception=e)
        QMessageBox.critical(None, "Critical Error",
                             f"Failed to start {APP_NAME}:\n{str(e)}\n\nCheck logs for details.")
        return 1
if __name__ == "__main__":
    sys.exit(main())
