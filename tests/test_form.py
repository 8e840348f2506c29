import pytest

pytest.importorskip("PySide6")
try:
    from PySide6.QtTest import QTest
    from PySide6.QtWidgets import QApplication, QVBoxLayout, QWidget
except ImportError:  # pragma: no cover - executed only when Qt bindings incomplete
    pytest.skip("PySide6 QtWidgets bindings unavailable", allow_module_level=True)

from form import IPv4FormController
from ipv4_edit import IPv4AddressEdit
from main import DEMO_FIELDS, DemoWindow


@pytest.fixture(scope="module")
def qt_app():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture()
def form(qt_app):
    container = QWidget()
    layout = QVBoxLayout(container)
    for name, value in (("address", ""), ("gateway", "192.168.1.1")):
        field = IPv4AddressEdit(value)
        field.setObjectName(name)
        layout.addWidget(field)
    controller = IPv4FormController(container)
    yield container, controller
    container.deleteLater()


def field(container, name):
    return container.findChild(IPv4AddressEdit, name)


def test_submit_emits_values_of_all_fields(form):
    container, controller = form
    submitted = []
    controller.submitted.connect(submitted.append)
    field(container, "address").setValue("192.168.1.20")

    assert controller.submit() is True
    assert submitted == [{"address": "192.168.1.20", "gateway": "192.168.1.1"}]


def test_empty_optional_field_submits_empty_value(form):
    container, controller = form
    submitted = []
    controller.submitted.connect(submitted.append)

    assert controller.submit() is True
    assert submitted[0]["address"] == ""


def test_partial_field_blocks_submission(form):
    container, controller = form
    blocked = []
    controller.submission_blocked.connect(lambda *args: blocked.append(args))
    QTest.keyClicks(field(container, "address").octets[0], "10")

    assert controller.submit() is False
    name, slot, message = blocked[0]
    assert name == "address"
    assert slot == 1
    assert message


def test_reset_restores_defaults_then_clears_errors(form, qt_app):
    container, controller = form
    gateway = field(container, "gateway")
    completed = []
    controller.reset_completed.connect(lambda: completed.append(True))
    QTest.keyClicks(gateway.octets[3], "99")
    assert gateway.octets[3].text() == "199"
    assert gateway.octets[3].has_error() is False
    gateway.paste_into(0, "300")
    assert gateway.octets[0].has_error()

    controller.reset()

    assert gateway.snapshot() == ("192", "168", "1", "1")
    assert gateway.octets[0].has_error()
    assert not completed

    QTest.qWait(50)

    assert completed == [True]
    assert not gateway.octets[0].has_error()
    assert gateway.value() == "192.168.1.1"
    assert field(container, "address").value() == ""


def test_demo_window_wires_all_fields(qt_app):
    window = DemoWindow()

    assert [f.objectName() for f in window.controller.address_fields()] == [
        name for name, _, _ in DEMO_FIELDS
    ]
    assert window.fields["dns"].value() == "1.1.1.1"
    window.deleteLater()
