"""Smoke tests for the OctetField launcher and entrypoint modules."""

from __future__ import annotations

import builtins
import importlib.util
import io
import json
import sys
import types
from contextlib import redirect_stdout
from pathlib import Path

import pytest

import launcher


def load_entrypoint_module():
    """Load the project entrypoint module without running it as ``__main__``."""
    module_path = Path(__file__).resolve().parents[1] / "__main__.py"
    spec = importlib.util.spec_from_file_location("octetfield_entry", module_path)
    module = importlib.util.module_from_spec(spec)
    assert spec.loader is not None
    spec.loader.exec_module(module)
    return module


@pytest.fixture()
def entry_module():
    return launcher


def test_entrypoint_delegates_to_launcher():
    assert load_entrypoint_module().main is launcher.main


def run_quietly(func, *args):
    buffer = io.StringIO()
    with redirect_stdout(buffer):
        result = func(*args)
    return result, buffer.getvalue()


def test_check_dependencies_reports_missing_required(entry_module, monkeypatch):
    """check_dependencies should fail gracefully when PySide6 is unavailable."""
    real_import = builtins.__import__

    def fake_import(name, globals=None, locals=None, fromlist=(), level=0):  # noqa: D401
        if name.startswith("PySide6"):
            raise ImportError("No module named PySide6")
        return real_import(name, globals, locals, fromlist, level)

    monkeypatch.setattr(builtins, "__import__", fake_import)

    result, output = run_quietly(entry_module.check_dependencies)

    assert result is False
    assert "Missing required dependencies" in output
    assert "PySide6" in output


def test_check_dependencies_succeeds_with_stubbed_gui(entry_module, monkeypatch):
    """check_dependencies should pass when PySide6 imports cleanly."""
    pyside6 = types.ModuleType("PySide6")
    pyside6.__version__ = "6.0"
    pyside6.__file__ = "PySide6/__init__.py"
    monkeypatch.setitem(sys.modules, "PySide6", pyside6)
    for component in ("QtCore", "QtWidgets", "QtGui"):
        module = types.ModuleType(f"PySide6.{component}")
        monkeypatch.setitem(sys.modules, f"PySide6.{component}", module)
        monkeypatch.setattr(pyside6, component, module, raising=False)

    result, _ = run_quietly(entry_module.check_dependencies)

    assert result is True


def test_main_reports_missing_dependencies(entry_module, monkeypatch):
    """The main function should exit early when dependencies are missing."""
    monkeypatch.setattr(entry_module, "setup_environment", lambda: None)
    monkeypatch.setattr(entry_module, "check_dependencies", lambda: False)
    monkeypatch.setitem(sys.modules, "main", types.ModuleType("main"))

    exit_code, output = run_quietly(entry_module.main, ["--check-deps"])

    assert exit_code == 1
    assert "Some dependencies are missing" in output


def test_validate_prints_canonical_address(entry_module, monkeypatch):
    monkeypatch.setattr(entry_module, "check_dependencies", lambda: pytest.fail("GUI checked"))

    exit_code, output = run_quietly(entry_module.main, ["--validate", "192.168.001.010"])

    assert exit_code == 0
    assert output.strip() == "192.168.1.10"


def test_validate_rejects_malformed_address(entry_module):
    exit_code, output = run_quietly(entry_module.main, ["--validate", "10.0.300.1"])

    assert exit_code == 1
    assert "'10.0.300.1' is not a valid IPv4 address" in output


def test_invalid_configuration_blocks_startup(entry_module, monkeypatch, tmp_path):
    config = tmp_path / "settings.json"
    config.write_text(json.dumps({"required": "sometimes"}), encoding="utf-8")
    monkeypatch.setattr(entry_module, "check_dependencies", lambda: True)
    monkeypatch.setitem(sys.modules, "main", types.ModuleType("main"))

    exit_code, output = run_quietly(entry_module.main, ["--config", str(config)])

    assert exit_code == 1
    assert "Invalid settings" in output
    assert "required" in output


def test_startup_passes_settings_to_application(entry_module, monkeypatch):
    calls = []
    fake_main = types.ModuleType("main")
    fake_main.main = lambda settings, log_dir=None: calls.append((settings, log_dir)) or 0
    monkeypatch.setitem(sys.modules, "main", fake_main)
    monkeypatch.setattr(entry_module, "check_dependencies", lambda: True)

    exit_code, _ = run_quietly(entry_module.main, ["--debug", "--log-dir", "logs"])

    assert exit_code == 0
    settings, log_dir = calls[0]
    assert settings["log_level"] == "DEBUG"
    assert log_dir == "logs"
