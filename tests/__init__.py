"""Test package initialisation for OctetField."""

from pathlib import Path
import os
import sys
import tempfile

# Ensure the repository root is importable when tests run from an isolated
# working directory. Pytest can change the current directory during collection
# which makes top-level modules like ``octet_model`` inaccessible unless the
# project root is explicitly added to ``sys.path``.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep test runs out of the user's home directory and off the display.
os.environ.setdefault("OCTETFIELD_LOG_DIR", tempfile.mkdtemp(prefix="octetfield-logs-"))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
