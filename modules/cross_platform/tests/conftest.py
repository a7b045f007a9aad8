import sys
from pathlib import Path

import pytest

# Ensure the cross_platform package is importable when running tests
_MODULES_DIR = Path(__file__).resolve().parents[2]
if str(_MODULES_DIR) not in sys.path:
    sys.path.insert(0, str(_MODULES_DIR))


@pytest.fixture()
def clean_env(monkeypatch):
    # Make tests deterministic regardless of running inside Termux/Wayland
    for var in ("TERMUX_VERSION", "WAYLAND_DISPLAY", "NO_COLOR", "SHELL_TOOLS_LOG_LEVEL", "SHELL_TOOLS_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)
