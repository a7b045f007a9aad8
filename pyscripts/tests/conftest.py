# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Ensure 'pyscripts' and the shared packages under modules/ are importable
REPO_ROOT = Path(__file__).resolve().parents[2]
MODULES_DIR = REPO_ROOT / "modules"
for _p in (REPO_ROOT, MODULES_DIR):
    if str(_p) not in sys.path:
        sys.path.insert(0, str(_p))


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep color and logging settings from the developer's shell out of the tests."""
    for var in ("NO_COLOR", "FORCE_COLOR", "DOCKER", "SHELL_TOOLS_LOG_LEVEL", "SHELL_TOOLS_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def which_map(monkeypatch):
    """Patch shutil.which with a fixed name -> path mapping."""
    import shutil

    def _install(mapping):
        monkeypatch.setattr(shutil, "which", lambda name: mapping.get(name))
    return _install
