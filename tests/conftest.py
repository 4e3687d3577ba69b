"""Root test configuration: isolate tests from the caller's environment and working directory"""

import os

import pytest


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Clear DIFFPAINT_* / COLORTERM variables and run from a clean tmp directory."""
    for name in list(os.environ):
        if name.startswith("DIFFPAINT_") or name == "COLORTERM":
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
