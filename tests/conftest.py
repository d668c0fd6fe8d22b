"""Root test configuration: isolate every test from local config files and DIFFVIEW_* env vars"""

import os

import pytest


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run each test from an empty directory with no DIFFVIEW_ overrides set."""
    for name in list(os.environ):
        if name.startswith("DIFFVIEW_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    yield tmp_path
