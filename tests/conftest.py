"""Shared fixtures."""

import pytest

from cmdinterp.shell import interpreter


@pytest.fixture(autouse=True)
def workdir(tmp_path, monkeypatch):
    """Run every test inside its own temporary working directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(interpreter, "_context", None)
    return tmp_path
