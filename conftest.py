"""Pytest configuration shared by the olp_sdk test suite.

Puts the project root on ``sys.path`` so the package imports without an
install, and isolates every test from ``OLP_*`` variables of the calling
shell and from settings cached by earlier tests.
"""

import os
import pathlib
import sys
from collections.abc import Iterator

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear OLP_ environment variables and the get_settings() cache."""
    from olp_sdk.core import config

    for name in list(os.environ):
        if name.upper().startswith("OLP_"):
            monkeypatch.delenv(name)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()
