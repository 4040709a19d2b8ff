"""Shared pytest fixtures for error translator test suites."""

from collections.abc import Generator
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Provide a test client for the packaged application."""
    from error_translator.main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def _reset_error_settings() -> Generator[None, None, None]:
    """Drop cached settings so environment overrides stay local to a test."""
    from error_translator.core.config import get_error_settings

    get_error_settings.cache_clear()
    yield
    get_error_settings.cache_clear()
