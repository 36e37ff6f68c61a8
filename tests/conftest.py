"""Shared fixtures for the test suite."""

import os
from pathlib import Path

import pytest

# Keep the suite offline: exchange rates come from the static table unless a test mocks the API.
os.environ.setdefault("LIVE_EXCHANGE_RATES", "false")

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def read_sample(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def sample():
    """Return the text of a sample export from tests/fixtures/."""
    return read_sample
