"""Pytest configuration and shared fixtures."""
from pathlib import Path

import pytest

from mysql_sysvars.logging import configure_logging

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session", autouse=True)
def structured_logging():
    configure_logging("DEBUG")


@pytest.fixture
def sample_page_path():
    return FIXTURES / "server-system-variables.html"


@pytest.fixture
def sample_page(sample_page_path):
    return sample_page_path.read_text(encoding="utf-8")
