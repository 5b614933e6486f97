"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Variables read by KindredConfig.from_env(); a developer's .env must not leak in.
KINDRED_ENV_KEYS = (
    "GEMINI_API_KEY",
    "MODEL_CANDIDATES",
    "PROBE_TIMEOUT_S",
    "GENERATION_TIMEOUT_S",
    "STARTUP_RESOLUTION",
    "PORT",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Environment with every Kindred variable unset."""
    for key in KINDRED_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
