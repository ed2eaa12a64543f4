"""Shared pytest fixtures for semaphore_client tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pydantic import SecretStr

from semaphore_client.integrations.semaphore.config import SemaphoreConfig

TEST_HOST = "myorg.semaphoreci.com"


@pytest.fixture
def semaphore_config() -> SemaphoreConfig:
    """Create a test Semaphore config with a fixed user id."""
    return SemaphoreConfig(
        host=TEST_HOST,
        token=SecretStr("test-token"),
        user_id="user-1",
    )


@pytest.fixture
def mock_client() -> MagicMock:
    """Create a mock SemaphoreClient usable as a context manager."""
    client = MagicMock()
    client.__enter__.return_value = client
    return client


@pytest.fixture
def client_factory(mock_client: MagicMock) -> MagicMock:
    """Create a client factory returning ``mock_client``."""
    return MagicMock(return_value=mock_client)


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path]:
    """Point the config file path into a temporary directory."""
    config_path = tmp_path / "sem" / "config.yaml"
    monkeypatch.setattr(SemaphoreConfig, "get_config_path", staticmethod(lambda: config_path))
    yield config_path


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables for each test."""
    for key in list(os.environ.keys()):
        if key.startswith("SEMAPHORE_"):
            monkeypatch.delenv(key, raising=False)
