"""
Shared fixtures for the email hint test suite.

Ports are replaced by in-memory doubles; no database or network needed.
"""

import pytest
from fastapi.testclient import TestClient

from email_hint.core.config import Settings
from email_hint.main import create_app

from tests.fakes import ALICE, FakeDirectoryProvider, FakePhoneDirectory


@pytest.fixture
def settings() -> Settings:
    return Settings(
        db_host="127.0.0.1",
        db_port=5432,
        db_user="gopher",
        db_password="P@ssw0rd",
        db_name="gopher_corp",
        log_level="WARNING",
    )


@pytest.fixture
def directory() -> FakePhoneDirectory:
    return FakePhoneDirectory(phones=[ALICE])


@pytest.fixture
def provider(directory: FakePhoneDirectory) -> FakeDirectoryProvider:
    return FakeDirectoryProvider(directory=directory)


@pytest.fixture
def app(settings: Settings, provider: FakeDirectoryProvider):
    return create_app(settings=settings, provider=provider)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
