"""
Test configuration and fixtures for the scan tracker.
This centralizes all test setup, making individual tests clean.
"""

import os
from pathlib import Path

import pytest

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

# Must be set before settings are created on first import
os.environ.setdefault("TEMPLATES_PATH", str(TEMPLATES_DIR))

from fastapi.testclient import TestClient

from main import app
from shortener_app.dependencies import get_store
from shortener_app.store import Store


@pytest.fixture(scope="function")
def store():
    """
    Create a fresh store for each test.
    This ensures tests are isolated and don't affect each other.
    """
    return Store(lock_timeout=1.0)


@pytest.fixture(scope="function")
def client(store):
    """
    Create a test client with the store dependency overridden.
    This is the main fixture that tests will use.
    """
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()


@pytest.fixture
def short_id(client):
    """Short id of a freshly shortened https://example.com/x"""
    response = client.post("/shorten", json={"url": "https://example.com/x"})
    return response.json()["short_url"].rsplit("/", 1)[-1]
