"""Pytest fixtures for task service testing."""

import os

import pytest


# Disable OpenTelemetry for tests
os.environ["OTEL_SDK_DISABLED"] = "true"


@pytest.fixture
def app():
    """Create test application backed by in-memory SQLite."""
    from taskapi import create_app
    from taskapi.config import TestConfig

    app = create_app(TestConfig)

    yield app

    app.extensions["task_store"].close()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def store(app):
    """Task store wired into the test application."""
    return app.extensions["task_store"]


@pytest.fixture
def service(app):
    """Task service wired into the test application."""
    return app.extensions["task_service"]


@pytest.fixture
def payload():
    """Valid task payload."""
    return {
        "title": "Buy milk",
        "description": "2%",
        "due_date": "2024-01-01T00:00:00Z",
        "status": "pending",
    }
