"""Pytest configuration and fixtures."""

import pytest
import requests

from ListingMVP.ai import TextGenerator
from ListingMVP.app import create_app
from ListingMVP.config import TestingConfig
from ListingMVP.services.generation_metrics import reset_metrics
from ListingMVP.services.storage import MemStorage


class FakeGenerator(TextGenerator):
    """Scripted generator: pops queued replies, records every call."""

    name = "fake"

    def __init__(self, replies=None):
        super().__init__()
        self.replies = list(replies or [])
        self.calls = []
        self.error = None

    def _complete(self, messages, options):
        self.calls.append((messages, options))
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if self.replies else "Generated text"


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    """No network calls and fresh provider counters for every test."""

    def _offline(*args, **kwargs):
        raise requests.ConnectionError("network disabled in tests")

    monkeypatch.setattr(requests, "get", _offline)
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def store() -> MemStorage:
    """Fresh seeded store for each test."""
    return MemStorage()


@pytest.fixture
def app(store, generator):
    return create_app(TestingConfig, store=store, generator=generator)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    """Test client with a registered, logged-in agent."""
    resp = client.post("/api/register", json={"username": "agent.smith", "password": "s3cret"})
    assert resp.status_code == 201
    return client


@pytest.fixture
def sample_property_fields() -> dict:
    return {
        "title": "Craftsman Bungalow",
        "description": "Restored 1920s bungalow on a tree-lined street.",
        "price": 975000,
        "location": "Pasadena, CA",
        "imageUrl": "https://images.example.com/bungalow.jpg",
        "bedrooms": 3,
        "bathrooms": 2,
        "area": 1850,
        "features": ["Fireplace", "Detached Garage"],
        "openHouseDate": "2024-05-04",
    }
