"""Shared fixtures: every test gets an app over its own seeded store."""

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import ProductStore
from app.main import create_app

API_KEY = "secret-api-key-123"
AUTH = {"x-api-key": API_KEY}


@pytest.fixture
def store():
    return ProductStore.seeded()


@pytest.fixture
def app(store):
    return create_app(store=store, settings=Settings(api_key=API_KEY))


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def api_key():
    return API_KEY


@pytest.fixture
def auth():
    return dict(AUTH)


@pytest.fixture
def new_product():
    return {
        "name": "  Blender ",
        "description": " High-speed blender ",
        "price": 99.5,
        "category": " kitchen",
        "inStock": True,
    }
