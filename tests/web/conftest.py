"""Shared fixtures for web API tests."""

import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from coach import ResponseSelector
from coach.tiers import LLMTier
from llm import LLMError
from shared_types import ResponseSource
from web.app import app
from web.deps import get_selector, get_store


@pytest.fixture
def jwt_secret():
    return "test-auth-secret"


def _make_auth_token(jwt_secret, user_id, email="u@test.com"):
    return jwt.encode(
        {"sub": user_id, "email": email, "aud": "authenticated"},
        jwt_secret,
        algorithm="HS256",
    )


@pytest.fixture
def auth_headers(jwt_secret):
    return {"Authorization": f"Bearer {_make_auth_token(jwt_secret, 'user-123', 'test@example.com')}"}


@pytest.fixture
def auth_headers_b(jwt_secret):
    """Second user token for isolation tests."""
    return {"Authorization": f"Bearer {_make_auth_token(jwt_secret, 'user-456', 'b@test.com')}"}


@pytest.fixture
def primary_provider(fake_provider):
    return fake_provider(reply="Coach says: keep going.")


@pytest.fixture
def selector(primary_provider):
    return ResponseSelector([LLMTier(primary_provider, ResponseSource.PRIMARY)])


@pytest.fixture
def dead_selector(fake_provider):
    """Both LLM tiers fail, so only the static fallback answers."""
    return ResponseSelector(
        [
            LLMTier(fake_provider(error=LLMError("primary down")), ResponseSource.PRIMARY),
            LLMTier(fake_provider(error=LLMError("local down")), ResponseSource.SECONDARY),
        ]
    )


@pytest.fixture
def make_client(jwt_secret):
    """Build a TestClient wired to the given store handle and selector."""
    env_patch = patch.dict(os.environ, {"AUTH_JWT_SECRET": jwt_secret})
    env_patch.start()

    def _make(store, selector):
        app.dependency_overrides[get_store] = lambda: store
        app.dependency_overrides[get_selector] = lambda: selector
        return TestClient(app)

    yield _make

    app.dependency_overrides.clear()
    env_patch.stop()


@pytest.fixture
def client(make_client, store_handle, selector):
    return make_client(store_handle, selector)


@pytest.fixture
def degraded_client(make_client, down_handle, dead_selector):
    """Store unreachable and every LLM tier failing."""
    return make_client(down_handle, dead_selector)
