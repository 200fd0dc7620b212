"""
Global pytest configuration and fixtures for the OMW CRM API test suite.
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock, Mock

# Set test environment variables before settings are loaded
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only-32-chars"

import jwt
import pytest
from fastapi.testclient import TestClient
from prisma.enums import UserRole

from src.domains.auth.types import CurrentUser
from src.main import app
from tests.helpers.fake_prisma import FakePrisma

# Import fixtures from fixture modules
from tests.fixtures.auth_fixtures import *  # noqa: F403, F401, E402
from tests.fixtures.contact_fixtures import *  # noqa: F403, F401, E402
from tests.fixtures.share_fixtures import *  # noqa: F403, F401, E402

MODEL_METHODS = (
    "find_first",
    "find_unique",
    "find_many",
    "create",
    "create_many",
    "update",
    "delete",
    "count",
    "group_by",
)

MODELS = (
    "user",
    "organization",
    "contact",
    "dealstage",
    "deal",
    "activity",
    "contactnote",
    "activitynote",
    "share",
    "systemsetting",
)


@pytest.fixture
def mock_prisma() -> Mock:
    """
    Mock Prisma client for unit tests that don't need real database.

    tx() yields the same mock so transactional code can be asserted on
    directly.
    """
    mock_db = Mock()
    for model in MODELS:
        delegate = Mock()
        for method in MODEL_METHODS:
            setattr(delegate, method, AsyncMock())
        setattr(mock_db, model, delegate)

    transaction = MagicMock()
    transaction.__aenter__ = AsyncMock(return_value=mock_db)
    transaction.__aexit__ = AsyncMock(return_value=False)
    mock_db.tx = Mock(return_value=transaction)
    return mock_db


@pytest.fixture
def fake_db() -> FakePrisma:
    """In-memory database for multi-step access scenarios."""
    return FakePrisma()


@pytest.fixture
def test_jwt_secret() -> str:
    """JWT secret for generating test tokens."""
    return "test-secret-key-for-testing-only-32-chars"


@pytest.fixture
def valid_jwt_payload() -> Dict[str, Any]:
    """Valid JWT payload for testing."""
    now = datetime.now(timezone.utc)
    return {
        "sub": "1",
        "email": "owner@example.com",
        "role": "user",
        "iat": now,
        "exp": now + timedelta(hours=1),
    }


@pytest.fixture
def valid_jwt_token(test_jwt_secret: str, valid_jwt_payload: Dict[str, Any]) -> str:
    """Generate a valid JWT token for testing."""
    return jwt.encode(valid_jwt_payload, test_jwt_secret, algorithm="HS256")


@pytest.fixture
def invalid_jwt_token(valid_jwt_payload: Dict[str, Any]) -> str:
    """Generate a token signed with the wrong secret."""
    return jwt.encode(valid_jwt_payload, "wrong-secret", algorithm="HS256")


@pytest.fixture
def auth_headers(valid_jwt_token: str) -> Dict[str, str]:
    """Generate authentication headers with valid JWT token."""
    return {"Authorization": f"Bearer {valid_jwt_token}"}


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client for API endpoint testing."""
    return TestClient(app)


# Test data fixtures for consistent test scenarios
@pytest.fixture
def current_user() -> CurrentUser:
    """A regular authenticated user."""
    return CurrentUser(id=1, email="owner@example.com", role=UserRole.user)


@pytest.fixture
def other_user() -> CurrentUser:
    """A second regular user with no relationship to the first."""
    return CurrentUser(id=2, email="grantee@example.com", role=UserRole.user)


@pytest.fixture
def admin_user() -> CurrentUser:
    return CurrentUser(id=99, email="admin@example.com", role=UserRole.admin)
