"""
Test fixtures and factories for authentication-related test data.
"""

from datetime import datetime, timezone
from typing import Any, Dict
from unittest.mock import Mock

import pytest
from prisma.enums import UserRole
from prisma.models import User

from src.domains.auth.security import hash_password

TEST_PASSWORD = "correct-horse"


@pytest.fixture(scope="session")
def test_password_hash() -> str:
    """bcrypt hash of TEST_PASSWORD, computed once per session."""
    return hash_password(TEST_PASSWORD)


@pytest.fixture
def mock_user(test_password_hash: str) -> Mock:
    """Mock User object for testing."""
    user = Mock(spec=User)
    user.id = 1
    user.email = "owner@example.com"
    user.passwordHash = test_password_hash
    user.firstName = "Olive"
    user.lastName = "Owner"
    user.role = UserRole.user
    user.createdAt = datetime(2024, 1, 1, tzinfo=timezone.utc)
    user.updatedAt = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return user


@pytest.fixture
def mock_admin(mock_user: Mock) -> Mock:
    """Mock User object holding the admin role."""
    mock_user.id = 99
    mock_user.email = "admin@example.com"
    mock_user.role = UserRole.admin
    return mock_user


class AuthTestData:
    """Helper class for generating consistent auth test data."""

    @staticmethod
    def register_payload(email: str = "new@example.com") -> Dict[str, Any]:
        return {
            "email": email,
            "password": "secret123",
            "firstName": "New",
            "lastName": "User",
        }

    @staticmethod
    def invalid_jwt_payload() -> Dict[str, Any]:
        """Generate invalid JWT payload missing required claims."""
        return {"invalid": "payload", "missing": "sub_claim"}
