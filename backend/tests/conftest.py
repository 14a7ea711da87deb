"""
Central pytest configuration for the dental laboratory API tests.

This file provides common fixtures, test markers, and setup for unit,
API and integration tests.
"""

import os
from typing import Dict, Optional

import pytest

os.environ.setdefault("FLASK_ENV", "testing")
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")

from dentallab.core.config import Settings  # noqa: E402
from dentallab.core.security import create_access_token  # noqa: E402
from dentallab.main import create_app  # noqa: E402
from dentallab.services.registry import build_in_memory_registry  # noqa: E402
from tests.factories.entity_factories import (  # noqa: E402
    SequentialIdGenerator,
    address_payload,
    make_address,
)

TEST_JWT_SECRET = "test-secret-key-with-at-least-32-characters"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "api: mark test as API endpoint test")
    config.addinivalue_line("markers", "services: mark test as service layer test")
    config.addinivalue_line("markers", "repositories: mark test as repository test")
    config.addinivalue_line("markers", "security: mark test as security-related")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test file location."""
    for item in items:
        path = str(item.fspath)
        if "unit" in path:
            item.add_marker(pytest.mark.unit)
        if "integration" in path:
            item.add_marker(pytest.mark.integration)
        if os.sep + "api" + os.sep in path:
            item.add_marker(pytest.mark.api)


# =====================================================
# APPLICATION FIXTURES
# =====================================================


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="testing",
        log_level="DEBUG",
        jwt_secret_key=TEST_JWT_SECRET,
        rate_limit_enabled=False,
    )


@pytest.fixture
def registry():
    """Fresh in-memory repositories and services with predictable IDs."""
    return build_in_memory_registry(SequentialIdGenerator())


@pytest.fixture
def app(settings, registry):
    return create_app(settings=settings, registry=registry, configure_logging=False)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_token():
    """Factory issuing tokens signed with the test secret."""

    def _make_token(
        user_id: str = "user-1", laboratory_id: Optional[str] = None
    ) -> str:
        return create_access_token(
            user_id, laboratory_id=laboratory_id, secret=TEST_JWT_SECRET
        )

    return _make_token


@pytest.fixture
def auth_headers(make_token):
    """Factory building Authorization headers for a user/laboratory pair."""

    def _auth_headers(
        laboratory_id: Optional[str] = None, user_id: str = "user-1"
    ) -> Dict[str, str]:
        token = make_token(user_id=user_id, laboratory_id=laboratory_id)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


# =====================================================
# DOMAIN DATA FIXTURES
# =====================================================


@pytest.fixture
def address():
    return make_address()


@pytest.fixture
def lab_a(registry):
    return registry.laboratory_service.create_laboratory(
        name="Lab A", email="contact@lab-a.com", phone="+5511900000001",
        address=make_address(),
    )


@pytest.fixture
def lab_b(registry):
    return registry.laboratory_service.create_laboratory(
        name="Lab B", email="contact@lab-b.com", phone="+5511900000002",
        address=make_address(),
    )


@pytest.fixture
def lab_payload():
    return {
        "name": "Smile Lab",
        "email": "contact@smilelab.com",
        "phone": "+55 11 99999 9999",
        "address": address_payload(),
    }
