"""
Pytest configuration and shared fixtures for hippotrack tests.
"""

import sys
from pathlib import Path
from typing import Any

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from hippotrack.config import Policy  # noqa: E402
from hippotrack.engine import PayloadComposer  # noqa: E402
from hippotrack.telemetry import reset_loggers  # noqa: E402

FIXED_NOW = 1_700_000_000.0


# =============================================================================
# Update Fixtures
# =============================================================================


@pytest.fixture
def user() -> dict[str, Any]:
    """Telegram user that sent the update."""
    return {
        "id": 1,
        "is_bot": False,
        "first_name": "Ada",
        "username": "u",
        "language_code": "en",
    }


@pytest.fixture
def private_chat() -> dict[str, Any]:
    """Private chat with the user."""
    return {"id": 2, "type": "private", "first_name": "Ada", "username": "u"}


@pytest.fixture
def text_update(user: dict[str, Any], private_chat: dict[str, Any]) -> dict[str, Any]:
    """Plain text message update."""
    return {
        "update_id": 1000,
        "message": {
            "message_id": 10,
            "from": user,
            "chat": private_chat,
            "date": 1699999999,
            "text": "Hello world",
        },
    }


@pytest.fixture
def payment_update(user: dict[str, Any], private_chat: dict[str, Any]) -> dict[str, Any]:
    """Successful payment message update."""
    return {
        "update_id": 1001,
        "message": {
            "message_id": 11,
            "from": user,
            "chat": private_chat,
            "date": 1699999999,
            "successful_payment": {
                "currency": "USD",
                "total_amount": 500,
                "invoice_payload": "abc",
                "telegram_payment_charge_id": "t1",
                "provider_payment_charge_id": "p1",
            },
        },
    }


@pytest.fixture
def photo_update(user: dict[str, Any], private_chat: dict[str, Any]) -> dict[str, Any]:
    """Photo message update with two sizes."""
    return {
        "update_id": 1002,
        "message": {
            "message_id": 12,
            "from": user,
            "chat": private_chat,
            "date": 1699999999,
            "photo": [
                {
                    "file_id": "f-small",
                    "file_unique_id": "u-small",
                    "width": 90,
                    "height": 60,
                    "file_size": 1200,
                },
                {
                    "file_id": "f-large",
                    "file_unique_id": "u-large",
                    "width": 1280,
                    "height": 853,
                    "file_size": 88000,
                },
            ],
            "caption": "holiday",
        },
    }


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def policy() -> Policy:
    """Default policy."""
    return Policy()


@pytest.fixture
def composer(policy: Policy) -> PayloadComposer:
    """Composer with a fixed clock."""
    return PayloadComposer(policy, clock=lambda: FIXED_NOW)


@pytest.fixture(autouse=True)
def reset_logger_state():
    """Reset logger cache around each test."""
    reset_loggers()
    yield
    reset_loggers()


# =============================================================================
# Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Property-based tests")
