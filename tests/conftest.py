"""Shared pytest fixtures and configuration."""

import os
import pytest
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("LOG_FORMAT", "text")

from property_manager.services.property_store import PropertyVersionStore
from property_manager.services.sessions import SessionContext
from property_manager.services.theme_store import JsonThemeStore
from property_manager.services.user_store import JsonUserStore
from property_manager.utils.config import StorageConfig


@pytest.fixture
def storage_config(tmp_path):
    """Storage rooted at a temporary directory."""
    return StorageConfig(data_root=str(tmp_path / "data"), public_base_path="/data")


@pytest.fixture
def store(storage_config):
    return PropertyVersionStore(storage_config)


@pytest.fixture
def theme_store(storage_config):
    return JsonThemeStore(storage_config)


@pytest.fixture
def user_store(storage_config):
    return JsonUserStore(storage_config)


@pytest.fixture
def frozen_clock():
    """Frozen clock that tests advance explicitly to control version stamps."""
    with freeze_time("2024-05-01 10:00:00") as frozen:
        yield frozen


@pytest.fixture
def admin_session():
    return SessionContext(user_id="u-admin", username="admin", roles=frozenset({"admin"}))


@pytest.fixture
def agent_session():
    return SessionContext(
        user_id="u-agent",
        username="agent",
        roles=frozenset({"agent"}),
        property_ids=frozenset({"villa_x"}),
    )


@pytest.fixture
def sample_booking_data():
    """Booking as stored in a property's rental unit."""
    return {
        "bookingId": "AB-123",
        "dateOfBooking": "2024-01-05",
        "names": "Maria Papadopoulou",
        "preferredLanguage": "el",
        "repeatVisit": "No",
        "hasArrived": "No",
        "from": "2024-06-01",
        "to": "2024-06-08",
    }
