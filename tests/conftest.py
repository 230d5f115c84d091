# =============================================================================
# tests/conftest.py
# Pytest Configuration and Fixtures
# =============================================================================

import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock

from petcare_core.data import MockGateway


FIXED_NOW = datetime(2025, 3, 15, 12, 0, 0, tzinfo=timezone.utc)
USER_ID = "user-1"
USER_EMAIL = "ana@example.com"
USER_PASSWORD = "s3cret-pass"


# =============================================================================
# CLOCK FIXTURES
# =============================================================================

@pytest.fixture
def fixed_now():
    """Reference instant used across tests"""
    return FIXED_NOW


@pytest.fixture
def clock(fixed_now):
    """Clock callable returning the fixed instant"""
    return lambda: fixed_now


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_pet_rows():
    """Pet rows as the backend returns them, newest first"""
    return [
        {
            "id": "pet-b",
            "user_id": USER_ID,
            "name": "Bella",
            "type": "cat",
            "date_of_birth": "2024-02-15",
            "weight": 4.2,
            "weight_unit": "kg",
            "photo_url": "pet-photos/1700000000000.jpg",
            "created_at": "2025-02-01T10:00:00Z",
            "updated_at": "2025-02-01T10:00:00Z",
        },
        {
            "id": "pet-a",
            "user_id": USER_ID,
            "name": "Rex",
            "type": "dog",
            "breed": "Beagle",
            "date_of_birth": "2023-03-15",
            "weight": 11.5,
            "weight_unit": "kg",
            "created_at": "2025-01-01T10:00:00Z",
            "updated_at": "2025-01-01T10:00:00Z",
        },
    ]


@pytest.fixture
def sample_weight_rows():
    """Weight records of pet-a in ascending recorded_at order"""
    return [
        {"id": "w1", "pet_id": "pet-a", "weight": 10.8, "weight_unit": "kg",
         "recorded_at": "2025-01-01T08:00:00Z", "created_at": "2025-01-01T08:00:00Z"},
        {"id": "w2", "pet_id": "pet-a", "weight": 11.2, "weight_unit": "kg",
         "recorded_at": "2025-02-01T08:00:00Z", "created_at": "2025-02-01T08:00:00Z"},
        {"id": "w3", "pet_id": "pet-a", "weight": 11.5, "weight_unit": "kg",
         "recorded_at": "2025-03-01T08:00:00Z", "created_at": "2025-03-01T08:00:00Z"},
    ]


@pytest.fixture
def sample_expense_rows():
    """Expenses of pet-a across two months"""
    return [
        {"id": "e1", "pet_id": "pet-a", "category": "food", "amount": 10.0,
         "description": "Kibble", "date": "2025-03-01", "created_at": "2025-03-01T09:00:00Z"},
        {"id": "e2", "pet_id": "pet-a", "category": "vet", "amount": 25.0,
         "description": "Checkup", "date": "2025-02-01", "created_at": "2025-02-01T09:00:00Z"},
    ]


# =============================================================================
# MOCK FIXTURES
# =============================================================================

@pytest.fixture
def mock_gateway(clock):
    """In-memory gateway with a signed-in user"""
    gateway = MockGateway(clock=clock)
    gateway.add_user(USER_ID, USER_EMAIL, USER_PASSWORD, sign_in=True)
    return gateway


@pytest.fixture
def signed_out_gateway(clock):
    """In-memory gateway with a registered but signed-out user"""
    gateway = MockGateway(clock=clock)
    gateway.add_user(USER_ID, USER_EMAIL, USER_PASSWORD)
    return gateway


@pytest.fixture
def seeded_gateway(mock_gateway, sample_pet_rows, sample_weight_rows):
    """Signed-in gateway holding two pets and a weight history"""
    mock_gateway.seed("pets", sample_pet_rows)
    mock_gateway.seed("weight_records", sample_weight_rows)
    return mock_gateway


@pytest.fixture
def mock_supabase():
    """Mock Supabase client whose query builder chains return itself"""
    mock_client = MagicMock()

    builder = MagicMock()
    for method in ("select", "eq", "order", "range", "limit", "insert", "update", "delete", "upsert"):
        getattr(builder, method).return_value = builder
    builder.execute.return_value = MagicMock(data=[])

    mock_client.table.return_value = builder
    mock_client.builder = builder
    return mock_client


