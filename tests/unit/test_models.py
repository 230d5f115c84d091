# =============================================================================
# tests/unit/test_models.py
# Unit Tests for records, dates and table contracts
# =============================================================================

import pytest
from datetime import date, datetime, timedelta, timezone

from petcare_core.errors import ValidationFailedError
from petcare_core.models import (
    EXPENSES,
    PETS,
    Expense,
    ExpenseCategory,
    Medication,
    Pet,
    VetVisit,
    get_entity_spec,
    serialize_fields,
)
from petcare_core.models.dates import (
    calendar_date_of,
    parse_calendar_date,
    parse_instant,
    to_iso_string,
)


class TestDates:
    """Test calendar date vs instant parsing"""

    def test_calendar_date_is_read_literally(self):
        """An offset after the date never shifts the day"""
        assert parse_calendar_date("2024-03-15") == date(2024, 3, 15)
        assert parse_calendar_date("2024-03-15T23:00:00-05:00") == date(2024, 3, 15)

    def test_calendar_date_blank(self):
        assert parse_calendar_date(None) is None
        assert parse_calendar_date("") is None

    def test_calendar_date_invalid(self):
        with pytest.raises(ValueError):
            parse_calendar_date("15/03/2024")

    def test_instant_converted_to_utc(self):
        parsed = parse_instant("2025-03-15T07:00:00-05:00")
        assert parsed == datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc)
        assert parsed.tzinfo == timezone.utc

    def test_naive_instant_taken_as_utc(self):
        assert parse_instant("2025-03-15T12:00:00") == datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc)

    def test_postgres_timestamp_format(self):
        parsed = parse_instant("2025-03-15T12:00:00.123456+00:00")
        assert parsed.microsecond == 123456

    def test_to_iso_string_uses_z(self):
        assert to_iso_string(datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc)) == "2025-03-15T12:00:00Z"

    def test_calendar_date_of_instant(self):
        instant = datetime(2025, 3, 14, 22, 0, tzinfo=timezone(timedelta(hours=-3)))
        assert calendar_date_of(instant) == date(2025, 3, 15)


class TestRecords:
    """Test building records from rows"""

    def test_from_row_ignores_unknown_columns(self, sample_pet_rows):
        pet = Pet.from_row({**sample_pet_rows[1], "legacy_column": 1})

        assert pet.id == "pet-a"
        assert pet.date_of_birth == date(2023, 3, 15)
        assert pet.created_at == datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc)
        assert pet.photo_url is None

    def test_records_are_immutable(self):
        pet = Pet(id="p", name="Rex")
        with pytest.raises(AttributeError):
            pet.name = "Other"

    def test_array_columns_become_tuples(self):
        med = Medication.from_row({"id": "m", "name": "A", "dosage": "1", "time_of_day": ["08:00", "20:00"]})
        assert med.time_of_day == ("08:00", "20:00")
        assert Medication(id="m2", time_of_day=None).time_of_day == ()

    def test_visit_times_are_instants(self):
        visit = VetVisit.from_row({"id": "v", "vet_name": "Dr.", "scheduled_at": "2025-03-20T09:30:00Z"})
        assert visit.scheduled_at.tzinfo is not None

    def test_expense_date_is_calendar_date(self):
        expense = Expense.from_row({"id": "e", "amount": 3, "date": "2025-03-01"})
        assert expense.date == date(2025, 3, 1)

    def test_serialize_fields(self):
        payload = serialize_fields({
            "category": ExpenseCategory.VET,
            "date": date(2025, 3, 1),
            "scheduled_at": datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc),
            "time_of_day": ("08:00",),
            "amount": 12.5,
        })
        assert payload == {
            "category": "vet",
            "date": "2025-03-01",
            "scheduled_at": "2025-03-01T09:00:00Z",
            "time_of_day": ["08:00"],
            "amount": 12.5,
        }


class TestEntitySpecs:
    """Test per-table contracts"""

    def test_registry_lookup(self):
        assert get_entity_spec("pets") is PETS

    def test_unknown_table(self):
        with pytest.raises(KeyError):
            get_entity_spec("owners")

    def test_expense_requires_amount_and_description(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            EXPENSES.validate({"pet_id": "p", "description": "Food"})
        assert exc_info.value.message == "Please fill in amount and description"
        assert exc_info.value.field == "amount"

    def test_expense_amount_must_be_numeric(self):
        with pytest.raises(ValidationFailedError):
            EXPENSES.validate({"pet_id": "p", "amount": "ten", "description": "Food"})

    def test_nan_amount_rejected(self):
        with pytest.raises(ValidationFailedError):
            EXPENSES.validate({"pet_id": "p", "amount": float("nan"), "description": "Food"})

    def test_partial_skips_absent_required_fields(self):
        EXPENSES.validate_partial({"notes": "receipt lost"})

    def test_enum_values_accepted(self):
        EXPENSES.validate({"pet_id": "p", "amount": 4, "description": "Food", "category": ExpenseCategory.FOOD})
