# =============================================================================
# tests/unit/test_care_store.py
# Unit Tests for CareRecordStore
# =============================================================================

import pytest
from datetime import date, timedelta

from petcare_core.analytics import partition_visits, summarize_expenses
from petcare_core.models import DocumentType
from petcare_core.state import CareRecordStore


@pytest.fixture
def care(mock_gateway, sample_expense_rows, clock):
    mock_gateway.seed("expenses", sample_expense_rows)
    mock_gateway.seed("medications", [
        {"id": "m1", "pet_id": "pet-a", "name": "Heartgard", "dosage": "1 chew",
         "frequency": "monthly", "active": True, "created_at": "2025-01-05T00:00:00Z"},
    ])
    mock_gateway.seed("feeding_schedules", [
        {"id": "f1", "pet_id": "pet-a", "food_name": "Kibble", "portion_size": "1 cup",
         "feeding_times": ["08:00", "18:00"], "created_at": "2025-01-05T00:00:00Z"},
    ])
    store = CareRecordStore(mock_gateway, "pet-a", clock=clock)
    store.load_all()
    return store


class TestLoading:
    """Test loading every collection of a pet"""

    def test_load_all(self, care):
        assert [e.id for e in care.expenses.items] == ["e1", "e2"]
        assert care.medications.get("m1").frequency == "monthly"
        assert care.feeding_schedules.get("f1").feeding_times == ("08:00", "18:00")
        assert care.visits.items == ()

    def test_partial_failure_reports_every_table(self, care, mock_gateway):
        mock_gateway.fail_next("query", "timeout", table="expenses")
        mock_gateway.fail_next("query", "permission denied", table="documents")

        result = care.load_all()

        assert not result.success
        assert result.error == "timeout"
        assert result.metadata["errors"] == {"expenses": "timeout", "documents": "permission denied"}
        assert len(care.expenses) == 2
        assert len(care.medications) == 1

    def test_other_pets_records_not_loaded(self, mock_gateway, clock):
        mock_gateway.seed("expenses", [
            {"id": "other", "pet_id": "pet-b", "category": "food", "amount": 1, "description": "x", "date": "2025-03-01"},
        ])
        store = CareRecordStore(mock_gateway, "pet-a", clock=clock)
        store.load_all()

        assert store.expenses.get("other") is None


class TestVisits:
    """Test vet visits"""

    def test_add_visit_requires_vet_name(self, care, fixed_now):
        result = care.add_visit({"scheduled_at": fixed_now + timedelta(days=1)})

        assert result.error == "Please enter vet name"
        assert result.metadata["field"] == "vet_name"

    def test_visits_sorted_by_schedule(self, care, fixed_now):
        late = care.add_visit({"vet_name": "Dr. Late", "scheduled_at": fixed_now + timedelta(days=9)})
        early = care.add_visit({"vet_name": "Dr. Early", "scheduled_at": fixed_now + timedelta(days=2)})

        assert [v.id for v in care.visits.items] == [early.data.id, late.data.id]
        assert early.data.pet_id == "pet-a"

    def test_complete_visit_moves_it_to_past(self, care, fixed_now):
        visit = care.add_visit({"vet_name": "Dr. Ruiz", "scheduled_at": fixed_now + timedelta(days=2)}).data
        upcoming, _ = partition_visits(care.visits.items, fixed_now)
        assert [v.id for v in upcoming] == [visit.id]

        result = care.complete_visit(visit.id)

        assert result.data.completed is True
        assert result.data.completed_at == fixed_now
        upcoming, past = partition_visits(care.visits.items, fixed_now)
        assert upcoming == []
        assert [v.id for v in past] == [visit.id]


class TestMedications:
    """Test medications and dose logs"""

    def test_add_medication_requires_dosage(self, care):
        result = care.add_medication({"name": "Apoquel"})
        assert result.error == "Please fill in medication name and dosage"

    def test_toggle_medication(self, care):
        result = care.toggle_medication("m1")

        assert result.success
        assert care.medications.get("m1").active is False
        assert care.toggle_medication("m1").data.active is True

    def test_toggle_unknown_medication(self, care, mock_gateway):
        result = care.toggle_medication("nope")

        assert result.error_code == "NOT_FOUND"
        assert mock_gateway.calls_to("update") == 0

    def test_log_dose(self, care, fixed_now, mock_gateway):
        result = care.log_medication_dose("m1")

        assert result.data.medication_id == "m1"
        assert result.data.given_at == fixed_now
        assert result.data.skipped is False
        assert mock_gateway.tables["medication_logs"][0]["given_at"] == "2025-03-15T12:00:00Z"

    def test_log_skipped_dose_with_notes(self, care):
        result = care.log_medication_dose("m1", skipped=True, notes="Refused")
        assert result.data.skipped is True
        assert result.data.notes == "Refused"

    def test_load_medication_logs(self, care):
        care.log_medication_dose("m1")
        care.medication_logs.clear()

        result = care.load_medication_logs("m1")

        assert result.success
        assert len(care.medication_logs) == 1


class TestFeeding:
    """Test feeding schedules and logs"""

    def test_schedule_requires_portion(self, care):
        result = care.add_feeding_schedule({"food_name": "Kibble"})
        assert result.error == "Please fill in food name and portion size"

    def test_log_feeding_copies_schedule(self, care, fixed_now):
        schedule = care.feeding_schedules.get("f1")

        result = care.log_feeding(schedule)

        log = result.data
        assert log.feeding_schedule_id == "f1"
        assert log.food_name == "Kibble"
        assert log.portion_size == "1 cup"
        assert log.fed_at == fixed_now
        assert care.feeding_logs.items[0].id == log.id

    def test_feeding_logs_newest_first(self, care, fixed_now):
        older = care.add_feeding_log({"food_name": "Treat", "portion_size": "2", "fed_at": fixed_now - timedelta(hours=5)})
        newer = care.add_feeding_log({"food_name": "Kibble", "portion_size": "1 cup"})

        assert [log.id for log in care.feeding_logs.items] == [newer.data.id, older.data.id]


class TestExpenses:
    """Test expenses"""

    def test_add_expense_defaults_to_today(self, care):
        result = care.add_expense({"category": "grooming", "amount": 40, "description": "Bath"})

        assert result.data.date == date(2025, 3, 15)
        assert [e.id for e in care.expenses.items][0] == result.data.id

    def test_amount_must_be_positive(self, care):
        result = care.add_expense({"amount": -5, "description": "Refund"})
        assert result.error == "Amount must be a positive number"

    def test_summary_follows_collection(self, care):
        care.add_expense({"category": "food", "amount": 5.5, "description": "Treats"})

        summary = summarize_expenses(care.expenses.items, date(2025, 3, 15))

        assert summary.current_month_total == pytest.approx(15.5)
        assert summary.total == pytest.approx(40.5)
        assert summary.category_totals["food"] == pytest.approx(15.5)


class TestDocuments:
    """Test document upload and URLs"""

    def test_upload_document(self, care, mock_gateway):
        result = care.upload_document(
            "rabies cert.pdf",
            b"%PDF-1.7",
            content_type="application/pdf",
            doc_type=DocumentType.VACCINATION,
            expiry_date=date(2026, 3, 1),
        )

        doc = result.data
        assert doc.name == "rabies cert.pdf"
        assert doc.type == "vaccination"
        assert doc.file_size == 8
        assert doc.file_type == "application/pdf"
        assert doc.expiry_date == date(2026, 3, 1)
        assert doc.file_url.startswith("documents/pet-a/")
        assert doc.file_url.endswith("-rabies_cert.pdf")
        assert ("pets", doc.file_url) in mock_gateway.blobs

    def test_default_content_type(self, care):
        doc = care.upload_document("notes.bin", b"\x00\x01").data
        assert doc.file_type == "application/octet-stream"
        assert doc.type == "other"

    def test_failed_upload_writes_no_row(self, care, mock_gateway):
        mock_gateway.fail_next("upload", "Bucket not found")

        result = care.upload_document("x.pdf", b"1")

        assert result.error == "Bucket not found"
        assert mock_gateway.calls_to("insert") == 0
        assert len(care.documents) == 0

    def test_blank_filename(self, care, mock_gateway):
        result = care.upload_document("  ", b"1")

        assert result.error_code == "VALIDATION_FAILED"
        assert mock_gateway.calls_to("upload") == 0

    def test_document_url(self, care, mock_gateway):
        doc = care.upload_document("x.pdf", b"1").data

        url = care.document_url(doc)

        assert url.startswith(f"https://mock.storage/pets/{doc.file_url}")
        assert mock_gateway.calls_to("signed_url") == 1

    def test_document_url_failure(self, care):
        doc = care.upload_document("x.pdf", b"1").data
        care.bucket = "other-bucket"

        assert care.document_url(doc) is None

    def test_not_busy_after_operations(self, care):
        care.upload_document("x.pdf", b"1")
        assert care.busy is False

    def test_clear(self, care):
        care.clear()
        assert len(care.expenses) == 0
        assert len(care.medications) == 0
