# =============================================================================
# petcare_core/state/care_store.py
# Care records of one pet: visits, medications, feeding, expenses, documents
# =============================================================================

from __future__ import annotations
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Union

from petcare_core.config import DEFAULT_BUCKET, DEFAULT_SIGNED_URL_TTL
from petcare_core.data import Gateway, document_path, media_url
from petcare_core.errors import NotFoundError, ValidationFailedError, error_boundary
from petcare_core.models import (
    DOCUMENTS, EXPENSES, FEEDING_LOGS, FEEDING_SCHEDULES, MEDICATION_LOGS,
    MEDICATIONS, VET_VISITS, Document, DocumentType, Expense, FeedingLog,
    FeedingSchedule, Medication, MedicationLog, VetVisit,
)
from petcare_core.models.dates import utc_now
from petcare_core.services import BaseService, ServiceResult
from .entity_store import EntityStore, Scope

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class CareRecordStore(BaseService):
    """
    Every care record kind of one pet, each in its own EntityStore.

    Each sub-store has its own in-flight slot, so logging a feeding while
    the expense list refreshes is allowed.

    Usage:
        care = CareRecordStore(gateway, pet.id)
        care.load_all()
        care.add_visit({"vet_name": "Dr. Ruiz", "scheduled_at": when})
        upcoming, past = partition_visits(care.visits.items, utc_now())
    """

    def __init__(
        self,
        gateway: Gateway,
        pet_id: str,
        bucket: str = DEFAULT_BUCKET,
        signed_url_ttl: int = DEFAULT_SIGNED_URL_TTL,
        clock: Callable[[], datetime] = utc_now,
    ):
        super().__init__()
        self.gateway = gateway
        self.pet_id = pet_id
        self.bucket = bucket
        self.signed_url_ttl = signed_url_ttl
        self.clock = clock

        self.visits: EntityStore[VetVisit] = EntityStore(gateway, VET_VISITS, clock=clock)
        self.medications: EntityStore[Medication] = EntityStore(gateway, MEDICATIONS, clock=clock)
        self.medication_logs: EntityStore[MedicationLog] = EntityStore(gateway, MEDICATION_LOGS, clock=clock)
        self.feeding_schedules: EntityStore[FeedingSchedule] = EntityStore(gateway, FEEDING_SCHEDULES, clock=clock)
        self.feeding_logs: EntityStore[FeedingLog] = EntityStore(gateway, FEEDING_LOGS, clock=clock)
        self.expenses: EntityStore[Expense] = EntityStore(gateway, EXPENSES, clock=clock)
        self.documents: EntityStore[Document] = EntityStore(gateway, DOCUMENTS, clock=clock)

    @property
    def _pet_scoped(self) -> List[EntityStore]:
        return [
            self.visits, self.medications, self.feeding_schedules,
            self.feeding_logs, self.expenses, self.documents,
        ]

    @property
    def busy(self) -> bool:
        return any(store.busy for store in self._pet_scoped + [self.medication_logs])

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_all(self) -> ServiceResult:
        """
        Load every pet-scoped collection.

        Each collection loads independently; one failure does not stop the
        others. The result fails with the first error and lists every
        failing table in ``metadata["errors"]``.
        """
        scope = Scope("pet_id", self.pet_id)
        errors: Dict[str, str] = {}

        with self.log_operation("Loading care records", pet_id=self.pet_id):
            for store in self._pet_scoped:
                result = store.load(scope)
                if not result:
                    errors[store.spec.table] = result.error

        if errors:
            first = next(iter(errors.values()))
            return ServiceResult.fail(first, error_code="GATEWAY_ERROR", metadata={"errors": errors})
        return ServiceResult.ok()

    def load_medication_logs(self, medication_id: str) -> ServiceResult:
        return self.medication_logs.load(Scope("medication_id", medication_id))

    # ------------------------------------------------------------------
    # Vet visits
    # ------------------------------------------------------------------

    def add_visit(self, fields: Dict[str, Any]) -> ServiceResult:
        return self.visits.create(self._for_pet(fields))

    def complete_visit(self, visit_id: str) -> ServiceResult:
        return self.visits.update(visit_id, {"completed": True, "completed_at": self.clock()})

    # ------------------------------------------------------------------
    # Medications
    # ------------------------------------------------------------------

    def add_medication(self, fields: Dict[str, Any]) -> ServiceResult:
        return self.medications.create(self._for_pet(fields))

    def toggle_medication(self, medication_id: str) -> ServiceResult:
        medication = self.medications.get(medication_id)
        if medication is None:
            return ServiceResult.from_exception(NotFoundError(
                f"Medication {medication_id} is no longer available",
                record_id=medication_id,
                table=MEDICATIONS.table,
            ))
        return self.medications.update(medication_id, {"active": not medication.active})

    def log_medication_dose(
        self,
        medication_id: str,
        skipped: bool = False,
        notes: Optional[str] = None,
    ) -> ServiceResult:
        values: Dict[str, Any] = {
            "medication_id": medication_id,
            "given_at": self.clock(),
            "skipped": skipped,
        }
        if notes:
            values["notes"] = notes
        return self.medication_logs.create(values)

    # ------------------------------------------------------------------
    # Feeding
    # ------------------------------------------------------------------

    def add_feeding_schedule(self, fields: Dict[str, Any]) -> ServiceResult:
        return self.feeding_schedules.create(self._for_pet(fields))

    def add_feeding_log(self, fields: Dict[str, Any]) -> ServiceResult:
        values = self._for_pet(fields)
        values.setdefault("fed_at", self.clock())
        return self.feeding_logs.create(values)

    def log_feeding(self, schedule: FeedingSchedule) -> ServiceResult:
        """Quick-log one feeding of a schedule's food and portion."""
        return self.feeding_logs.create({
            "pet_id": self.pet_id,
            "feeding_schedule_id": schedule.id,
            "food_name": schedule.food_name,
            "portion_size": schedule.portion_size,
            "fed_at": self.clock(),
        })

    # ------------------------------------------------------------------
    # Expenses
    # ------------------------------------------------------------------

    def add_expense(self, fields: Dict[str, Any]) -> ServiceResult:
        values = self._for_pet(fields)
        values.setdefault("date", self.clock().date())
        return self.expenses.create(values)

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def upload_document(
        self,
        filename: str,
        data: bytes,
        content_type: Optional[str] = None,
        doc_type: Union[DocumentType, str] = DocumentType.OTHER,
        expiry_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> ServiceResult:
        """
        Upload a file to blob storage, then record it in the documents table.

        The row stores the storage path; use document_url() to open it. When
        the upload fails no row is written.
        """
        if not filename or not filename.strip():
            return ServiceResult.from_exception(
                ValidationFailedError("Document name is required", field="name")
            )

        content_type = content_type or DEFAULT_CONTENT_TYPE
        upload = self.safe_execute(
            f"Uploading document {filename}", self._upload_blob, filename, data, content_type
        )
        if not upload:
            return upload

        values: Dict[str, Any] = {
            "pet_id": self.pet_id,
            "name": filename,
            "type": doc_type,
            "file_url": upload.data,
            "file_type": content_type,
            "file_size": len(data),
        }
        if expiry_date is not None:
            values["expiry_date"] = expiry_date
        if notes:
            values["notes"] = notes

        result = self.documents.create(values)
        if not result:
            self.logger.warning(f"Document row not saved, blob {upload.data} is orphaned: {result.error}")
        return result

    def _upload_blob(self, filename: str, data: bytes, content_type: str) -> str:
        path = document_path(self.pet_id, filename, self.clock())
        self.gateway.upload_blob(self.bucket, path, data, content_type)
        return path

    @error_boundary(default_return=None)
    def document_url(self, document: Document) -> Optional[str]:
        """Fresh signed URL of a stored document, or None."""
        return media_url(self.gateway, self.bucket, document.file_url, self.signed_url_ttl)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _for_pet(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        values = dict(fields)
        values.setdefault("pet_id", self.pet_id)
        return values

    def clear(self) -> None:
        for store in self._pet_scoped + [self.medication_logs]:
            store.clear()
