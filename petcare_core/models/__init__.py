# =============================================================================
# petcare_core/models/__init__.py
# Domain records and per-table contracts
# =============================================================================

from .records import (
    Record,
    User,
    Pet,
    WeightRecord,
    VetVisit,
    Medication,
    MedicationLog,
    FeedingSchedule,
    FeedingLog,
    Expense,
    Document,
    PetType,
    WeightUnit,
    SizeUnit,
    VisitType,
    MedicationFrequency,
    ExpenseCategory,
    DocumentType,
    serialize_fields,
)
from .entities import (
    EntitySpec,
    InsertPolicy,
    ENTITY_SPECS,
    get_entity_spec,
    PETS,
    WEIGHT_RECORDS,
    VET_VISITS,
    MEDICATIONS,
    MEDICATION_LOGS,
    FEEDING_SCHEDULES,
    FEEDING_LOGS,
    EXPENSES,
    DOCUMENTS,
)

__all__ = [
    "Record", "User", "Pet", "WeightRecord", "VetVisit", "Medication",
    "MedicationLog", "FeedingSchedule", "FeedingLog", "Expense", "Document",
    "PetType", "WeightUnit", "SizeUnit", "VisitType", "MedicationFrequency",
    "ExpenseCategory", "DocumentType", "serialize_fields",
    "EntitySpec", "InsertPolicy", "ENTITY_SPECS", "get_entity_spec",
    "PETS", "WEIGHT_RECORDS", "VET_VISITS", "MEDICATIONS", "MEDICATION_LOGS",
    "FEEDING_SCHEDULES", "FEEDING_LOGS", "EXPENSES", "DOCUMENTS",
]
