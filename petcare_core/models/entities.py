# =============================================================================
# petcare_core/models/entities.py
# Per-table contracts: ordering, ownership, required fields
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Generic, Optional, Tuple, Type, TypeVar

from petcare_core.errors import ValidationFailedError
from .records import (
    Record, Pet, WeightRecord, VetVisit, Medication, MedicationLog,
    FeedingSchedule, FeedingLog, Expense, Document,
    PetType, WeightUnit, SizeUnit, VisitType, MedicationFrequency,
    ExpenseCategory, DocumentType,
)

T = TypeVar("T", bound=Record)

Validator = Callable[[Dict[str, Any]], None]


class InsertPolicy(Enum):
    """Where a newly created record goes in its Collection."""
    PREPEND = "prepend"    # newest first
    SORTED = "sorted"      # re-sort on the order column


@dataclass(frozen=True)
class EntitySpec(Generic[T]):
    """
    Contract of one record kind.

    Attributes:
        table: Backend table name
        record_cls: Record dataclass rows are parsed into
        order_by: Column the Collection is ordered by
        ascending: Sort direction of order_by
        owner_column: Foreign key to the owning parent
        user_owned: Owner is the signed-in user (resolved by the store)
        required: (field, message) pairs checked before any network call
        validators: Extra checks raising ValidationFailedError
        tracks_updated_at: Table has an updated_at column to refresh
        insert_policy: Placement of created records
    """
    table: str
    record_cls: Type[T]
    order_by: str = "created_at"
    ascending: bool = False
    owner_column: Optional[str] = None
    user_owned: bool = False
    required: Tuple[Tuple[str, str], ...] = ()
    validators: Tuple[Validator, ...] = ()
    tracks_updated_at: bool = False
    insert_policy: InsertPolicy = InsertPolicy.PREPEND

    def validate(self, values: Dict[str, Any]) -> None:
        """
        Check a create payload.

        Raises:
            ValidationFailedError: first missing/blank required field, or the
                first failing validator
        """
        for name, message in self.required:
            value = values.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationFailedError(message, field=name)
        for validator in self.validators:
            validator(values)

    def validate_partial(self, values: Dict[str, Any]) -> None:
        """Same checks as validate(), limited to the fields being changed."""
        for name, message in self.required:
            if name not in values:
                continue
            value = values[name]
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationFailedError(message, field=name)
        for validator in self.validators:
            validator(values)


# =============================================================================
# VALIDATORS
# =============================================================================

def positive_number(name: str, message: str) -> Validator:
    """Field, when present, must parse as a number greater than zero."""
    def _check(values: Dict[str, Any]) -> None:
        if values.get(name) is None:
            return
        try:
            number = float(values[name])
        except (TypeError, ValueError):
            raise ValidationFailedError(message, field=name)
        if number != number or number <= 0:  # NaN or non-positive
            raise ValidationFailedError(message, field=name)
    return _check


def one_of(name: str, enum_cls: Type[Enum]) -> Validator:
    """Field, when present, must be one of an enumeration's values."""
    allowed = [e.value for e in enum_cls]

    def _check(values: Dict[str, Any]) -> None:
        value = values.get(name)
        if value is None:
            return
        if isinstance(value, Enum):
            value = value.value
        if value not in allowed:
            raise ValidationFailedError(
                f"{name} must be one of: {', '.join(allowed)}",
                field=name,
            )
    return _check


# =============================================================================
# REGISTRY
# =============================================================================

PETS = EntitySpec(
    table="pets",
    record_cls=Pet,
    order_by="created_at",
    ascending=False,
    owner_column="user_id",
    user_owned=True,
    required=(("name", "Pet name is required"),),
    validators=(
        one_of("type", PetType),
        one_of("weight_unit", WeightUnit),
        one_of("size_unit", SizeUnit),
        positive_number("weight", "Weight must be a positive number"),
        positive_number("size", "Size must be a positive number"),
    ),
    tracks_updated_at=True,
)

WEIGHT_RECORDS = EntitySpec(
    table="weight_records",
    record_cls=WeightRecord,
    order_by="recorded_at",
    ascending=True,
    owner_column="pet_id",
    required=(("pet_id", "Pet is required"), ("weight", "Please enter a weight")),
    validators=(
        positive_number("weight", "Weight must be a positive number"),
        one_of("weight_unit", WeightUnit),
    ),
    insert_policy=InsertPolicy.SORTED,
)

VET_VISITS = EntitySpec(
    table="vet_visits",
    record_cls=VetVisit,
    order_by="scheduled_at",
    ascending=True,
    owner_column="pet_id",
    required=(
        ("pet_id", "Pet is required"),
        ("vet_name", "Please enter vet name"),
        ("scheduled_at", "Please choose a date and time"),
    ),
    validators=(one_of("visit_type", VisitType),),
    tracks_updated_at=True,
    insert_policy=InsertPolicy.SORTED,
)

MEDICATIONS = EntitySpec(
    table="medications",
    record_cls=Medication,
    owner_column="pet_id",
    required=(
        ("pet_id", "Pet is required"),
        ("name", "Please fill in medication name and dosage"),
        ("dosage", "Please fill in medication name and dosage"),
    ),
    validators=(one_of("frequency", MedicationFrequency),),
    tracks_updated_at=True,
)

MEDICATION_LOGS = EntitySpec(
    table="medication_logs",
    record_cls=MedicationLog,
    order_by="given_at",
    ascending=False,
    owner_column="medication_id",
    required=(("medication_id", "Medication is required"),),
)

FEEDING_SCHEDULES = EntitySpec(
    table="feeding_schedules",
    record_cls=FeedingSchedule,
    owner_column="pet_id",
    required=(
        ("pet_id", "Pet is required"),
        ("food_name", "Please fill in food name and portion size"),
        ("portion_size", "Please fill in food name and portion size"),
    ),
    tracks_updated_at=True,
)

FEEDING_LOGS = EntitySpec(
    table="feeding_logs",
    record_cls=FeedingLog,
    order_by="fed_at",
    ascending=False,
    owner_column="pet_id",
    required=(
        ("pet_id", "Pet is required"),
        ("food_name", "Please fill in food name and portion"),
        ("portion_size", "Please fill in food name and portion"),
    ),
    insert_policy=InsertPolicy.SORTED,
)

EXPENSES = EntitySpec(
    table="expenses",
    record_cls=Expense,
    order_by="date",
    ascending=False,
    owner_column="pet_id",
    required=(
        ("pet_id", "Pet is required"),
        ("amount", "Please fill in amount and description"),
        ("description", "Please fill in amount and description"),
    ),
    validators=(
        positive_number("amount", "Amount must be a positive number"),
        one_of("category", ExpenseCategory),
    ),
    insert_policy=InsertPolicy.SORTED,
)

DOCUMENTS = EntitySpec(
    table="documents",
    record_cls=Document,
    owner_column="pet_id",
    required=(
        ("pet_id", "Pet is required"),
        ("name", "Document name is required"),
        ("file_url", "Document file is required"),
    ),
    validators=(one_of("type", DocumentType),),
)

ENTITY_SPECS: Dict[str, EntitySpec] = {
    spec.table: spec
    for spec in (
        PETS, WEIGHT_RECORDS, VET_VISITS, MEDICATIONS, MEDICATION_LOGS,
        FEEDING_SCHEDULES, FEEDING_LOGS, EXPENSES, DOCUMENTS,
    )
}


def get_entity_spec(table: str) -> EntitySpec:
    try:
        return ENTITY_SPECS[table]
    except KeyError:
        raise KeyError(f"Unknown table '{table}'. Available: {list(ENTITY_SPECS)}") from None
