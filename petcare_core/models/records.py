# =============================================================================
# petcare_core/models/records.py
# Domain records mirrored from the backend tables
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Tuple, Type, TypeVar

from .dates import parse_calendar_date, parse_instant, to_date_string, to_iso_string


# =============================================================================
# ENUMERATIONS
# =============================================================================

class PetType(str, Enum):
    DOG = "dog"
    CAT = "cat"
    FISH = "fish"
    SNAKE = "snake"
    BIRD = "bird"
    RABBIT = "rabbit"
    HAMSTER = "hamster"
    TURTLE = "turtle"
    OTHER = "other"


class WeightUnit(str, Enum):
    KG = "kg"
    LB = "lb"


class SizeUnit(str, Enum):
    CM = "cm"
    IN = "in"


class VisitType(str, Enum):
    CHECKUP = "checkup"
    VACCINATION = "vaccination"
    SURGERY = "surgery"
    EMERGENCY = "emergency"
    GROOMING = "grooming"
    OTHER = "other"


class MedicationFrequency(str, Enum):
    DAILY = "daily"
    TWICE_DAILY = "twice_daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    AS_NEEDED = "as_needed"


class ExpenseCategory(str, Enum):
    FOOD = "food"
    VET = "vet"
    MEDICATION = "medication"
    GROOMING = "grooming"
    ACCESSORIES = "accessories"
    INSURANCE = "insurance"
    OTHER = "other"


class DocumentType(str, Enum):
    VACCINATION = "vaccination"
    MEDICAL_RECORD = "medical_record"
    CUSTODY = "custody"
    INSURANCE = "insurance"
    OTHER = "other"


# =============================================================================
# BASE RECORD
# =============================================================================

R = TypeVar("R", bound="Record")


@dataclass(frozen=True)
class Record:
    """
    One persisted row.

    Records are immutable: the stores replace them wholesale with the
    server's row rather than patching fields.
    """
    id: str
    created_at: Optional[datetime] = None

    DATE_FIELDS: ClassVar[Tuple[str, ...]] = ()
    INSTANT_FIELDS: ClassVar[Tuple[str, ...]] = ("created_at",)

    @classmethod
    def from_row(cls: Type[R], row: Dict[str, Any]) -> R:
        """Build a record from a backend row, ignoring unknown columns."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in row.items() if k in known}
        for name in cls.DATE_FIELDS:
            if name in values:
                values[name] = parse_calendar_date(values[name])
        for name in cls.INSTANT_FIELDS:
            if name in values:
                values[name] = parse_instant(values[name])
        return cls(**values)


def serialize_value(value: Any) -> Any:
    """Convert a python value into its wire form."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return to_iso_string(value)
    if isinstance(value, date):
        return to_date_string(value)
    if isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def serialize_fields(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: serialize_value(v) for k, v in values.items()}


# =============================================================================
# USER
# =============================================================================

@dataclass(frozen=True)
class User(Record):
    email: str = ""
    name: str = ""
    avatar_url: Optional[str] = None


# =============================================================================
# PETS
# =============================================================================

@dataclass(frozen=True)
class Pet(Record):
    user_id: str = ""
    name: str = ""
    type: str = PetType.OTHER.value
    breed: Optional[str] = None
    date_of_birth: Optional[date] = None
    weight: Optional[float] = None
    weight_unit: str = WeightUnit.KG.value
    size: Optional[float] = None
    size_unit: str = SizeUnit.CM.value
    color: Optional[str] = None
    microchip_id: Optional[str] = None
    photo_url: Optional[str] = None
    notes: Optional[str] = None
    updated_at: Optional[datetime] = None

    DATE_FIELDS: ClassVar[Tuple[str, ...]] = ("date_of_birth",)
    INSTANT_FIELDS: ClassVar[Tuple[str, ...]] = ("created_at", "updated_at")


@dataclass(frozen=True)
class WeightRecord(Record):
    pet_id: str = ""
    weight: float = 0.0
    weight_unit: str = WeightUnit.KG.value
    recorded_at: Optional[datetime] = None
    notes: Optional[str] = None

    INSTANT_FIELDS: ClassVar[Tuple[str, ...]] = ("created_at", "recorded_at")


# =============================================================================
# CARE RECORDS
# =============================================================================

@dataclass(frozen=True)
class VetVisit(Record):
    pet_id: str = ""
    vet_name: str = ""
    vet_address: Optional[str] = None
    vet_phone: Optional[str] = None
    visit_type: str = VisitType.CHECKUP.value
    scheduled_at: Optional[datetime] = None
    completed: bool = False
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None
    cost: Optional[float] = None
    reminder_enabled: bool = True
    reminder_minutes_before: int = 60
    updated_at: Optional[datetime] = None

    INSTANT_FIELDS: ClassVar[Tuple[str, ...]] = ("created_at", "updated_at", "scheduled_at", "completed_at")


@dataclass(frozen=True)
class Medication(Record):
    pet_id: str = ""
    name: str = ""
    dosage: str = ""
    frequency: str = MedicationFrequency.DAILY.value
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    time_of_day: Tuple[str, ...] = field(default_factory=tuple)
    notes: Optional[str] = None
    reminder_enabled: bool = True
    active: bool = True
    updated_at: Optional[datetime] = None

    DATE_FIELDS: ClassVar[Tuple[str, ...]] = ("start_date", "end_date")
    INSTANT_FIELDS: ClassVar[Tuple[str, ...]] = ("created_at", "updated_at")

    def __post_init__(self):
        # rows carry JSON arrays; keep the record hashable
        object.__setattr__(self, "time_of_day", tuple(self.time_of_day or ()))


@dataclass(frozen=True)
class MedicationLog(Record):
    medication_id: str = ""
    given_at: Optional[datetime] = None
    skipped: bool = False
    notes: Optional[str] = None

    INSTANT_FIELDS: ClassVar[Tuple[str, ...]] = ("created_at", "given_at")


@dataclass(frozen=True)
class FeedingSchedule(Record):
    pet_id: str = ""
    food_name: str = ""
    food_brand: Optional[str] = None
    portion_size: str = ""
    feeding_times: Tuple[str, ...] = field(default_factory=tuple)
    notes: Optional[str] = None
    updated_at: Optional[datetime] = None

    INSTANT_FIELDS: ClassVar[Tuple[str, ...]] = ("created_at", "updated_at")

    def __post_init__(self):
        object.__setattr__(self, "feeding_times", tuple(self.feeding_times or ()))


@dataclass(frozen=True)
class FeedingLog(Record):
    pet_id: str = ""
    feeding_schedule_id: Optional[str] = None
    food_name: str = ""
    portion_size: str = ""
    fed_at: Optional[datetime] = None
    notes: Optional[str] = None

    INSTANT_FIELDS: ClassVar[Tuple[str, ...]] = ("created_at", "fed_at")


@dataclass(frozen=True)
class Expense(Record):
    pet_id: str = ""
    category: str = ExpenseCategory.OTHER.value
    amount: float = 0.0
    currency: str = "USD"
    description: str = ""
    date: Optional[date] = None
    receipt_url: Optional[str] = None
    notes: Optional[str] = None

    DATE_FIELDS: ClassVar[Tuple[str, ...]] = ("date",)


@dataclass(frozen=True)
class Document(Record):
    pet_id: str = ""
    name: str = ""
    type: str = DocumentType.OTHER.value
    file_url: str = ""
    file_type: str = "application/octet-stream"
    file_size: int = 0
    notes: Optional[str] = None
    expiry_date: Optional[date] = None

    DATE_FIELDS: ClassVar[Tuple[str, ...]] = ("expiry_date",)
