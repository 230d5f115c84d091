# =============================================================================
# petcare_core/state/pet_store.py
# The user's pets, the focused pet and its weight history
# =============================================================================

from __future__ import annotations
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Tuple

from petcare_core.config import DEFAULT_BUCKET, DEFAULT_SIGNED_URL_TTL
from petcare_core.data import AuthUser, Gateway, media_url, photo_path
from petcare_core.errors import PetCareError, error_boundary
from petcare_core.models import PETS, WEIGHT_RECORDS, Pet, WeightRecord
from petcare_core.models.dates import utc_now
from petcare_core.services import BaseService, ServiceResult
from .entity_store import EntityStore, Scope

PHOTO_CONTENT_TYPE = "image/jpeg"


class PetStore(BaseService):
    """
    Pets of the signed-in user plus the weight records of one pet.

    Usage:
        store = PetStore(gateway, identity=auth.current_identity)
        store.load_pets()
        store.add_pet({"name": "Rex", "type": "dog"}, photo=jpeg_bytes)
        store.select_pet(store.pets.items[0])
    """

    def __init__(
        self,
        gateway: Gateway,
        identity: Optional[Callable[[], Optional[AuthUser]]] = None,
        bucket: str = DEFAULT_BUCKET,
        signed_url_ttl: int = DEFAULT_SIGNED_URL_TTL,
        clock: Callable[[], datetime] = utc_now,
    ):
        super().__init__()
        self.gateway = gateway
        self.bucket = bucket
        self.signed_url_ttl = signed_url_ttl
        self.clock = clock
        self.pets: EntityStore[Pet] = EntityStore(gateway, PETS, identity=identity, clock=clock)
        self.weights: EntityStore[WeightRecord] = EntityStore(gateway, WEIGHT_RECORDS, clock=clock)

    @property
    def busy(self) -> bool:
        return self.pets.busy or self.weights.busy

    def register_callback(self, callback: Callable[..., None]) -> None:
        self.pets.register_callback(callback)
        self.weights.register_callback(callback)

    # ------------------------------------------------------------------
    # Pets
    # ------------------------------------------------------------------

    def load_pets(self) -> ServiceResult:
        return self.pets.load()

    def add_pet(self, fields: Dict[str, Any], photo: Optional[bytes] = None) -> ServiceResult:
        """
        Create a pet, uploading its photo first when one is given.

        The form and the signed-in owner are checked before the upload so
        a rejected pet never leaves a blob behind. A failed photo upload
        does not block the pet: it is saved without a photo and the upload
        error is returned in ``metadata["photo_error"]``.
        """
        values = dict(fields)
        photo_error = None

        if photo is not None:
            try:
                self.pets.spec.validate(values)
                self.pets.require_identity()
            except PetCareError as e:
                return ServiceResult.from_exception(e)

            upload = self.upload_photo(photo)
            if upload:
                values["photo_url"] = upload.data
            else:
                photo_error = upload.error
                self.logger.warning(f"Saving pet without photo: {upload.error}")

        result = self.pets.create(values)
        if photo_error and result.success:
            result.metadata = {**(result.metadata or {}), "photo_error": photo_error}
        return result

    def update_pet(self, pet_id: str, fields: Dict[str, Any]) -> ServiceResult:
        return self.pets.update(pet_id, fields)

    def delete_pet(self, pet_id: str) -> ServiceResult:
        result = self.pets.delete(pet_id)
        if result and self.weights.scope == Scope("pet_id", pet_id):
            self.weights.clear()
        return result

    def select_pet(self, pet: Optional[Pet]) -> None:
        self.pets.selection.select(pet)

    @property
    def selected_pet(self) -> Optional[Pet]:
        return self.pets.selection.selected

    # ------------------------------------------------------------------
    # Weight history
    # ------------------------------------------------------------------

    def load_weight_records(self, pet_id: str) -> ServiceResult:
        return self.weights.load(Scope("pet_id", pet_id))

    def add_weight_record(self, fields: Dict[str, Any]) -> ServiceResult:
        """Record a weigh-in; history stays sorted by recorded_at."""
        values = dict(fields)
        values.setdefault("recorded_at", self.clock())
        return self.weights.create(values)

    def delete_weight_record(self, record_id: str) -> ServiceResult:
        return self.weights.delete(record_id)

    @property
    def weight_history(self) -> Tuple[WeightRecord, ...]:
        return self.weights.items

    # ------------------------------------------------------------------
    # Photos
    # ------------------------------------------------------------------

    def upload_photo(self, data: bytes, content_type: str = PHOTO_CONTENT_TYPE) -> ServiceResult:
        """Upload a pet photo; the result carries the storage path."""
        return self.safe_execute("Uploading pet photo", self._upload_photo, data, content_type)

    def _upload_photo(self, data: bytes, content_type: str) -> str:
        path = photo_path(self.clock())
        self.gateway.upload_blob(self.bucket, path, data, content_type)
        return path

    @error_boundary(default_return=None)
    def photo_url(self, pet: Pet) -> Optional[str]:
        """
        Fresh signed URL for a pet's photo, or None.

        Never cache the result beyond the signed URL TTL. A failed signing
        is logged and gives None so the screen shows a placeholder.
        """
        return media_url(self.gateway, self.bucket, pet.photo_url, self.signed_url_ttl)

    def clear(self) -> None:
        """Forget everything, e.g. on sign-out."""
        self.pets.clear()
        self.weights.clear()
