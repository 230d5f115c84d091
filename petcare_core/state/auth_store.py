# =============================================================================
# petcare_core/state/auth_store.py
# Session and profile of the signed-in user
# =============================================================================

from __future__ import annotations
from datetime import datetime
from typing import Callable, Optional, Tuple

from petcare_core.data import AuthUser, Gateway
from petcare_core.errors import GatewayError, ValidationFailedError
from petcare_core.models import User
from petcare_core.models.dates import parse_instant, to_iso_string, utc_now
from petcare_core.services import ServiceResult
from .base_store import ObservableStore

PROFILES_TABLE = "profiles"


class AuthStore(ObservableStore):
    """
    Signed-in user and their profile row.

    Also the identity provider of user-owned entity stores: pass
    ``auth.current_identity`` so they resolve the owner without a network
    round-trip.

    Usage:
        auth = AuthStore(gateway)
        auth.initialize()
        if not auth.is_authenticated:
            result = auth.sign_in(email, password)
    """

    def __init__(self, gateway: Gateway, clock: Callable[[], datetime] = utc_now):
        super().__init__()
        self.gateway = gateway
        self.clock = clock
        self.user: Optional[User] = None
        self.initialized = False
        self._session: Optional[AuthUser] = None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    def current_identity(self) -> Optional[AuthUser]:
        return self._session

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def initialize(self) -> ServiceResult:
        """
        Restore an existing session and its profile.

        ``initialized`` becomes True even when the lookup fails, so a
        splash screen never waits forever.
        """
        result = self.safe_execute("Restoring session", self._initialize)
        self.initialized = True
        self._notify_callbacks()
        return result

    def _initialize(self) -> Optional[User]:
        with self._in_flight_guard("initialize"):
            session = self.gateway.current_user()
            if session is None:
                return None
            self.user = self._load_profile(session)
            self._session = session
        return self.user

    def sign_up(self, email: str, password: str, name: str) -> ServiceResult:
        """
        Register an account and create its profile row.

        The new account is not signed in here; backends that require email
        confirmation hand back no session until the address is confirmed.
        A failed profile write does not undo the account: the result is a
        success carrying ``metadata["profile_error"]``.
        """
        result = self.safe_execute("Signing up", self._sign_up, email.strip(), password, name.strip())
        if result:
            account, profile_error = result.data
            result.data = account
            if profile_error:
                result.metadata = {**(result.metadata or {}), "profile_error": profile_error}
        return result

    def _sign_up(self, email: str, password: str, name: str) -> Tuple[Optional[AuthUser], Optional[str]]:
        if not name:
            raise ValidationFailedError("Please enter your name", field="name")
        self._check_credentials(email, password)

        with self._in_flight_guard("sign_up"):
            account = self.gateway.sign_up(email, password, name)
            profile_error = None
            if account is not None:
                try:
                    self.gateway.upsert(PROFILES_TABLE, {
                        "id": account.id,
                        "name": name,
                        "email": email,
                        "created_at": to_iso_string(self.clock()),
                    })
                except GatewayError as e:
                    profile_error = e.message
                    self.logger.warning(f"Account {account.id} created without profile: {e.message}")
        return account, profile_error

    def sign_in(self, email: str, password: str) -> ServiceResult:
        return self.safe_execute("Signing in", self._sign_in, email.strip(), password)

    def _sign_in(self, email: str, password: str) -> User:
        self._check_credentials(email, password)

        with self._in_flight_guard("sign_in"):
            session = self.gateway.sign_in(email, password)
            self.user = self._load_profile(session)
            self._session = session
        return self.user

    def sign_out(self) -> ServiceResult:
        """End the session. Local state is cleared even if the backend call fails."""
        return self.safe_execute("Signing out", self._sign_out)

    def _sign_out(self) -> None:
        with self._in_flight_guard("sign_out"):
            try:
                self.gateway.sign_out()
            finally:
                self._session = None
                self.user = None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _check_credentials(email: str, password: str) -> None:
        if not email or not password:
            raise ValidationFailedError(
                "Please fill in email and password",
                field="email" if not email else "password",
            )

    def _load_profile(self, session: AuthUser) -> User:
        """Profile of a session; an unreadable profile falls back to the account."""
        try:
            rows = self.gateway.query(PROFILES_TABLE, {"id": session.id}, limit=1)
        except GatewayError as e:
            self.logger.warning(f"Profile of {session.id} unavailable: {e.message}")
            rows = []
        profile = rows[0] if rows else {}
        return User(
            id=session.id,
            email=session.email,
            name=profile.get("name") or session.email,
            avatar_url=profile.get("avatar_url"),
            created_at=parse_instant(profile.get("created_at")) or session.created_at,
        )
