"""
Auth Service - Identidad del usuario actual.

No hay autenticación real: register/login solo guardan el perfil en la
clave `user` y devuelven un token simulado.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from tribetask.db.storage import PersistentStore, StorageKeys
from tribetask.domain.entities.user import UserProfile, make_avatar
from tribetask.utils.dates import Clock
from tribetask.utils.latency import LatencySimulator, simulated_latency
from tribetask.utils.mappers import parse_text

logger = logging.getLogger(__name__)

DEFAULT_CHECK_IN_STREAK = 5


@dataclass
class AuthResult:
    """Usuario + token simulado."""

    user: UserProfile
    token: str

    def to_dict(self) -> dict[str, Any]:
        return {**self.user.to_dict(), "token": self.token}


class AuthService:
    """Servicio de identidad."""

    def __init__(
        self,
        store: PersistentStore,
        user: UserProfile,
        latency: LatencySimulator,
        clock: Clock = datetime.now,
    ):
        self._store = store
        self._user = user
        self._latency = latency
        self._clock = clock

    @property
    def current_user(self) -> UserProfile:
        """Acceso síncrono al usuario actual (p. ej. remitente de chat)."""
        return self._user

    @simulated_latency
    async def get_current_user(self) -> UserProfile:
        return self._user

    @simulated_latency
    async def register(self, name: str, email: str, password: str | None = None) -> AuthResult:
        """Registra un usuario nuevo y lo deja como usuario actual."""
        name = parse_text(name, "name", required=True)
        email = parse_text(email, "email", required=True)

        user = UserProfile(
            id=self._mock_id("mock-user"),
            name=name,
            email=email,
            avatar=make_avatar(name),
            check_in_streak=0,
        )
        self._set_user(user)
        logger.info(f"Usuario registrado: {email}")
        return AuthResult(user=user, token=self._mock_id("mock-token"))

    @simulated_latency
    async def login(self, email: str, password: str | None = None) -> AuthResult:
        """Inicia sesión con cualquier email; el nombre sale del email."""
        email = parse_text(email, "email", required=True)

        user = UserProfile(
            id=self._mock_id("mock-user"),
            name=email.split("@")[0],
            email=email,
            avatar=make_avatar(email),
            check_in_streak=self._user.check_in_streak or DEFAULT_CHECK_IN_STREAK,
        )
        self._set_user(user)
        logger.info(f"Login: {email}")
        return AuthResult(user=user, token=self._mock_id("mock-token"))

    @simulated_latency
    async def logout(self) -> dict[str, str]:
        return {"message": "Logged out successfully"}

    def _set_user(self, user: UserProfile) -> None:
        self._user = user
        self._store.save(StorageKeys.USER, user.to_dict())

    def _mock_id(self, prefix: str) -> str:
        return f"{prefix}-{int(self._clock().timestamp() * 1000)}"
