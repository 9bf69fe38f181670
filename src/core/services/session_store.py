"""Almacén de sesión.

La copia en memoria es la autoritativa durante la vida del proceso; el
almacenamiento duradero solo se lee al arrancar (`load`) y se escribe en
login/logout.
"""

from __future__ import annotations

import json

from pydantic import ValidationError

from core.domain.models import Identity, Session
from core.interfaces.storage import KeyValueStorage
from core.logger import get_logger

TOKEN_KEY = "sessionId"
IDENTITY_KEY = "userInfo"

log = get_logger("session")


class SessionStore:
    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage
        self._session = Session.empty()

    def load(self) -> Session:
        """Rehidrata la sesión desde el almacenamiento duradero.

        Si falta una de las dos claves, o la identidad no es válida, se
        arranca sin sesión.
        """

        token = self._storage.get_item(TOKEN_KEY)
        raw_identity = self._storage.get_item(IDENTITY_KEY)
        if not token or not raw_identity:
            self._session = Session.empty()
            return self._session

        try:
            identity = Identity.model_validate(json.loads(raw_identity))
        except (ValueError, ValidationError) as exc:
            log.warning("Discarding unreadable persisted identity: %s", exc)
            self._session = Session.empty()
            return self._session

        self._session = Session(token=token, identity=identity)
        log.debug("Session rehydrated for user %s", identity.user_id)
        return self._session

    def set_session(self, token: str, identity: Identity) -> None:
        self._session = Session(token=token, identity=identity)
        payload = json.dumps(identity.model_dump(mode="json", by_alias=True), ensure_ascii=False)
        # Persistencia best-effort: un fallo del backend no invalida la sesión en memoria.
        try:
            self._storage.set_item(TOKEN_KEY, token)
            self._storage.set_item(IDENTITY_KEY, payload)
        except OSError as exc:
            log.warning("Session storage write failed: %s", exc)

    def get_session(self) -> Session:
        return self._session

    def clear_session(self) -> None:
        self._session = Session.empty()
        try:
            self._storage.remove_item(TOKEN_KEY)
            self._storage.remove_item(IDENTITY_KEY)
        except OSError as exc:
            log.warning("Session storage cleanup failed: %s", exc)

    def is_authenticated(self) -> bool:
        return self._session.token is not None

    @property
    def token(self) -> str | None:
        return self._session.token

    @property
    def identity(self) -> Identity | None:
        return self._session.identity

    def is_admin(self, threshold: int) -> bool:
        identity = self._session.identity
        return identity is not None and identity.privilege_level >= threshold
