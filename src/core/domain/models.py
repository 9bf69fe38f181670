"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los nombres de campo del cable (camelCase) quedan como alias; el código
  Python trabaja con snake_case.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, model_validator
from pydantic.config import ConfigDict


class Identity(BaseModel):
    """Identidad autenticada devuelta por el servidor.

    Inmutable durante la sesión; un login nuevo la reemplaza entera.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    user_id: int = Field(
        ...,
        alias="userId",
        description="Identificador numérico del usuario.",
    )
    username: str = Field(
        ...,
        description="Nombre visible del usuario.",
    )
    privilege_level: int = Field(
        ...,
        validation_alias=AliasChoices("privilege", "privilegeLevel", "privilege_level"),
        serialization_alias="privilege",
        description="Nivel de privilegio (>= umbral de admin -> vistas de gestión).",
    )

    def label(self) -> str:
        return f"{self.username} (ID: {self.user_id})"


class Session(BaseModel):
    """Par token + identidad.

    Regla: ambos presentes o ambos ausentes; nunca uno sin el otro.
    """

    model_config = ConfigDict(frozen=True)

    token: str | None = Field(
        default=None,
        description="Credencial opaca enviada como Bearer token.",
    )
    identity: Identity | None = Field(
        default=None,
        description="Identidad asociada al token.",
    )

    @model_validator(mode="after")
    def _pair_invariant(self) -> "Session":
        if (self.token is None) != (self.identity is None):
            raise ValueError("token and identity must be set or cleared together")
        return self

    @classmethod
    def empty(cls) -> "Session":
        return cls()


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"


class RequestDescriptor(BaseModel):
    """Descripción inmutable de una llamada a la API (una por invocación)."""

    model_config = ConfigDict(frozen=True)

    endpoint: str = Field(
        ...,
        min_length=1,
        description="Ruta relativa a la base URL, p.ej. '/ticket/buy'.",
    )
    method: HttpMethod = Field(default=HttpMethod.GET)
    body: dict[str, Any] | None = Field(
        default=None,
        description="Payload estructurado; se codifica como JSON.",
    )
    query: dict[str, str] | None = Field(
        default=None,
        description="Parámetros de query string para lecturas GET.",
    )


class FailureKind(str, Enum):
    VALIDATION = "validation"
    NETWORK = "network"
    PARSE = "parse"
    SERVER = "server"


class Success(BaseModel):
    model_config = ConfigDict(frozen=True)

    payload: Any = None

    @property
    def ok(self) -> bool:
        return True


class Failure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    message: str
    status_code: int | None = Field(
        default=None,
        description="Código HTTP cuando hubo respuesta (solo informativo).",
    )

    @property
    def ok(self) -> bool:
        return False


ApiResult = Success | Failure


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class NotificationMessage(BaseModel):
    """Mensaje transitorio; como mucho uno visible a la vez."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1, description="Generación del mensaje (monótona).")
    text: str
    severity: Severity = Severity.INFO
    expires_at: float = Field(
        ...,
        description="Instante (reloj monótono, segundos) a partir del cual deja de verse.",
    )
