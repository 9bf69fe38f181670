"""Pipeline de peticiones: único punto por el que pasa toda llamada de red.

Pasos:
1. Construye el mensaje (JSON para `body`, query string para `query`).
2. Lo envía a `base_url + endpoint`.
3. Clasifica el resultado en `Success` / `Failure(network|parse|server)`.
4. Todo `Failure` se notifica con severidad `error` antes de devolverse.

Sin reintentos ni de-duplicación: dos llamadas concurrentes al mismo endpoint
se ejecutan de forma independiente.
"""

from __future__ import annotations

import json
import math
from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import (
    ApiResult,
    Failure,
    FailureKind,
    RequestDescriptor,
    Success,
)
from core.logger import get_logger
from core.services.notifications import NotificationChannel
from core.services.session_store import SessionStore

GENERIC_FAILURE_MESSAGE = "Request failed"

log = get_logger("pipeline")


def json_safe(value: Any) -> Any:
    """Sustituye floats no finitos por `None` (lo mismo que hace JSON.stringify)."""

    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_safe(v) for v in value]
    return value


def encode_body(body: dict[str, Any]) -> bytes:
    return json.dumps(json_safe(body), ensure_ascii=False, allow_nan=False).encode("utf-8")


def _server_message(payload: Any) -> str:
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return GENERIC_FAILURE_MESSAGE


class RequestPipeline:
    def __init__(
        self,
        settings: AppSettings,
        session_store: SessionStore,
        notifications: NotificationChannel,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._session = session_store
        self._notifications = notifications
        self._transport = transport

    async def execute(self, descriptor: RequestDescriptor) -> ApiResult:
        result = await self._dispatch(descriptor)
        if isinstance(result, Failure):
            self.report(result)
        return result

    def report(self, failure: Failure) -> Failure:
        """Muestra el toast de error de un `Failure` (siempre exactamente uno)."""

        log.warning("%s failure: %s", failure.kind.value, failure.message)
        self._notifications.error(failure.message)
        return failure

    def _headers(self, descriptor: RequestDescriptor) -> dict[str, str]:
        headers: dict[str, str] = {}
        if descriptor.body is not None:
            headers["Content-Type"] = "application/json"
        token = self._session.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _dispatch(self, descriptor: RequestDescriptor) -> ApiResult:
        content = encode_body(descriptor.body) if descriptor.body is not None else None
        log.debug("%s %s query=%s", descriptor.method.value, descriptor.endpoint, descriptor.query)

        try:
            async with build_async_client(
                self._settings,
                extra_headers=self._headers(descriptor),
                transport=self._transport,
            ) as client:
                response = await client.request(
                    descriptor.method.value,
                    descriptor.endpoint,
                    params=descriptor.query,
                    content=content,
                )
        except httpx.RequestError as exc:
            return Failure(kind=FailureKind.NETWORK, message=str(exc) or exc.__class__.__name__)

        try:
            payload = response.json()
        except ValueError as exc:
            return Failure(
                kind=FailureKind.PARSE,
                message=f"Invalid response body: {exc}",
                status_code=response.status_code,
            )

        if response.is_error:
            return Failure(
                kind=FailureKind.SERVER,
                message=_server_message(payload),
                status_code=response.status_code,
            )
        return Success(payload=payload)
