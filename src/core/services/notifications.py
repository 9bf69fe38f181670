"""Canal de notificaciones de un solo hueco.

Reglas:
- Como mucho un mensaje visible; `show` lo reemplaza y reinicia el ciclo.
- Cada mensaje programa su propia ocultación. Un temporizador que dispara
  cuando su mensaje ya fue reemplazado no hace nada.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Callable

from core.domain.models import NotificationMessage, Severity
from core.interfaces.scheduler import TimerScheduler
from core.logger import get_logger

log = get_logger("notifications")

DEFAULT_DURATION_MS = 3000


class AsyncioScheduler(TimerScheduler):
    """Usa el event loop en curso; sin loop, no programa nada.

    Sin loop la expiración se resuelve de forma perezosa en
    `NotificationChannel.current` comparando con el reloj.
    """

    def call_later(self, delay: float, callback: Callable[..., None], *args: Any) -> Any:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return None
        return loop.call_later(delay, callback, *args)


class NotificationChannel:
    def __init__(
        self,
        *,
        duration_ms: int = DEFAULT_DURATION_MS,
        scheduler: TimerScheduler | None = None,
        clock: Callable[[], float] = time.monotonic,
        listener: Callable[[NotificationMessage | None], None] | None = None,
    ) -> None:
        self._duration = duration_ms / 1000.0
        self._scheduler = scheduler or AsyncioScheduler()
        self._clock = clock
        self._listener = listener
        self._message: NotificationMessage | None = None
        self._generation = 0

    def set_listener(self, listener: Callable[[NotificationMessage | None], None] | None) -> None:
        self._listener = listener

    @property
    def current(self) -> NotificationMessage | None:
        message = self._message
        if message is not None and self._clock() >= message.expires_at:
            return None
        return message

    def show(self, text: str, severity: Severity | str = Severity.INFO) -> NotificationMessage:
        self._generation += 1
        message = NotificationMessage(
            id=self._generation,
            text=text,
            severity=Severity(severity),
            expires_at=self._clock() + self._duration,
        )
        self._message = message
        log.debug("notify[%s] #%d %s", message.severity.value, message.id, text)
        self._emit(message)
        self._scheduler.call_later(self._duration, self._expire, message.id)
        return message

    def info(self, text: str) -> NotificationMessage:
        return self.show(text, Severity.INFO)

    def success(self, text: str) -> NotificationMessage:
        return self.show(text, Severity.SUCCESS)

    def warning(self, text: str) -> NotificationMessage:
        return self.show(text, Severity.WARNING)

    def error(self, text: str) -> NotificationMessage:
        return self.show(text, Severity.ERROR)

    def dismiss(self) -> None:
        if self._message is None:
            return
        self._message = None
        self._emit(None)

    def _expire(self, message_id: int) -> None:
        if self._message is None or self._message.id != message_id:
            return
        self._message = None
        self._emit(None)

    def _emit(self, message: NotificationMessage | None) -> None:
        if self._listener is not None:
            self._listener(message)
