"""Temporizadores para la auto-ocultación de notificaciones."""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class TimerScheduler(Protocol):
    """Programa `callback(*args)` tras `delay` segundos.

    Reglas de diseño:
    - No bloquea: el callback se ejecuta más tarde en el mismo hilo lógico.
    - El valor devuelto es opaco (handle cancelable o `None`).
    """

    def call_later(self, delay: float, callback: Callable[..., None], *args: Any) -> Any:
        ...
