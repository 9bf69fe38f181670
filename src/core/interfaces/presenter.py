"""Superficie de presentación (colaborador externo).

El Core calcula view models; quien implemente este contrato decide cómo se
pintan (consola Rich, GUI, tests).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from core.domain.models import NotificationMessage
from core.domain.view_models import ResultArea
from core.domain.views import View


@runtime_checkable
class Presenter(Protocol):
    def show_view(self, view: View) -> None:
        """Se invoca cuando una navegación se confirma."""

        ...

    def paint(self, area: ResultArea, model: BaseModel) -> None:
        """Pinta un view model (o un `InlineError`) en su área de resultado."""

        ...

    def show_notification(self, message: NotificationMessage | None) -> None:
        """Muestra la notificación actual; `None` la oculta."""

        ...
