"""Presenter de consola: implementa `core.interfaces.presenter.Presenter` con Rich."""

from __future__ import annotations

from pydantic import BaseModel
from rich.console import Console

from cli.ui_components import build_toast, render_view_model
from core.domain.models import NotificationMessage
from core.domain.view_models import ResultArea
from core.domain.views import View
from core.interfaces.presenter import Presenter


class RichPresenter(Presenter):
    def __init__(self, console: Console, *, announce_views: bool = True) -> None:
        self._console = console
        self._announce_views = announce_views
        self.painted: dict[ResultArea, BaseModel] = {}

    def show_view(self, view: View) -> None:
        if self._announce_views:
            self._console.rule(f"[bold]{view.label()}[/bold]", style="dim")

    def paint(self, area: ResultArea, model: BaseModel) -> None:
        self.painted[area] = model
        self._console.print(render_view_model(model))

    def show_notification(self, message: NotificationMessage | None) -> None:
        # Ocultar no necesita salida en una terminal de solo-append.
        if message is not None:
            self._console.print(build_toast(message))
