"""Estado de aplicación inyectable.

En vez de variables globales de módulo, la capa de orquestación recibe un
único `ClientContext` por referencia. Los tests construyen el suyo con
dobles (almacenamiento en memoria, transporte falso, presenter grabador).
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from core.config import AppSettings
from core.domain.models import Identity
from core.domain.views import View
from core.interfaces.presenter import Presenter
from core.interfaces.scheduler import TimerScheduler
from core.interfaces.storage import KeyValueStorage
from core.services.navigation import NavigationGuard, Router
from core.services.notifications import NotificationChannel
from core.services.request_pipeline import RequestPipeline
from core.services.session_store import SessionStore


@dataclass
class AppState:
    """Estado mutable compartido: sesión, notificación y vista actual."""

    session: SessionStore
    notifications: NotificationChannel
    router: Router
    admin_threshold: int = 2

    @property
    def current_user(self) -> Identity | None:
        return self.session.identity

    @property
    def is_admin(self) -> bool:
        return self.session.is_admin(self.admin_threshold)

    @property
    def current_view(self) -> View:
        return self.router.current


@dataclass
class ClientContext:
    settings: AppSettings
    state: AppState
    pipeline: RequestPipeline
    presenter: Presenter


def build_context(
    settings: AppSettings,
    *,
    storage: KeyValueStorage,
    presenter: Presenter,
    scheduler: TimerScheduler | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ClientContext:
    """Cablea los servicios del Core y rehidrata la sesión persistida."""

    session = SessionStore(storage)
    session.load()

    notifications = NotificationChannel(
        duration_ms=settings.notification_duration_ms,
        scheduler=scheduler,
        listener=presenter.show_notification,
    )
    router = Router(NavigationGuard(session))
    router.subscribe(presenter.show_view)

    state = AppState(
        session=session,
        notifications=notifications,
        router=router,
        admin_threshold=settings.admin_privilege_threshold,
    )
    pipeline = RequestPipeline(settings, session, notifications, transport=transport)
    return ClientContext(settings=settings, state=state, pipeline=pipeline, presenter=presenter)
