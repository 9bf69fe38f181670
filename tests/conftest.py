"""Shared fixtures: fake HTTP transport, manual clock, recording presenter."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from adapters.storage import MemoryStorage
from core.config import AppSettings
from core.domain.models import NotificationMessage, Severity
from core.domain.view_models import ResultArea
from core.domain.views import View
from core.orchestration import DomainModules
from core.services.context import ClientContext, build_context

BASE_URL = "http://api.test/api"


class ManualClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeScheduler:
    """Records timers instead of running them; tests fire them explicitly."""

    def __init__(self) -> None:
        self.timers: list[tuple[float, Callable[..., None], tuple[Any, ...]]] = []

    def call_later(self, delay: float, callback: Callable[..., None], *args: Any) -> None:
        self.timers.append((delay, callback, args))

    def fire(self, index: int) -> None:
        _delay, callback, args = self.timers[index]
        callback(*args)

    def fire_all(self) -> None:
        for i in range(len(self.timers)):
            self.fire(i)


class RecordingPresenter:
    def __init__(self) -> None:
        self.views: list[View] = []
        self.painted: list[tuple[ResultArea, Any]] = []
        self.notifications: list[NotificationMessage | None] = []

    def show_view(self, view: View) -> None:
        self.views.append(view)

    def paint(self, area: ResultArea, model: Any) -> None:
        self.painted.append((area, model))

    def show_notification(self, message: NotificationMessage | None) -> None:
        self.notifications.append(message)

    def shown(self, severity: Severity | None = None) -> list[NotificationMessage]:
        return [
            m for m in self.notifications if m is not None and (severity is None or m.severity is severity)
        ]


class FakeApi:
    """Routes requests to canned responses and records what was sent."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}

    def on(self, method: str, path: str, status: int = 200, body: Any = None, *, raw: bytes | None = None) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if raw is not None:
                return httpx.Response(status, content=raw)
            return httpx.Response(status, json={} if body is None else body)

        self.routes[(method, "/api" + path)] = respond

    def fail(self, method: str, path: str, exc: Exception) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            raise exc

        self.routes[(method, "/api" + path)] = respond

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": f"no route {request.method} {request.url.path}"})
        return route(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, api_base_url=BASE_URL)


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def context(
    settings: AppSettings,
    api: FakeApi,
    storage: MemoryStorage,
    presenter: RecordingPresenter,
    scheduler: FakeScheduler,
) -> ClientContext:
    return build_context(
        settings,
        storage=storage,
        presenter=presenter,
        scheduler=scheduler,
        transport=httpx.MockTransport(api.handler),
    )


@pytest.fixture
def modules(context: ClientContext) -> DomainModules:
    return DomainModules.from_context(context)


@pytest.fixture
def logged_in(context: ClientContext) -> ClientContext:
    from core.domain.models import Identity

    context.state.session.set_session("tok-1", Identity(userId=7, username="alice", privilege=1))
    return context
