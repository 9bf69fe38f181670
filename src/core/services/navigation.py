"""Guard de navegación y router.

El guard es puro: decide a qué vista lleva un intento de navegación. El
router aplica la decisión, recuerda la vista actual y avisa a la capa de
presentación. Una vista protegida sin sesión no se rechaza: se redirige a
`login` y la navegación se completa igual.
"""

from __future__ import annotations

from typing import Callable

from core.domain.views import INITIAL_VIEW, View
from core.logger import get_logger
from core.services.session_store import SessionStore

log = get_logger("navigation")


class NavigationGuard:
    def __init__(self, session_store: SessionStore) -> None:
        self._session = session_store

    def resolve(self, target: View | str) -> View:
        view = View.parse(target)
        if view.is_public:
            return view
        if self._session.is_authenticated():
            return view
        log.info("Redirecting unauthenticated navigation %s -> %s", view.value, View.LOGIN.value)
        return View.LOGIN


class Router:
    def __init__(self, guard: NavigationGuard, *, initial: View = INITIAL_VIEW) -> None:
        self._guard = guard
        self._current = initial
        self._listeners: list[Callable[[View], None]] = []

    @property
    def current(self) -> View:
        return self._current

    def subscribe(self, listener: Callable[[View], None]) -> None:
        self._listeners.append(listener)

    def navigate(self, target: View | str) -> View:
        """Navega a `target` (o a `login` si el guard redirige) y devuelve el destino real."""

        view = self._guard.resolve(target)
        self._current = view
        for listener in self._listeners:
            listener(view)
        return view
