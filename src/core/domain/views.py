"""Vistas navegables del cliente.

Centraliza los identificadores de vista para que el router, la CLI y los
módulos de orquestación compartan una única fuente de verdad.
"""

from __future__ import annotations

from enum import Enum


class View(str, Enum):
    """Identificadores de vista (los mismos que las rutas del cliente web)."""

    LOGIN = "login"
    REGISTER = "register"
    TICKET_QUERY = "ticket-query"
    BUY_TICKET = "buy-ticket"
    MY_ORDERS = "my-orders"
    ROUTE_QUERY = "route-query"
    TRAIN_MANAGEMENT = "train-management"
    TICKET_MANAGEMENT = "ticket-management"
    USER_MANAGEMENT = "user-management"

    @classmethod
    def parse(cls, value: "View | str") -> "View":
        """Acepta un `View` o su id textual (con o sin '/' inicial).

        La ruta raíz redirige a `login`.
        """

        if isinstance(value, View):
            return value
        key = value.strip().lstrip("/")
        if not key:
            return cls.LOGIN
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown view: {value!r}") from None

    @property
    def is_public(self) -> bool:
        return self in PUBLIC_VIEWS

    def label(self) -> str:
        return self.value.replace("-", " ").title()


PUBLIC_VIEWS: frozenset[View] = frozenset({View.LOGIN, View.REGISTER})

INITIAL_VIEW = View.LOGIN
ADMIN_LANDING_VIEW = View.TRAIN_MANAGEMENT
USER_LANDING_VIEW = View.TICKET_QUERY
