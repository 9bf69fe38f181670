"""Módulos de orquestación por área de negocio (usuario, tren, billete, ruta).

Cada uno compone el pipeline de peticiones en operaciones con nombre.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.orchestration.route import RouteModule
from core.orchestration.ticket import TicketModule
from core.orchestration.train import TrainModule
from core.orchestration.user import UserModule
from core.services.context import ClientContext


@dataclass
class DomainModules:
    users: UserModule
    trains: TrainModule
    tickets: TicketModule
    routes: RouteModule

    @classmethod
    def from_context(cls, context: ClientContext) -> "DomainModules":
        return cls(
            users=UserModule(context),
            trains=TrainModule(context),
            tickets=TicketModule(context),
            routes=RouteModule(context),
        )


__all__ = [
    "DomainModules",
    "RouteModule",
    "TicketModule",
    "TrainModule",
    "UserModule",
]
