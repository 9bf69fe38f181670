"""Operaciones de billetes: publicación, caducidad, consulta, compra y devolución.

Las mutaciones (release/expire/buy/refund) solo muestran un toast de éxito
y dejan la vista como está. Las consultas pintan su área de resultado.
"""

from __future__ import annotations

from core.domain.models import ApiResult, HttpMethod, RequestDescriptor
from core.domain.view_models import OrderList, RemainingSeats, ResultArea
from core.orchestration.base import OrchestrationModule
from core.orchestration.forms import FormInput, text

SCHEDULE_FIELDS = ("trainId", "date")
SEAT_FIELDS = ("trainId", "date", "departureStation")


def _fields(form: FormInput, names: tuple[str, ...]) -> dict[str, str]:
    return {name: text(form, name) for name in names}


class TicketModule(OrchestrationModule):
    async def release_ticket(self, form: FormInput) -> ApiResult:
        return await self._schedule_mutation(form, "/ticket/release", "Tickets released")

    async def expire_ticket(self, form: FormInput) -> ApiResult:
        return await self._schedule_mutation(form, "/ticket/expire", "Tickets expired")

    async def buy_ticket(self, form: FormInput) -> ApiResult:
        return await self._seat_mutation(form, "/ticket/buy", "Ticket purchased")

    async def refund_ticket(self, form: FormInput) -> ApiResult:
        return await self._seat_mutation(form, "/ticket/refund", "Ticket refunded")

    async def query_remaining(self, form: FormInput) -> ApiResult:
        invalid = self._validate(form, SEAT_FIELDS)
        if invalid:
            return invalid

        return await self._query(
            RequestDescriptor(endpoint="/ticket/remaining", query=_fields(form, SEAT_FIELDS)),
            ResultArea.REMAINING,
            RemainingSeats.model_validate,
        )

    async def query_orders(self, form: FormInput | None = None) -> ApiResult:
        return await self._query(
            RequestDescriptor(endpoint="/ticket/orders"),
            ResultArea.ORDERS,
            OrderList.model_validate,
        )

    async def _schedule_mutation(self, form: FormInput, endpoint: str, message: str) -> ApiResult:
        invalid = self._validate(form, SCHEDULE_FIELDS)
        if invalid:
            return invalid
        return await self._mutate(
            RequestDescriptor(endpoint=endpoint, method=HttpMethod.POST, body=_fields(form, SCHEDULE_FIELDS)),
            message,
        )

    async def _seat_mutation(self, form: FormInput, endpoint: str, message: str) -> ApiResult:
        invalid = self._validate(form, SEAT_FIELDS)
        if invalid:
            return invalid
        return await self._mutate(
            RequestDescriptor(endpoint=endpoint, method=HttpMethod.POST, body=_fields(form, SEAT_FIELDS)),
            message,
        )
