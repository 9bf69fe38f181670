"""Consultas de rutas (el cálculo vive en el servidor)."""

from __future__ import annotations

from core.domain.models import ApiResult, RequestDescriptor
from core.domain.view_models import Accessibility, ResultArea, RouteListing, RoutePath
from core.orchestration.base import OrchestrationModule
from core.orchestration.forms import FormInput, text

ROUTE_FIELDS = ("startStation", "endStation")


def route_query(form: FormInput, *, with_preference: bool = False) -> dict[str, str]:
    query = {name: text(form, name) for name in ROUTE_FIELDS}
    if with_preference:
        # Vacío: el servidor aplica su preferencia por defecto.
        query["preference"] = text(form, "preference").strip()
    return query


class RouteModule(OrchestrationModule):
    async def display_route(self, form: FormInput) -> ApiResult:
        invalid = self._validate(form, ROUTE_FIELDS)
        if invalid:
            return invalid
        return await self._query(
            RequestDescriptor(endpoint="/route/display", query=route_query(form)),
            ResultArea.ROUTES,
            RouteListing.model_validate,
        )

    async def find_best_path(self, form: FormInput) -> ApiResult:
        invalid = self._validate(form, ROUTE_FIELDS)
        if invalid:
            return invalid
        return await self._query(
            RequestDescriptor(endpoint="/route/best", query=route_query(form, with_preference=True)),
            ResultArea.BEST_PATH,
            RoutePath.model_validate,
        )

    async def check_accessibility(self, form: FormInput) -> ApiResult:
        invalid = self._validate(form, ROUTE_FIELDS)
        if invalid:
            return invalid
        return await self._query(
            RequestDescriptor(endpoint="/route/accessibility", query=route_query(form)),
            ResultArea.ACCESSIBILITY,
            Accessibility.model_validate,
        )
