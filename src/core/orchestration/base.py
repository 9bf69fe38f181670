"""Plantilla común de las operaciones de orquestación.

Cada operación pública sigue el mismo guion: validar -> coercionar ->
construir `RequestDescriptor` -> pipeline -> efecto. Aquí viven los pasos
compartidos; los módulos de dominio solo declaran campos, endpoints y el
efecto de éxito.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

from pydantic import BaseModel, ValidationError

from core.domain.models import ApiResult, Failure, FailureKind, RequestDescriptor, Success
from core.domain.view_models import InlineError, ResultArea
from core.orchestration.forms import FormInput, first_missing_field
from core.services.context import ClientContext

ViewModelBuilder = Callable[[Any], BaseModel]


def unwrap(payload: Any, key: str) -> Any:
    """Acepta tanto `{key: {...}}` como el objeto plano."""

    if isinstance(payload, dict) and isinstance(payload.get(key), dict):
        return payload[key]
    return payload


def compute_view_model(result: ApiResult, build: ViewModelBuilder) -> BaseModel:
    """Convierte un `ApiResult` en lo que se pinta en su área (función pura).

    Un `Failure` se convierte en `InlineError`; un `Success` se valida con
    `build` (que puede lanzar `ValidationError`).
    """

    if isinstance(result, Failure):
        return InlineError(message=result.message)
    return build(result.payload)


class OrchestrationModule:
    def __init__(self, context: ClientContext) -> None:
        self._ctx = context

    def _validate(self, form: FormInput, required: Iterable[str]) -> Failure | None:
        missing = first_missing_field(form, required)
        if missing is None:
            return None
        message = f"Please fill in {missing}"
        self._ctx.state.notifications.warning(message)
        return Failure(kind=FailureKind.VALIDATION, message=message)

    async def _mutate(self, descriptor: RequestDescriptor, success_message: str) -> ApiResult:
        result = await self._ctx.pipeline.execute(descriptor)
        if isinstance(result, Success):
            self._ctx.state.notifications.success(success_message)
        return result

    async def _query(
        self,
        descriptor: RequestDescriptor,
        area: ResultArea,
        build: ViewModelBuilder,
    ) -> ApiResult:
        result = await self._ctx.pipeline.execute(descriptor)
        try:
            model = compute_view_model(result, build)
        except ValidationError as exc:
            result = self._ctx.pipeline.report(self._unexpected_payload(exc))
            model = InlineError(message=result.message)
        self._ctx.presenter.paint(area, model)
        return result

    @staticmethod
    def _unexpected_payload(exc: ValidationError) -> Failure:
        return Failure(
            kind=FailureKind.PARSE,
            message=f"Unexpected response from server ({exc.error_count()} invalid field(s))",
        )
