"""Administración de trenes."""

from __future__ import annotations

from urllib.parse import quote

from core.domain.models import ApiResult, HttpMethod, RequestDescriptor
from core.domain.view_models import ResultArea, TrainInfo
from core.orchestration.base import OrchestrationModule, unwrap
from core.orchestration.forms import FormInput, parse_int, split_ints, split_list, text

ADD_TRAIN_FIELDS = ("trainId", "seatNum", "stationCount", "stations", "durations", "prices")


def add_train_payload(form: FormInput) -> dict:
    """Payload de alta: estaciones como texto, duraciones/precios como enteros."""

    return {
        "trainId": text(form, "trainId"),
        "seatNum": parse_int(text(form, "seatNum")),
        "stationCount": parse_int(text(form, "stationCount")),
        "stations": split_list(text(form, "stations")),
        "durations": split_ints(text(form, "durations")),
        "prices": split_ints(text(form, "prices")),
    }


class TrainModule(OrchestrationModule):
    async def add_train(self, form: FormInput) -> ApiResult:
        invalid = self._validate(form, ADD_TRAIN_FIELDS)
        if invalid:
            return invalid

        return await self._mutate(
            RequestDescriptor(endpoint="/train", method=HttpMethod.POST, body=add_train_payload(form)),
            "Train added",
        )

    async def query_train(self, form: FormInput) -> ApiResult:
        invalid = self._validate(form, ("trainId",))
        if invalid:
            return invalid

        train_id = quote(text(form, "trainId").strip(), safe="")
        return await self._query(
            RequestDescriptor(endpoint=f"/train/{train_id}"),
            ResultArea.TRAIN_INFO,
            lambda payload: TrainInfo.model_validate(unwrap(payload, "train")),
        )
