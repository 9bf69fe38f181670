"""View models de solo lectura.

Se deserializan desde un `Success` y se pintan una vez en su área de
resultado; no se cachean.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


_READ_ONLY = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class ResultArea(str, Enum):
    """Zonas de resultado inline (una por consulta)."""

    USER_INFO = "user-info"
    TRAIN_INFO = "train-info"
    REMAINING = "remaining"
    ORDERS = "orders"
    ROUTES = "routes"
    BEST_PATH = "best-path"
    ACCESSIBILITY = "accessibility"


class InlineError(BaseModel):
    """Mensaje de error que se queda en el área tras expirar la notificación."""

    model_config = ConfigDict(frozen=True)

    message: str


class TrainInfo(BaseModel):
    model_config = _READ_ONLY

    train_id: str = Field(..., alias="trainId")
    seat_num: int = Field(..., alias="seatNum")
    station_count: int = Field(..., alias="stationCount")
    stations: list[str] = Field(default_factory=list)


class RemainingSeats(BaseModel):
    model_config = _READ_ONLY

    train_id: str = Field(..., alias="trainId")
    date: str
    departure_station: str = Field(..., alias="departureStation")
    remaining_seats: int = Field(..., alias="remainingSeats")


class Order(BaseModel):
    model_config = _READ_ONLY

    train_id: str = Field(..., alias="trainId")
    date: str
    departure_station: str = Field(..., alias="departureStation")


class OrderList(BaseModel):
    model_config = _READ_ONLY

    orders: list[Order] = Field(default_factory=list)


class RouteListing(BaseModel):
    model_config = _READ_ONLY

    start_station: str | None = Field(default=None, alias="startStation")
    end_station: str | None = Field(default=None, alias="endStation")
    routes: list[str]


class RoutePath(BaseModel):
    model_config = _READ_ONLY

    start_station: str | None = Field(default=None, alias="startStation")
    end_station: str | None = Field(default=None, alias="endStation")
    path: list[str]
    total_time: int = Field(..., alias="totalTime", description="Minutos.")
    total_price: int = Field(..., alias="totalPrice")


class Accessibility(BaseModel):
    model_config = _READ_ONLY

    start_station: str | None = Field(default=None, alias="startStation")
    end_station: str | None = Field(default=None, alias="endStation")
    accessible: bool
