"""Validación y coerción de formularios.

La coerción es confiada: un número mal escrito se convierte en NaN y se
envía igual; el servidor es quien lo rechaza.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, Mapping

FormInput = Mapping[str, "str | None"]

LIST_SEPARATOR = "/"

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def first_missing_field(form: FormInput, required: Iterable[str]) -> str | None:
    """Devuelve el primer campo requerido ausente o en blanco (o `None`)."""

    for name in required:
        value = form.get(name)
        if value is None or str(value).strip() == "":
            return name
    return None


def text(form: FormInput, name: str) -> str:
    value = form.get(name)
    return "" if value is None else str(value)


def parse_int(value: str | None) -> int | float:
    """Entero con la semántica de `parseInt`: prefijo numérico o NaN."""

    if value is None:
        return math.nan
    match = _LEADING_INT.match(value)
    if match is None:
        return math.nan
    return int(match.group(1))


def split_list(value: str | None) -> list[str]:
    """Divide por '/' conservando el orden (y los huecos vacíos)."""

    return (value or "").split(LIST_SEPARATOR)


def split_ints(value: str | None) -> list[int | float]:
    return [parse_int(part) for part in split_list(value)]
