"""Puerto de almacenamiento duradero.

Por qué Protocol:
- El `SessionStore` separa su transición en memoria del efecto de persistencia.
- Cualquier backend clave/valor (fichero JSON, memoria, keyring...) encaja
  sin herencia.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStorage(Protocol):
    """Contrato mínimo, con la misma forma que el `localStorage` del navegador."""

    def get_item(self, key: str) -> str | None:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...
