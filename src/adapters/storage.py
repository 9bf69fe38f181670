"""Backends de almacenamiento clave/valor.

Por qué un fichero JSON:
- Es el equivalente en terminal al `localStorage` del navegador: sobrevive
  entre ejecuciones y se puede inspeccionar/borrar a mano.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.interfaces.storage import KeyValueStorage
from core.logger import get_logger

log = get_logger("storage")


class JsonFileStorage(KeyValueStorage):
    """Claves/valores de texto en un único fichero JSON UTF-8."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._data: dict[str, str] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._flush(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._flush(data)

    def _load(self) -> dict[str, str]:
        if self._data is not None:
            return self._data
        data: dict[str, str] = {}
        if self._path.exists():
            try:
                raw = json.loads(self._path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                log.warning("Ignoring unreadable storage file %s: %s", self._path, exc)
                raw = {}
            if isinstance(raw, dict):
                data = {str(k): v for k, v in raw.items() if isinstance(v, str)}
        self._data = data
        return data

    def _flush(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )


class MemoryStorage(KeyValueStorage):
    """Sin persistencia (tests, `--no-persist`)."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self.data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove_item(self, key: str) -> None:
        self.data.pop(key, None)
