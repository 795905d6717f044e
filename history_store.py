"""Historial de cálculos con persistencia en un archivo JSON."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    expression: str
    result: str

    def to_json(self) -> dict:
        return {"expr": self.expression, "result": self.result}

    @classmethod
    def from_json(cls, data) -> HistoryEntry:
        if not isinstance(data, dict):
            raise ValueError("Entrada de historial inválida")
        expression = data.get("expr")
        result = data.get("result")
        if not isinstance(expression, str) or not isinstance(result, str):
            raise ValueError("Entrada de historial inválida")
        return cls(expression, result)


class HistoryStore:
    """Pares (expresión, resultado), del más antiguo al más reciente.

    Con `path=None` el historial vive solo en memoria. Los problemas de
    lectura o escritura se registran y nunca interrumpen el cálculo.
    """

    DEFAULT_LIMIT = 200

    def __init__(self, path: Path | str | None = None,
                 limit: int = DEFAULT_LIMIT):
        self._path = Path(path) if path is not None else None
        self._limit = max(1, limit)
        self._entries: list[HistoryEntry] = []

    @property
    def limit(self) -> int:
        return self._limit

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def recent(self) -> list[HistoryEntry]:
        """Entradas en orden de visualización (la más reciente primero)."""
        return self._entries[::-1]

    # ── Modificación ─────────────────────────────────────────────

    def add(self, expression: str, result: str) -> HistoryEntry:
        entry = HistoryEntry(expression, result)
        self._entries.append(entry)
        del self._entries[:-self._limit]
        self.save()
        return entry

    def clear(self):
        self._entries.clear()
        self.save()

    # ── Persistencia ─────────────────────────────────────────────

    def load(self) -> list[HistoryEntry]:
        self._entries = []
        if self._path is None or not self._path.exists():
            return self.entries()

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            if not isinstance(raw, list):
                raise ValueError("Se esperaba una lista")
            entries = [HistoryEntry.from_json(item) for item in raw]
        except (OSError, ValueError) as exc:
            logger.warning("No se pudo leer el historial %s: %s",
                           self._path, exc)
            return self.entries()

        self._entries = entries[-self._limit:]
        return self.entries()

    def save(self):
        if self._path is None:
            return
        data = [entry.to_json() for entry in self._entries]
        try:
            self._path.write_text(json.dumps(data, ensure_ascii=False),
                                  encoding="utf-8")
        except OSError as exc:
            logger.warning("No se pudo guardar el historial %s: %s",
                           self._path, exc)
