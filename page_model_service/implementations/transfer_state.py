"""In-memory transfer state for the server-to-client page model hand-off."""

from __future__ import annotations

import json
from typing import Any

PAGE_MODEL_KEY = "pagemodel"


class InMemoryTransferState:
    """Key/value store serialisable to JSON.

    The server pass fills it and ships ``to_json()`` with the rendered page;
    the client pass rebuilds it with ``from_json()`` and consumes the values.
    Stored values must be JSON-serialisable.
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._store: dict[str, Any] = dict(initial or {})

    def has_key(self, key: str) -> bool:
        return key in self._store

    def get(self, key: str, default: Any = None) -> Any:
        return self._store.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._store[key] = value

    def remove(self, key: str) -> None:
        self._store.pop(key, None)

    def is_empty(self) -> bool:
        return not self._store

    def to_dict(self) -> dict[str, Any]:
        return dict(self._store)

    def to_json(self) -> str:
        return json.dumps(self._store)

    @classmethod
    def from_json(cls, payload: str | None) -> InMemoryTransferState:
        if not payload:
            return cls()
        data = json.loads(payload)
        if not isinstance(data, dict):
            raise ValueError("Transfer state payload must be a JSON object")
        return cls(data)
