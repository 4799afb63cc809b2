"""In-memory repositories and filesystem output helpers."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Dict, Generic, List, Optional, Protocol, Tuple, TypeVar

T = TypeVar("T")


class Repository(Protocol[T]):
    def get(self, key: str) -> Optional[T]: ...

    def put(self, key: str, value: T) -> None: ...

    def delete(self, key: str) -> bool: ...

    def list(self) -> List[T]: ...

    def __contains__(self, key: object) -> bool: ...


class InMemoryRepository(Generic[T]):
    """Insertion-ordered key/value store guarded by a lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: Dict[str, T] = {}

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            return self._items.get(key)

    def put(self, key: str, value: T) -> None:
        with self._lock:
            self._items[key] = value

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._items.pop(key, None) is not None

    def list(self) -> List[T]:
        with self._lock:
            return list(self._items.values())

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._items


class ItineraryIndex:
    """Passenger id -> assigned flight ids, append only.

    An entry only exists once a flight has been assigned; ``flights_for``
    returns an empty list for passengers without one.
    """

    def __init__(self, repository: Optional[InMemoryRepository[Tuple[str, ...]]] = None) -> None:
        self._lock = threading.Lock()
        self._repository = repository if repository is not None else InMemoryRepository()

    def assign(self, passenger_id: str, flight_id: str) -> List[str]:
        with self._lock:
            current = self._repository.get(passenger_id) or ()
            updated = current + (flight_id,)
            self._repository.put(passenger_id, updated)
        return list(updated)

    def flights_for(self, passenger_id: str) -> List[str]:
        return list(self._repository.get(passenger_id) or ())

    def has_flights(self, passenger_id: str) -> bool:
        return bool(self._repository.get(passenger_id))

    def references(self, flight_id: str) -> bool:
        return any(flight_id in flight_ids for flight_ids in self._repository.list())


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def write_json(path: Path, payload: Any) -> None:
    ensure_dir(path.parent)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, ensure_ascii=True, indent=2, default=str)
