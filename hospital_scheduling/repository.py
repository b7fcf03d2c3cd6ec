"""Repository interface the scheduling core depends on.

The core only needs list/get/create/update; the in-memory implementation
below can be swapped for a database-backed one without touching callers.
Records are never deleted: schedules are deactivated and appointments
cancelled.
"""
import threading
from typing import Dict, Generic, List, Protocol, TypeVar

from pydantic import BaseModel

from hospital_scheduling.errors import NotFoundError, SchedulingError


T = TypeVar("T", bound=BaseModel)


class RecordNotFoundError(NotFoundError):
    """Raised when a record id is not in the repository."""
    pass


class DuplicateRecordError(SchedulingError, ValueError):
    """Raised when creating a record whose id already exists."""
    pass


class Repository(Protocol[T]):
    """Capability set required by the scheduling core."""

    def list(self) -> List[T]:
        ...

    def get(self, record_id: str) -> T:
        ...

    def create(self, record: T) -> T:
        ...

    def update(self, record: T) -> T:
        ...


class InMemoryRepository(Generic[T]):
    """
    Thread-safe in-memory repository keyed by the record's ``id``.

    Pattern: dict storage guarded by a lock, like the in-memory stores of
    a mock backend. Good for: tests, single-process sessions.
    Stored records are copies, so callers cannot mutate state behind the
    repository's back.
    """

    def __init__(self, records: List[T] = None):
        self._records: Dict[str, T] = {}
        self.lock = threading.Lock()

        for record in records or []:
            self.create(record)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: str) -> bool:
        return record_id in self._records

    def list(self) -> List[T]:
        """All records in insertion order."""
        with self.lock:
            return [record.model_copy(deep=True) for record in self._records.values()]

    def get(self, record_id: str) -> T:
        """
        Get record by id.

        Raises:
            RecordNotFoundError: If no record has this id
        """
        with self.lock:
            record = self._records.get(record_id)
            if record is None:
                raise RecordNotFoundError(f"Record '{record_id}' not found")
            return record.model_copy(deep=True)

    def create(self, record: T) -> T:
        """
        Store a new record.

        Raises:
            DuplicateRecordError: If the id is already taken
        """
        with self.lock:
            if record.id in self._records:
                raise DuplicateRecordError(f"Record '{record.id}' already exists")
            self._records[record.id] = record.model_copy(deep=True)
            return record.model_copy(deep=True)

    def update(self, record: T) -> T:
        """
        Replace an existing record, keeping its position.

        Raises:
            RecordNotFoundError: If the id is unknown
        """
        with self.lock:
            if record.id not in self._records:
                raise RecordNotFoundError(f"Record '{record.id}' not found")
            self._records[record.id] = record.model_copy(deep=True)
            return record.model_copy(deep=True)
