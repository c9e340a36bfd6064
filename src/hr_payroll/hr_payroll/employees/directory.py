from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Employee


class EmployeeDirectory(Protocol):
    def resolve(self, clock_ref: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError


class InMemoryEmployeeDirectory:
    """Directory backed by a list of employees (loaded by the caller)."""

    def __init__(self, employees: Iterable[Employee] = ()):
        self._by_ref: dict[str, Employee] = {}
        self._by_id: dict[str, Employee] = {}
        for e in employees:
            self._by_ref[self._key(e.clock_ref)] = e
            self._by_id[e.employee_id] = e

    @staticmethod
    def _key(clock_ref: str) -> str:
        return str(clock_ref).strip().upper()

    def resolve(self, clock_ref: str) -> Optional[Employee]:
        if clock_ref is None:
            return None
        return self._by_ref.get(self._key(clock_ref))

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def list_all(self) -> Sequence[Employee]:
        return list(self._by_id.values())
