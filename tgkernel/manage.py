"""Interfaces for task containers and schedulers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")
I = TypeVar("I")


class Manage(ABC, Generic[T, I]):
    """Stores task objects by identifier."""

    @abstractmethod
    def insert(self, id: I, item: T) -> None:
        """Store ``item`` under ``id``."""

    @abstractmethod
    def delete(self, id: I) -> None:
        """Remove the item stored under ``id``."""

    @abstractmethod
    def get(self, id: I) -> T | None:
        """The item stored under ``id``, or None."""

    def __contains__(self, id: object) -> bool:
        return self.get(id) is not None  # type: ignore[arg-type]


class Schedule(ABC, Generic[I]):
    """Decides which identifier runs next."""

    @abstractmethod
    def add(self, id: I) -> None:
        """Enqueue ``id``."""

    @abstractmethod
    def fetch(self) -> I | None:
        """Dequeue the next identifier, or None if nothing is ready."""