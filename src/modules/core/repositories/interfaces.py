"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Product``).
    """

    @abstractmethod
    def get_by_id(self, id: Any) -> Optional[T]:
        """Retrieve an entity by its primary key, or ``None``."""

    @abstractmethod
    def list_all(self) -> List[T]:
        """Return every entity in storage order."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) an entity, assigning its id if absent."""

    @abstractmethod
    def delete(self, entity: T) -> None:
        """Permanently remove an entity."""
