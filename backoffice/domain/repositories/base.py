"""
Base Repository Interface.
Defines the standard contract for data access operations.
"""

from typing import Any, Dict, List, Optional, Protocol, TypeVar

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for generic CRUD operations.

    Writes accept ``commit=False`` so a caller can group several writes
    into one transaction and finish it with ``commit()`` or ``rollback()``.
    """

    def get_by_id(self, id: str) -> Optional[T]:
        """Get a single entity by ID."""
        ...

    def list(self) -> List[T]:
        """List all entities."""
        ...

    def create(self, values: Dict[str, Any], commit: bool = True) -> T:
        """Create a new entity."""
        ...

    def update(self, db_obj: T, values: Dict[str, Any], commit: bool = True) -> T:
        """Update an existing entity."""
        ...

    def delete(self, db_obj: T, commit: bool = True) -> None:
        """Delete an entity."""
        ...

    def refresh(self, db_obj: T) -> T:
        """Reload an entity's state from the database."""
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...
