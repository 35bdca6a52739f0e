"""Abstract repository for inventory items.

Lives in the domain layer so the service never depends on a storage
technology. The SQLAlchemy implementation is in
app.infrastructure.repository; tests use an in-memory fake.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod

from app.domain.models import InventoryItem


class InventoryRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[InventoryItem]:
        """Return every stored item in storage order."""

    @abstractmethod
    def get_by_id(self, item_id: uuid.UUID) -> InventoryItem | None:
        """Return the item, or None if it does not exist."""

    @abstractmethod
    def exists(self, item_id: uuid.UUID) -> bool:
        ...

    @abstractmethod
    def add(self, item: InventoryItem) -> InventoryItem:
        """Persist a new item and return the stored representation."""

    @abstractmethod
    def update(self, item: InventoryItem) -> InventoryItem:
        """Persist changes made to an item previously returned by this repository."""

    @abstractmethod
    def delete(self, item_id: uuid.UUID) -> None:
        ...
