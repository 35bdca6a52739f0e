from __future__ import annotations

import uuid
from typing import Iterable, Optional

from shared.core import get_logger
from app.domain.models import InventoryItem
from app.domain.repository import InventoryRepository
from .results import Created, Duplicate, NotFound, Updated, CreateResult, UpdateResult
from .schemas import InventoryCreate, InventoryUpdate

logger = get_logger(__name__)

def normalize_name(name: Optional[str]) -> str:
    """Comparison key for the duplicate-name rule: trimmed and case-folded."""
    return (name or "").strip().casefold()

class InventoryService:
    """
    Business rules for inventory items.

    No two items may share a normalized name. The check reads every stored
    name and then writes, so it is not atomic: two concurrent creates with
    the same name can both pass. Closing that race needs a uniqueness
    constraint in the store itself.
    """

    def __init__(self, repository: InventoryRepository):
        self.repository = repository

    def list(self) -> list[InventoryItem]:
        return self.repository.list_all()

    def get(self, item_id: uuid.UUID) -> Optional[InventoryItem]:
        return self.repository.get_by_id(item_id)

    def search(self, query: str) -> list[InventoryItem]:
        """Case-insensitive substring match on name, category and supplier.

        Blank queries are rejected by the API layer before reaching here.
        """
        needle = query.strip().casefold()
        return [
            item for item in self.repository.list_all()
            if any(needle in (value or "").casefold() for value in (item.name, item.category, item.supplier))
        ]

    def create(self, data: InventoryCreate) -> CreateResult:
        duplicate = self._find_duplicate(data.name, self.repository.list_all())
        if duplicate is not None:
            return duplicate

        item = InventoryItem(id=uuid.uuid4())
        self._apply(item, data)
        stored = self.repository.add(item)
        logger.info(
            f"Inventory item created: {stored.id}",
            extra={'extra_fields': {'item_id': str(stored.id), 'item_name': stored.name}}
        )
        return Created(stored)

    def update(self, item_id: uuid.UUID, data: InventoryUpdate) -> UpdateResult:
        item = self.repository.get_by_id(item_id)
        if item is None:
            return NotFound()

        others = [other for other in self.repository.list_all() if other.id != item_id]
        duplicate = self._find_duplicate(data.name, others)
        if duplicate is not None:
            return duplicate

        # Whole-record replace: optional fields missing from the request become null
        self._apply(item, data)
        stored = self.repository.update(item)
        logger.info(
            f"Inventory item updated: {item_id}",
            extra={'extra_fields': {'item_id': str(item_id), 'item_name': stored.name}}
        )
        return Updated(stored)

    def delete(self, item_id: uuid.UUID) -> bool:
        if not self.repository.exists(item_id):
            return False
        self.repository.delete(item_id)
        logger.info(f"Inventory item deleted: {item_id}", extra={'extra_fields': {'item_id': str(item_id)}})
        return True

    def _find_duplicate(self, name: str, candidates: Iterable[InventoryItem]) -> Optional[Duplicate]:
        key = normalize_name(name)
        for existing in candidates:
            if normalize_name(existing.name) == key:
                message = f"{name.strip()} already exists"
                logger.warning(
                    f"Duplicate inventory name rejected: {message}",
                    extra={'extra_fields': {'conflicting_id': str(existing.id)}}
                )
                return Duplicate(message)
        return None

    @staticmethod
    def _apply(item: InventoryItem, data: InventoryCreate | InventoryUpdate) -> None:
        item.name = data.name
        item.quantity = data.quantity
        item.category = data.category
        item.supplier = data.supplier
        item.expiry_date = data.expiry_date
        item.description = data.description
        item.photo_url = data.photo_url
