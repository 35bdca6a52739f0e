import uuid
from typing import Optional
from sqlalchemy.orm import Session
from app.domain.models import InventoryItem
from app.domain.repository import InventoryRepository

class SqlAlchemyInventoryRepository(InventoryRepository):
    """InventoryRepository backed by one SQLAlchemy session (one per request)."""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> list[InventoryItem]:
        return self.db.query(InventoryItem).all()

    def get_by_id(self, item_id: uuid.UUID) -> Optional[InventoryItem]:
        return self.db.query(InventoryItem).filter(InventoryItem.id == item_id).first()

    def exists(self, item_id: uuid.UUID) -> bool:
        return self.db.query(InventoryItem.id).filter(InventoryItem.id == item_id).first() is not None

    def add(self, item: InventoryItem) -> InventoryItem:
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def update(self, item: InventoryItem) -> InventoryItem:
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete(self, item_id: uuid.UUID) -> None:
        item = self.get_by_id(item_id)
        if item is not None:
            self.db.delete(item)
            self.db.commit()
