# app/crud/inventory_items_crud.py
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session

from shared.core.record_store import DEFAULT_LIMIT, DEFAULT_PAGE, DEFAULT_SORT, RecordStore
from ..enum.inventory_enum import is_low_stock
from ..models.inventory_items import InventoryItem

# API sort keys -> model attributes
SORT_ALIASES = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "lowStockThreshold": "low_stock_threshold",
}


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class InventoryRepository:
    """Data access for inventory items on top of a ``RecordStore``.

    ``base_filters`` is whatever the caller needs intersected with the query;
    the inventory service uses it for owner scoping.
    """

    def __init__(self, db: Session):
        self.store: RecordStore[InventoryItem] = RecordStore(
            db, InventoryItem, sort_aliases=SORT_ALIASES, field_labels={"sku": "SKU"})

    # ----------------- Generic passthrough -----------------

    def find_all(self, filters: Optional[Sequence] = None, page: int = DEFAULT_PAGE,
                 limit: int = DEFAULT_LIMIT, sort: str = DEFAULT_SORT) -> Dict[str, Any]:
        return self.store.find_all(filters, page=page, limit=limit, sort=sort)

    def find_many(self, filters: Optional[Sequence] = None,
                  sort: str = DEFAULT_SORT) -> List[InventoryItem]:
        return self.store.find_many(filters, sort=sort)

    def find_by_id(self, item_id: str) -> Optional[InventoryItem]:
        return self.store.find_by_id(item_id)

    def find_one(self, filters: Sequence) -> Optional[InventoryItem]:
        return self.store.find_one(filters)

    def create(self, data: Mapping[str, Any]) -> InventoryItem:
        return self.store.create(data)

    def update_by_id(self, item_id: str, patch: Mapping[str, Any]) -> Optional[InventoryItem]:
        return self.store.update_by_id(item_id, patch)

    def delete_by_id(self, item_id: str) -> Optional[InventoryItem]:
        return self.store.delete_by_id(item_id)

    def count(self, filters: Optional[Sequence] = None) -> int:
        return self.store.count(filters)

    # ----------------- Inventory specific -----------------

    def find_by_category(self, category: str, base_filters: Optional[Sequence] = None,
                         page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT,
                         sort: str = DEFAULT_SORT) -> Dict[str, Any]:
        filters = list(base_filters or [])
        filters.append(InventoryItem.category == category)
        return self.find_all(filters, page=page, limit=limit, sort=sort)

    def search(self, term: str, base_filters: Optional[Sequence] = None,
               page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT,
               sort: str = DEFAULT_SORT) -> Dict[str, Any]:
        pattern = _like_pattern(term)
        filters = list(base_filters or [])
        filters.append(
            or_(
                InventoryItem.name.ilike(pattern, escape="\\"),
                InventoryItem.sku.ilike(pattern, escape="\\"),
                InventoryItem.description.ilike(pattern, escape="\\"),
            )
        )
        return self.find_all(filters, page=page, limit=limit, sort=sort)

    def find_low_stock(self, base_filters: Optional[Sequence] = None,
                       sort: str = DEFAULT_SORT) -> Dict[str, Any]:
        # threshold is per row, so the comparison happens here
        items = [
            item for item in self.find_many(base_filters, sort=sort)
            if is_low_stock(item.quantity, item.low_stock_threshold)
        ]
        return {"items": items, "count": len(items)}

    def update_quantity(self, item_id: str, quantity: int) -> Optional[InventoryItem]:
        return self.update_by_id(item_id, {"quantity": quantity})

    def sku_exists(self, sku: str) -> bool:
        if not sku:
            return False
        normalized = sku.strip().upper()
        return self.find_one([InventoryItem.sku == normalized]) is not None
