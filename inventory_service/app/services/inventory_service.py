import logging
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel
from sqlalchemy.orm import Session

from shared.core.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from shared.core.record_store import DEFAULT_LIMIT, DEFAULT_PAGE
from ..crud.inventory_items_crud import InventoryRepository
from ..enum.inventory_enum import StockStatus, is_low_stock
from ..helpers.sku_generator import generate_sku
from ..models.inventory_items import InventoryItem

logger = logging.getLogger(__name__)

DEFAULT_SORT = "-createdAt"
SKU_GENERATION_ATTEMPTS = 5
SKU_TAKEN = "SKU already exists"

# never taken from client input
PROTECTED_FIELDS = {"id", "owner_id", "ownerId", "created_by", "createdBy",
                    "created_at", "updated_at"}


def _as_dict(data: Any, partial: bool = False) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        # a patch keeps explicit nulls so optional fields can be cleared
        if partial:
            data = data.model_dump(exclude_unset=True)
        else:
            data = data.model_dump(exclude_none=True)
    values = dict(data or {})
    for field in PROTECTED_FIELDS:
        values.pop(field, None)
    return values


def _enum_value(value):
    return getattr(value, "value", value)


class InventoryService:
    """Owner-scoped inventory rules.

    Every public method takes the caller's ``owner_id`` and adds it as a filter
    before touching the repository; nothing below this class knows who is
    asking.
    """

    def __init__(self, db: Session, repository: Optional[InventoryRepository] = None):
        self.repository = repository or InventoryRepository(db)

    @staticmethod
    def _owner_filter(owner_id) -> list:
        return [InventoryItem.owner_id == str(owner_id)]

    def _get_owned(self, item_id: str, owner_id) -> InventoryItem:
        item = self.repository.find_one(
            [InventoryItem.id == str(item_id), *self._owner_filter(owner_id)])
        if not item:
            raise NotFoundError("Inventory item not found")
        return item

    # ----------------- Queries -----------------

    def list_items(self, filters: Optional[Mapping[str, Any]] = None, owner_id=None,
                   page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT,
                   sort: str = DEFAULT_SORT) -> Dict[str, Any]:
        filters = filters or {}
        base_filters = self._owner_filter(owner_id)

        if filters.get("search"):
            return self.repository.search(
                filters["search"], base_filters, page=page, limit=limit, sort=sort)

        if filters.get("category"):
            return self.repository.find_by_category(
                _enum_value(filters["category"]), base_filters,
                page=page, limit=limit, sort=sort)

        return self.repository.find_all(base_filters, page=page, limit=limit, sort=sort)

    def get_item(self, item_id: str, owner_id) -> InventoryItem:
        return self._get_owned(item_id, owner_id)

    def list_low_stock(self, owner_id, sort: str = DEFAULT_SORT) -> Dict[str, Any]:
        return self.repository.find_low_stock(self._owner_filter(owner_id), sort=sort)

    def get_statistics(self, owner_id) -> Dict[str, Any]:
        items = self.repository.find_many(self._owner_filter(owner_id))

        total_value = Decimal("0")
        low_stock_count = 0
        out_of_stock_count = 0
        for item in items:
            total_value += Decimal(item.price) * item.quantity
            if is_low_stock(item.quantity, item.low_stock_threshold):
                low_stock_count += 1
            if item.stock_status == StockStatus.OUT_OF_STOCK:
                out_of_stock_count += 1

        return {
            "totalItems": len(items),
            "totalValue": f"{total_value:.2f}",
            "lowStockCount": low_stock_count,
            "outOfStockCount": out_of_stock_count,
        }

    # ----------------- Commands -----------------

    def create_item(self, data: Any, owner_id) -> InventoryItem:
        values = _as_dict(data)
        values["owner_id"] = str(owner_id)
        if "category" in values:
            values["category"] = _enum_value(values["category"])

        if values.get("sku"):
            values["sku"] = str(values["sku"]).strip().upper()
            self._ensure_sku_free(values["sku"])
        if not values.get("sku") and values.get("category"):
            values["sku"] = self._unused_sku(values["category"])

        item = self.repository.create(values)
        logger.info("Inventory item %s (%s) created by %s",
                    item.id, item.sku, owner_id)
        return item

    def update_item(self, item_id: str, patch: Any, owner_id) -> InventoryItem:
        existing = self._get_owned(item_id, owner_id)
        values = _as_dict(patch, partial=True)
        if "category" in values:
            values["category"] = _enum_value(values["category"])

        if "sku" in values:
            new_sku = (values["sku"] or "").strip().upper()
            if not new_sku:
                values.pop("sku")
            elif new_sku != existing.sku:
                self._ensure_sku_free(new_sku)
                values["sku"] = new_sku

        item = self.repository.update_by_id(existing.id, values)
        if not item:
            raise NotFoundError("Inventory item not found")
        logger.info("Inventory item %s updated by %s", item.id, owner_id)
        return item

    def delete_item(self, item_id: str, owner_id) -> Dict[str, str]:
        existing = self._get_owned(item_id, owner_id)
        deleted = self.repository.delete_by_id(existing.id)
        if not deleted:
            raise NotFoundError("Inventory item not found")

        logger.info("Inventory item %s deleted by %s", item_id, owner_id)
        return {"message": "Inventory item deleted successfully"}

    def update_quantity(self, item_id: str, quantity: int, owner_id) -> InventoryItem:
        if quantity is None or quantity < 0:
            raise InvalidArgumentError("Quantity cannot be negative")

        existing = self._get_owned(item_id, owner_id)
        item = self.repository.update_quantity(existing.id, quantity)
        if not item:
            raise NotFoundError("Inventory item not found")
        logger.info("Inventory item %s quantity set to %s", item.id, quantity)
        return item

    # ----------------- Helpers -----------------

    def _ensure_sku_free(self, sku: str):
        # uniqueness is global, not per owner
        if self.repository.sku_exists(sku):
            logger.info("SKU %s rejected: already in use", sku)
            raise ConflictError(SKU_TAKEN)

    def _unused_sku(self, category: str) -> str:
        for _ in range(SKU_GENERATION_ATTEMPTS):
            sku = generate_sku(category)
            if not self.repository.sku_exists(sku):
                return sku
        raise ConflictError("Could not generate a unique SKU, please retry")
