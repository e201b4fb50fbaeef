from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from shared.core.schemas import CommonQueryParams, Pagination
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ..enum.inventory_enum import MAX_INTEGER, InventoryCategory, StockStatus


# ---------------- Item Request ----------------
class InventoryItemRequest(CommonQueryParams):
    category: Optional[InventoryCategory] = None


# ---------------- Item Create/Update ----------------
class InventoryItemCreate(EmptyStringModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    category: InventoryCategory
    sku: Optional[str] = Field(default=None, max_length=64)
    quantity: int = Field(ge=0, le=MAX_INTEGER)
    price: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    low_stock_threshold: Optional[int] = Field(default=None, ge=0, le=MAX_INTEGER)


class InventoryItemUpdate(EmptyStringModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    category: Optional[InventoryCategory] = None
    sku: Optional[str] = Field(default=None, max_length=64)
    quantity: Optional[int] = Field(default=None, ge=0, le=MAX_INTEGER)
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    low_stock_threshold: Optional[int] = Field(default=None, ge=0, le=MAX_INTEGER)


class QuantityUpdate(BaseModel):
    quantity: int


# ---------------- Item Output ----------------
class InventoryItemOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    category: InventoryCategory
    sku: str
    quantity: int
    price: Decimal
    low_stock_threshold: int
    stock_status: StockStatus
    owner_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class InventoryItemListResponse(BaseModel):
    items: List[InventoryItemOut]
    pagination: Pagination

    model_config = {"from_attributes": True}


class LowStockResponse(BaseModel):
    items: List[InventoryItemOut]
    count: int


# ---------------- Overview Response ----------------
class InventoryStatisticsResponse(BaseModel):
    totalItems: int
    totalValue: str
    lowStockCount: int
    outOfStockCount: int
