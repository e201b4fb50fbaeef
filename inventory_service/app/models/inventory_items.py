# app/models/inventory_items.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from sqlalchemy import Column, DateTime, Integer, Numeric, String, event
from sqlalchemy.orm import validates

from shared.core.database import Base
from shared.core.exceptions import ValidationError
from ..enum.inventory_enum import (
    DEFAULT_LOW_STOCK_THRESHOLD, MAX_INTEGER, MAX_PRICE, InventoryCategory, stock_status_for)
from ..helpers.sku_generator import generate_sku


def utcnow():
    return datetime.now(timezone.utc)


def _non_negative_int(value, label: str) -> int:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    elif isinstance(value, str) and value.strip().lstrip("-").isdigit():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{label} must be a non-negative integer")
    if value < 0:
        raise ValidationError(f"{label} cannot be negative")
    if value > MAX_INTEGER:
        raise ValidationError(f"{label} cannot be more than {MAX_INTEGER}")
    return value


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    category = Column(String(32), nullable=False, index=True)
    sku = Column(String(64), unique=True, index=True)
    quantity = Column(Integer, nullable=False, default=0)
    price = Column(Numeric(12, 2), nullable=False)
    low_stock_threshold = Column(
        Integer, nullable=False, default=DEFAULT_LOW_STOCK_THRESHOLD)
    owner_id = Column(String(36), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    @property
    def stock_status(self):
        threshold = self.low_stock_threshold
        if threshold is None:
            threshold = DEFAULT_LOW_STOCK_THRESHOLD
        return stock_status_for(self.quantity or 0, threshold)

    @validates("name")
    def validate_name(self, key, value):
        value = (value or "").strip()
        if not value:
            raise ValidationError("Please provide a product name")
        if len(value) > 100:
            raise ValidationError("Name cannot be more than 100 characters")
        return value

    @validates("description")
    def validate_description(self, key, value):
        if value is None:
            return None
        value = value.strip()
        if len(value) > 500:
            raise ValidationError(
                "Description cannot be more than 500 characters")
        return value or None

    @validates("category")
    def validate_category(self, key, value):
        if isinstance(value, InventoryCategory):
            return value.value
        value = (value or "").strip()
        if not value:
            raise ValidationError("Please provide a category")
        if value not in InventoryCategory.values():
            raise ValidationError(f"{value} is not a valid category")
        return value

    @validates("sku")
    def validate_sku(self, key, value):
        if value is None:
            return None
        value = str(value).strip().upper()
        return value or None

    @validates("quantity")
    def validate_quantity(self, key, value):
        return _non_negative_int(value, "Quantity")

    @validates("low_stock_threshold")
    def validate_low_stock_threshold(self, key, value):
        return _non_negative_int(value, "Low stock threshold")

    @validates("price")
    def validate_price(self, key, value):
        if isinstance(value, bool) or value is None:
            raise ValidationError("Please provide price")
        try:
            price = Decimal(str(value))
        except InvalidOperation:
            raise ValidationError("Price must be a number")
        if not price.is_finite():
            raise ValidationError("Price must be a number")
        if price < 0:
            raise ValidationError("Price cannot be negative")
        price = price.quantize(Decimal("0.01"))
        if price > MAX_PRICE:
            raise ValidationError(f"Price cannot be more than {MAX_PRICE}")
        return price


@event.listens_for(InventoryItem, "before_insert")
def assign_sku(mapper, connection, target):
    # best effort: items inserted without a SKU get a generated one
    if not target.sku:
        target.sku = generate_sku(target.category)
