from decimal import Decimal
from enum import Enum


class InventoryCategory(str, Enum):
    ELECTRONICS = "Electronics"
    FURNITURE = "Furniture"
    CLOTHING = "Clothing"
    FOOD = "Food"
    BOOKS = "Books"
    TOYS = "Toys"
    SPORTS = "Sports"
    OTHER = "Other"

    @classmethod
    def values(cls):
        return [category.value for category in cls]


class StockStatus(str, Enum):
    IN_STOCK = "IN_STOCK"
    LOW_STOCK = "LOW_STOCK"
    OUT_OF_STOCK = "OUT_OF_STOCK"


DEFAULT_LOW_STOCK_THRESHOLD = 10

# column limits: Integer is 32-bit on postgres, price is Numeric(12, 2)
MAX_INTEGER = 2_147_483_647
MAX_PRICE = Decimal("9999999999.99")


def is_low_stock(quantity: int, low_stock_threshold: int) -> bool:
    return quantity <= low_stock_threshold


def stock_status_for(quantity: int, low_stock_threshold: int) -> StockStatus:
    if quantity == 0:
        return StockStatus.OUT_OF_STOCK
    if is_low_stock(quantity, low_stock_threshold):
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK
