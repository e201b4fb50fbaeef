# app/router/inventory_items_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from shared.core.database import get_db
from shared.helpers.json_response_helper import success_response
from shared.core.schemas import JsonOutResult, UserToken
from shared.utils.app_status_code import AppStatusCode
from ..schemas.inventory_items_schemas import (
    InventoryItemCreate, InventoryItemListResponse, InventoryItemOut, InventoryItemRequest,
    InventoryItemUpdate, InventoryStatisticsResponse, LowStockResponse, QuantityUpdate)
from ..services.inventory_service import InventoryService
from shared.core.auth import validate_current_token

router = APIRouter(prefix="/api/inventory",
                   tags=["inventory"], dependencies=[Depends(validate_current_token)])


def get_inventory_service(db: Session = Depends(get_db)) -> InventoryService:
    return InventoryService(db)


# ---------------- List all items ----------------
@router.get("", response_model=JsonOutResult)
def read_items(
    params: InventoryItemRequest = Depends(),
    service: InventoryService = Depends(get_inventory_service),
    current_user: UserToken = Depends(validate_current_token)
):
    result = service.list_items(
        {"search": params.search, "category": params.category},
        owner_id=current_user.user_id,
        page=params.page,
        limit=params.limit,
        sort=params.sort
    )
    return success_response(InventoryItemListResponse(
        items=[InventoryItemOut.model_validate(i) for i in result["items"]],
        pagination=result["pagination"]
    ))


# ---------------- Low stock ----------------
@router.get("/lowstock/items", response_model=JsonOutResult)
def read_low_stock_items(
    service: InventoryService = Depends(get_inventory_service),
    current_user: UserToken = Depends(validate_current_token)
):
    result = service.list_low_stock(current_user.user_id)
    return success_response(LowStockResponse(
        items=[InventoryItemOut.model_validate(i) for i in result["items"]],
        count=result["count"]
    ))


# ---------------- Overview ----------------
@router.get("/stats/summary", response_model=JsonOutResult)
def read_statistics(
    service: InventoryService = Depends(get_inventory_service),
    current_user: UserToken = Depends(validate_current_token)
):
    stats = service.get_statistics(current_user.user_id)
    return success_response(InventoryStatisticsResponse(**stats))


@router.get("/{item_id}", response_model=JsonOutResult)
def read_item(
    item_id: str,
    service: InventoryService = Depends(get_inventory_service),
    current_user: UserToken = Depends(validate_current_token)
):
    item = service.get_item(item_id, current_user.user_id)
    return success_response(InventoryItemOut.model_validate(item))


# -------create-------------------------------
@router.post("", response_model=JsonOutResult, status_code=status.HTTP_201_CREATED)
def create_item(
    item: InventoryItemCreate,
    service: InventoryService = Depends(get_inventory_service),
    current_user: UserToken = Depends(validate_current_token)
):
    created = service.create_item(item, current_user.user_id)
    return success_response(
        InventoryItemOut.model_validate(created),
        message="Inventory item created successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY
    )


# ---------------- Update ----------------
@router.put("/{item_id}", response_model=JsonOutResult)
def update_item(
    item_id: str,
    item: InventoryItemUpdate,
    service: InventoryService = Depends(get_inventory_service),
    current_user: UserToken = Depends(validate_current_token)
):
    updated = service.update_item(item_id, item, current_user.user_id)
    return success_response(
        InventoryItemOut.model_validate(updated),
        message="Inventory item updated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY
    )


@router.patch("/{item_id}/quantity", response_model=JsonOutResult)
def update_quantity(
    item_id: str,
    payload: QuantityUpdate,
    service: InventoryService = Depends(get_inventory_service),
    current_user: UserToken = Depends(validate_current_token)
):
    updated = service.update_quantity(
        item_id, payload.quantity, current_user.user_id)
    return success_response(
        InventoryItemOut.model_validate(updated),
        message="Quantity updated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY
    )


# ---------------- Delete ----------------
@router.delete("/{item_id}", response_model=JsonOutResult)
def delete_item(
    item_id: str,
    service: InventoryService = Depends(get_inventory_service),
    current_user: UserToken = Depends(validate_current_token)
):
    result = service.delete_item(item_id, current_user.user_id)
    return success_response(
        {},
        message=result["message"],
        status_code=AppStatusCode.DELETED_SUCCESSFULLY
    )
