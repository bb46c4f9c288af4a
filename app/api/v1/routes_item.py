# File: app/api/v1/routes_item.py

from fastapi import APIRouter, Depends, status

from app.api.deps import get_current_owner_id, get_item_service, get_order_service
from app.schemas.item import (
    ItemCreate,
    ItemFinishedResponse,
    ItemRead,
    ItemUpdate,
    MoveRequest,
    MoveResponse,
)
from app.services.item_service import ItemService
from app.services.order_service import OrderService

router = APIRouter()


@router.get("/", response_model=list[ItemRead], summary="List all of the caller's items")
def list_items(
    owner_id: int = Depends(get_current_owner_id),
    service: ItemService = Depends(get_item_service),
):
    return service.list_for_owner(owner_id)


@router.post(
    "/",
    response_model=ItemRead,
    status_code=status.HTTP_201_CREATED,
    summary="Append an item to a roadmap",
)
def create_item(
    payload: ItemCreate,
    owner_id: int = Depends(get_current_owner_id),
    service: ItemService = Depends(get_item_service),
):
    return service.create(owner_id, payload.roadmap_id, payload.title, payload.description)


@router.post("/move", response_model=MoveResponse, summary="Move an item one step up or down")
def move_item(
    payload: MoveRequest,
    owner_id: int = Depends(get_current_owner_id),
    service: OrderService = Depends(get_order_service),
):
    """
    Swap the item with its neighbour.

    409 when the item is already first (up) or last (down).
    """
    result = service.move(owner_id, payload.id, payload.direction)
    return MoveResponse(id=result.id, direction=result.direction, position=result.position)


@router.get("/{item_id}", response_model=ItemRead, summary="Get item")
def get_item(
    item_id: int,
    owner_id: int = Depends(get_current_owner_id),
    service: ItemService = Depends(get_item_service),
):
    return service.get(owner_id, item_id)


@router.put("/{item_id}", response_model=ItemRead, summary="Edit item title and description")
def update_item(
    item_id: int,
    payload: ItemUpdate,
    owner_id: int = Depends(get_current_owner_id),
    service: ItemService = Depends(get_item_service),
):
    return service.update(owner_id, item_id, payload.title, payload.description)


@router.post(
    "/{item_id}/finished",
    response_model=ItemFinishedResponse,
    summary="Toggle item completion",
)
def toggle_item_finished(
    item_id: int,
    owner_id: int = Depends(get_current_owner_id),
    service: ItemService = Depends(get_item_service),
):
    return ItemFinishedResponse(id=item_id, is_finished=service.toggle_finished(owner_id, item_id))


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete item",
)
def delete_item(
    item_id: int,
    owner_id: int = Depends(get_current_owner_id),
    service: ItemService = Depends(get_item_service),
):
    service.delete(owner_id, item_id)
