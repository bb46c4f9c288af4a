# File: app/schemas/item.py

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"


class ItemBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""


class ItemCreate(ItemBase):
    roadmap_id: int


class ItemUpdate(ItemBase):
    pass


class ItemRead(ItemBase):
    model_config = {"from_attributes": True}

    id: int
    position: int
    is_finished: bool
    owner_id: int
    roadmap_id: int
    created_at: datetime
    modified_at: Optional[datetime] = None


class ItemFinishedResponse(BaseModel):
    id: int
    is_finished: bool


class MoveRequest(BaseModel):
    id: int
    direction: Direction


class MoveResponse(BaseModel):
    id: int
    direction: Direction
    position: int
