# File: app/schemas/roadmap.py

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from app.schemas.item import ItemRead


class RoadmapBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class RoadmapCreate(RoadmapBase):
    pass


class RoadmapUpdate(BaseModel):
    """Partial update; the slug is never regenerated."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None


class RoadmapRead(RoadmapBase):
    model_config = {"from_attributes": True}

    id: int
    slug: str
    owner_id: int
    created_at: datetime


class RoadmapSummary(RoadmapRead):
    item_count: int = 0


class RoadmapListResponse(BaseModel):
    roadmaps: List[RoadmapSummary]
    categorized: Dict[str, List[RoadmapSummary]]


class RoadmapDetail(BaseModel):
    roadmap: RoadmapRead
    items: List[ItemRead]
