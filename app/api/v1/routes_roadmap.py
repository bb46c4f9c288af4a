# File: app/api/v1/routes_roadmap.py

from fastapi import APIRouter, Depends, status

from app.api.deps import get_current_owner_id, get_roadmap_service
from app.schemas.roadmap import (
    RoadmapCreate,
    RoadmapDetail,
    RoadmapListResponse,
    RoadmapRead,
    RoadmapSummary,
    RoadmapUpdate,
)
from app.services.roadmap_service import RoadmapService

router = APIRouter()


@router.get(
    "/",
    response_model=RoadmapListResponse,
    summary="List the caller's roadmaps",
)
def list_roadmaps(
    owner_id: int = Depends(get_current_owner_id),
    service: RoadmapService = Depends(get_roadmap_service),
):
    """
    Roadmaps sorted by category then name, each with its item count, plus
    the same list grouped by category for the sidebar.
    """
    roadmaps = [
        RoadmapSummary.model_validate(roadmap).model_copy(update={"item_count": count})
        for roadmap, count in service.list_for_owner(owner_id)
    ]

    categorized: dict[str, list[RoadmapSummary]] = {}
    for summary in roadmaps:
        categorized.setdefault(summary.category, []).append(summary)

    return RoadmapListResponse(roadmaps=roadmaps, categorized=categorized)


@router.post(
    "/",
    response_model=RoadmapRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create roadmap",
)
def create_roadmap(
    payload: RoadmapCreate,
    owner_id: int = Depends(get_current_owner_id),
    service: RoadmapService = Depends(get_roadmap_service),
):
    return service.create(owner_id, payload.name, payload.category, payload.description)


@router.get("/slug/{slug}", response_model=RoadmapDetail, summary="Roadmap and its items, by slug")
def get_roadmap_by_slug(
    slug: str,
    owner_id: int = Depends(get_current_owner_id),
    service: RoadmapService = Depends(get_roadmap_service),
):
    roadmap = service.get_by_slug(owner_id, slug)
    return RoadmapDetail(
        roadmap=RoadmapRead.model_validate(roadmap),
        items=service.items(owner_id, roadmap),
    )


@router.get("/{roadmap_id}", response_model=RoadmapDetail, summary="Roadmap and its items")
def get_roadmap(
    roadmap_id: int,
    owner_id: int = Depends(get_current_owner_id),
    service: RoadmapService = Depends(get_roadmap_service),
):
    roadmap = service.get(owner_id, roadmap_id)
    return RoadmapDetail(
        roadmap=RoadmapRead.model_validate(roadmap),
        items=service.items(owner_id, roadmap),
    )


@router.patch("/{roadmap_id}", response_model=RoadmapRead, summary="Update roadmap")
def update_roadmap(
    roadmap_id: int,
    payload: RoadmapUpdate,
    owner_id: int = Depends(get_current_owner_id),
    service: RoadmapService = Depends(get_roadmap_service),
):
    return service.update(owner_id, roadmap_id, payload.model_dump(exclude_unset=True))


@router.delete(
    "/{roadmap_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete roadmap and its items",
)
def delete_roadmap(
    roadmap_id: int,
    owner_id: int = Depends(get_current_owner_id),
    service: RoadmapService = Depends(get_roadmap_service),
):
    service.delete(owner_id, roadmap_id)
