from fastapi import APIRouter

from app.api.v1.routes_auth import router as auth_router
from app.api.v1.routes_item import router as item_router
from app.api.v1.routes_roadmap import router as roadmap_router


api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(roadmap_router, prefix="/roadmaps", tags=["roadmaps"])
api_router.include_router(item_router, prefix="/items", tags=["items"])
