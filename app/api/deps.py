# File: app/api/deps.py

from typing import Optional

from fastapi import Cookie, Depends, Header, Request
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.repositories.item import ItemRepository
from app.repositories.roadmap import RoadmapRepository
from app.services.auth_service import resolve_owner
from app.services.item_service import ItemService
from app.services.locks import RoadmapLocks
from app.services.order_service import OrderService
from app.services.roadmap_service import RoadmapService


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    return None


def get_current_owner_id(
    request: Request,
    db: Session = Depends(get_db),
    session_cookie: Optional[str] = Cookie(default=None, alias=settings.session_cookie_name),
    authorization: Optional[str] = Header(default=None),
) -> int:
    """
    FastAPI dependency resolving the caller to a user id.

    The session cookie is preferred; an ``Authorization: Bearer`` header
    carrying the same token is accepted for non-browser clients.
    """
    token = session_cookie or _bearer_token(authorization)
    return resolve_owner(db, token, endpoint=request.url.path)


def get_locks(request: Request) -> RoadmapLocks:
    return request.app.state.roadmap_locks


def get_item_service(
    db: Session = Depends(get_db),
    locks: RoadmapLocks = Depends(get_locks),
) -> ItemService:
    return ItemService(db, ItemRepository(db), RoadmapRepository(db), locks)


def get_order_service(
    db: Session = Depends(get_db),
    locks: RoadmapLocks = Depends(get_locks),
) -> OrderService:
    return OrderService(db, ItemRepository(db), RoadmapRepository(db), locks)


def get_roadmap_service(
    db: Session = Depends(get_db),
    locks: RoadmapLocks = Depends(get_locks),
) -> RoadmapService:
    return RoadmapService(db, RoadmapRepository(db), ItemRepository(db), locks)
