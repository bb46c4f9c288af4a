# File: app/services/roadmap_service.py

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import Conflict, NotFound, ValidationFailed
from app.db.utils import atomic
from app.models.item import Item
from app.models.roadmap import Roadmap
from app.repositories.item import ItemRepository
from app.repositories.roadmap import RoadmapRepository
from app.services.locks import RoadmapLocks

logger = logging.getLogger(__name__)


class RoadmapService:
    def __init__(
        self,
        session: Session,
        roadmap_repo: RoadmapRepository,
        item_repo: ItemRepository,
        locks: RoadmapLocks,
    ):
        self._session = session
        self._roadmap_repo = roadmap_repo
        self._item_repo = item_repo
        self._locks = locks

    def list_for_owner(self, owner_id: int) -> list[tuple[Roadmap, int]]:
        return self._roadmap_repo.list_by_owner(owner_id)

    def get(self, owner_id: int, roadmap_id: int) -> Roadmap:
        roadmap = self._roadmap_repo.get_by_id(owner_id, roadmap_id)
        if roadmap is None:
            raise NotFound("Roadmap not found.")
        return roadmap

    def get_by_slug(self, owner_id: int, slug: str) -> Roadmap:
        roadmap = self._roadmap_repo.get_by_slug(owner_id, slug)
        if roadmap is None:
            raise NotFound("Roadmap not found.")
        return roadmap

    def items(self, owner_id: int, roadmap: Roadmap) -> Sequence[Item]:
        return self._item_repo.list_by_roadmap(owner_id, roadmap.id)

    def create(self, owner_id: int, name: str, category: str, description: str | None = None) -> Roadmap:
        """
        Create a roadmap with a slug unique for this owner. A concurrent
        insert of the same slug surfaces as Conflict.
        """
        name, category = name.strip(), category.strip()
        if not name or not category:
            raise ValidationFailed("Roadmap name and category are required.")

        try:
            with atomic(self._session):
                roadmap = self._roadmap_repo.create(owner_id, name, category, description)
        except IntegrityError as exc:
            logger.info("Slug collision creating roadmap %r for owner %s", name, owner_id)
            raise Conflict("A roadmap with this name already exists.") from exc

        logger.info("Created roadmap %s (%s) for owner %s", roadmap.id, roadmap.slug, owner_id)
        return roadmap

    def update(self, owner_id: int, roadmap_id: int, fields: dict[str, Any]) -> Roadmap:
        for key in ("name", "category"):
            if key in fields:
                value = (fields[key] or "").strip()
                if not value:
                    raise ValidationFailed(f"Roadmap {key} cannot be empty.")
                fields = {**fields, key: value}

        with atomic(self._session):
            if not self._roadmap_repo.update(owner_id, roadmap_id, fields):
                raise NotFound("Roadmap not found.")
        return self.get(owner_id, roadmap_id)

    def delete(self, owner_id: int, roadmap_id: int) -> None:
        with self._locks.hold(owner_id, roadmap_id), atomic(self._session):
            if not self._roadmap_repo.delete(owner_id, roadmap_id):
                raise NotFound("Roadmap not found.")

        logger.info("Deleted roadmap %s for owner %s", roadmap_id, owner_id)
