# File: app/services/item_service.py

"""
Item lifecycle on top of ItemRepository: ownership checks on the parent
roadmap, transactions, and the per-roadmap lock for writes that touch
positions (create appends at max+1, delete closes the gap).
"""

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.core.exceptions import NotFound, ValidationFailed
from app.db.utils import atomic
from app.models.item import Item
from app.repositories.item import ItemRepository
from app.repositories.roadmap import RoadmapRepository
from app.services.locks import RoadmapLocks

logger = logging.getLogger(__name__)


def _require_title(title: str) -> str:
    title = (title or "").strip()
    if not title:
        raise ValidationFailed("Item title is required.")
    return title


class ItemService:
    def __init__(
        self,
        session: Session,
        item_repo: ItemRepository,
        roadmap_repo: RoadmapRepository,
        locks: RoadmapLocks,
    ):
        self._session = session
        self._item_repo = item_repo
        self._roadmap_repo = roadmap_repo
        self._locks = locks

    def get(self, owner_id: int, item_id: int) -> Item:
        item = self._item_repo.get_by_id(owner_id, item_id)
        if item is None:
            raise NotFound("Item not found.")
        return item

    def list_for_owner(self, owner_id: int) -> Sequence[Item]:
        return self._item_repo.list_by_owner(owner_id)

    def create(self, owner_id: int, roadmap_id: int, title: str, description: str = "") -> Item:
        title = _require_title(title)
        with self._locks.hold(owner_id, roadmap_id), atomic(self._session):
            # The item inherits the roadmap's owner, so the roadmap must be ours.
            if self._roadmap_repo.lock(owner_id, roadmap_id) is None:
                raise NotFound("Roadmap not found.")
            item = self._item_repo.create(owner_id, roadmap_id, title, description)

        logger.info("Created item %s in roadmap %s at position %s", item.id, roadmap_id, item.position)
        return item

    def update(self, owner_id: int, item_id: int, title: str, description: str) -> Item:
        title = _require_title(title)
        with atomic(self._session):
            if not self._item_repo.update(owner_id, item_id, title, description):
                raise NotFound("Item not found.")
        return self.get(owner_id, item_id)

    def toggle_finished(self, owner_id: int, item_id: int) -> bool:
        with atomic(self._session):
            finished = self._item_repo.toggle_finished(owner_id, item_id)
            if finished is None:
                raise NotFound("Item not found.")
        return finished

    def delete(self, owner_id: int, item_id: int) -> None:
        item = self._item_repo.get_by_id(owner_id, item_id)
        if item is None:
            raise NotFound("Item not found.")
        roadmap_id = item.roadmap_id

        with self._locks.hold(owner_id, roadmap_id), atomic(self._session):
            self._session.expire_all()
            self._roadmap_repo.lock(owner_id, roadmap_id)
            if not self._item_repo.delete(owner_id, item_id):
                raise NotFound("Item not found.")

        logger.info("Deleted item %s from roadmap %s", item_id, roadmap_id)
