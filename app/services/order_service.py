# File: app/services/order_service.py

"""
Item ordering.

Positions inside a roadmap are the dense sequence 1..N. Moving an item one
step swaps its position with the neighbour occupying the target slot, so a
move writes exactly two rows and the sequence stays dense.

The whole read-then-write runs under the roadmap's lock and inside one
transaction: either both positions change or neither does.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.core.exceptions import AlreadyFirst, AlreadyLast, InternalInconsistency, NotFound
from app.db.utils import atomic
from app.repositories.item import ItemRepository
from app.repositories.roadmap import RoadmapRepository
from app.schemas.item import Direction
from app.services.locks import RoadmapLocks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveResult:
    id: int
    direction: Direction
    position: int


class OrderService:
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

    def move(self, owner_id: int, item_id: int, direction: Direction) -> MoveResult:
        """
        Move an item one step up or down within its roadmap.

        Raises:
            NotFound: the item does not exist or belongs to someone else.
            AlreadyFirst / AlreadyLast: the item is already at that end.
            InternalInconsistency: no item occupies the neighbouring slot.
        """
        direction = Direction(direction)

        # Only to learn which roadmap to lock; re-read below once we hold it.
        item = self._item_repo.get_by_id(owner_id, item_id)
        if item is None:
            raise NotFound("Item not found.")
        roadmap_id = item.roadmap_id

        with self._locks.hold(owner_id, roadmap_id), atomic(self._session):
            self._session.expire_all()
            if self._roadmap_repo.lock(owner_id, roadmap_id) is None:
                raise NotFound("Item not found.")

            item = self._item_repo.get_by_id(owner_id, item_id)
            if item is None or item.roadmap_id != roadmap_id:
                raise NotFound("Item not found.")

            current = item.position
            min_position, max_position, count = self._item_repo.position_bounds(owner_id, roadmap_id)

            if direction is Direction.UP and current <= min_position:
                raise AlreadyFirst()
            if direction is Direction.DOWN and current >= max_position:
                raise AlreadyLast()

            target = current - 1 if direction is Direction.UP else current + 1

            occupant = self._item_repo.get_at_position(owner_id, roadmap_id, target)
            if occupant is None:
                logger.error(
                    "Position gap in roadmap %s (owner %s): nothing at %s; bounds=(%s, %s) count=%s",
                    roadmap_id,
                    owner_id,
                    target,
                    min_position,
                    max_position,
                    count,
                )
                raise InternalInconsistency()

            self._item_repo.set_position(occupant, current)
            self._item_repo.set_position(item, target)

        logger.debug("Moved item %s %s to position %s", item_id, direction.value, target)
        return MoveResult(id=item_id, direction=direction, position=target)
