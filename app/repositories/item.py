from collections.abc import Sequence
from datetime import datetime, timezone

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from app.models.item import Item


class ItemRepository:
    """
    Data access for roadmap items, always scoped to ``owner_id``.

    Writes that report "nothing matched" return False (or None) instead of
    raising; the caller decides what that means for the client. Nothing here
    commits.
    """

    def __init__(self, session: Session):
        self.session = session

    # --- 1. Reads ---

    def get_by_id(self, owner_id: int, item_id: int) -> Item | None:
        stmt = select(Item).where(Item.id == item_id, Item.owner_id == owner_id)
        return self.session.scalars(stmt).one_or_none()

    def list_by_roadmap(self, owner_id: int, roadmap_id: int) -> Sequence[Item]:
        stmt = (
            select(Item)
            .where(Item.roadmap_id == roadmap_id, Item.owner_id == owner_id)
            .order_by(Item.position, Item.id)
        )
        return self.session.scalars(stmt).all()

    def list_by_owner(self, owner_id: int) -> Sequence[Item]:
        stmt = select(Item).where(Item.owner_id == owner_id).order_by(Item.position, Item.id)
        return self.session.scalars(stmt).all()

    # --- 2. Position queries (used by the order service) ---

    def position_bounds(self, owner_id: int, roadmap_id: int) -> tuple[int | None, int | None, int]:
        """Return ``(min, max, count)`` of positions in a roadmap."""
        stmt = select(func.min(Item.position), func.max(Item.position), func.count(Item.id)).where(
            Item.roadmap_id == roadmap_id, Item.owner_id == owner_id
        )
        min_position, max_position, count = self.session.execute(stmt).one()
        return min_position, max_position, count

    def get_at_position(self, owner_id: int, roadmap_id: int, position: int) -> Item | None:
        stmt = select(Item).where(
            Item.roadmap_id == roadmap_id,
            Item.owner_id == owner_id,
            Item.position == position,
        )
        # More than one row here means the density invariant is already broken.
        return self.session.scalars(stmt).first()

    def next_position(self, owner_id: int, roadmap_id: int) -> int:
        _, max_position, _ = self.position_bounds(owner_id, roadmap_id)
        return 1 if max_position is None else max_position + 1

    # --- 3. Writes ---

    def create(self, owner_id: int, roadmap_id: int, title: str, description: str = "") -> Item:
        """
        Append an item at the end of its roadmap. The caller is responsible
        for having checked that ``roadmap_id`` belongs to ``owner_id``.
        """
        item = Item(
            title=title,
            description=description,
            position=self.next_position(owner_id, roadmap_id),
            owner_id=owner_id,
            roadmap_id=roadmap_id,
        )
        self.session.add(item)
        self.session.flush()
        return item

    def update(self, owner_id: int, item_id: int, title: str, description: str) -> bool:
        stmt = (
            update(Item)
            .where(Item.id == item_id, Item.owner_id == owner_id)
            .values(title=title, description=description, modified_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session="fetch")
        )
        return self.session.execute(stmt).rowcount > 0

    def toggle_finished(self, owner_id: int, item_id: int) -> bool | None:
        """Flip ``is_finished``; returns the new value, or None if no row matched."""
        item = self.get_by_id(owner_id, item_id)
        if item is None:
            return None

        item.is_finished = not item.is_finished
        self.session.flush()
        return item.is_finished

    def set_position(self, item: Item, position: int) -> None:
        item.position = position
        self.session.flush()

    def delete(self, owner_id: int, item_id: int) -> bool:
        """
        Delete an item and close the gap it leaves: every later sibling in
        the same roadmap moves up by one.
        """
        item = self.get_by_id(owner_id, item_id)
        if item is None:
            return False

        roadmap_id, position = item.roadmap_id, item.position
        self.session.delete(item)
        self.session.flush()

        stmt = (
            update(Item)
            .where(
                Item.roadmap_id == roadmap_id,
                Item.owner_id == owner_id,
                Item.position > position,
            )
            .values(position=Item.position - 1)
            .execution_options(synchronize_session="fetch")
        )
        self.session.execute(stmt)
        return True
