import re
import uuid
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.db.utils import apply_dict_updates
from app.models.item import Item
from app.models.roadmap import Roadmap

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]+")

# Columns a caller may change after creation
_UPDATABLE_FIELDS = {"name", "category", "description"}


def slugify(name: str) -> str:
    """Collapse every run of non-alphanumeric characters to ``-`` and lowercase."""
    return _NON_ALNUM.sub("-", name).lower()


class RoadmapRepository:
    """
    Data access for roadmaps. Every query is scoped to ``owner_id``: a
    roadmap owned by someone else behaves exactly like a missing one.

    Nothing here commits; the calling service owns the transaction.
    """

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, owner_id: int, roadmap_id: int) -> Roadmap | None:
        stmt = select(Roadmap).where(Roadmap.id == roadmap_id, Roadmap.owner_id == owner_id)
        return self.session.scalars(stmt).one_or_none()

    def get_by_slug(self, owner_id: int, slug: str) -> Roadmap | None:
        stmt = select(Roadmap).where(Roadmap.slug == slug, Roadmap.owner_id == owner_id)
        return self.session.scalars(stmt).one_or_none()

    def lock(self, owner_id: int, roadmap_id: int) -> Roadmap | None:
        """
        Re-read the roadmap row with ``SELECT ... FOR UPDATE`` so writers on
        other connections queue behind us. Backends without row locks
        (SQLite) ignore the clause.
        """
        stmt = (
            select(Roadmap)
            .where(Roadmap.id == roadmap_id, Roadmap.owner_id == owner_id)
            .with_for_update()
        )
        return self.session.scalars(stmt).one_or_none()

    def slug_exists(self, owner_id: int, slug: str) -> bool:
        stmt = select(func.count()).select_from(Roadmap).where(Roadmap.owner_id == owner_id, Roadmap.slug == slug)
        return self.session.scalar(stmt) > 0

    def unique_slug(self, owner_id: int, name: str) -> str:
        slug = slugify(name)
        candidate = slug
        while self.slug_exists(owner_id, candidate):
            candidate = f"{slug}-{uuid.uuid4().hex[:13]}"
        return candidate

    def list_by_owner(self, owner_id: int) -> list[tuple[Roadmap, int]]:
        """
        All of an owner's roadmaps ordered by category, then name, each
        paired with its item count.
        """
        item_count = (
            select(func.count(Item.id))
            .where(Item.roadmap_id == Roadmap.id)
            .correlate(Roadmap)
            .scalar_subquery()
        )
        stmt = (
            select(Roadmap, item_count.label("item_count"))
            .where(Roadmap.owner_id == owner_id)
            .order_by(Roadmap.category, Roadmap.name, Roadmap.id)
        )
        return [(roadmap, count) for roadmap, count in self.session.execute(stmt).all()]

    def create(self, owner_id: int, name: str, category: str, description: str | None = None) -> Roadmap:
        roadmap = Roadmap(
            name=name,
            category=category,
            description=description or "",
            slug=self.unique_slug(owner_id, name),
            owner_id=owner_id,
        )
        self.session.add(roadmap)
        self.session.flush()
        return roadmap

    def update(self, owner_id: int, roadmap_id: int, fields: dict[str, Any]) -> bool:
        roadmap = self.get_by_id(owner_id, roadmap_id)
        if roadmap is None:
            return False

        allowed = {k: v for k, v in fields.items() if k in _UPDATABLE_FIELDS}
        apply_dict_updates(roadmap, allowed)
        self.session.flush()
        return True

    def delete(self, owner_id: int, roadmap_id: int) -> bool:
        """Items go with the roadmap through the foreign key cascade."""
        roadmap = self.get_by_id(owner_id, roadmap_id)
        if roadmap is None:
            return False

        self.session.delete(roadmap)
        self.session.flush()
        return True
