"""Category aggregate: a named, ordered shelf of products."""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Integer, String, Text

from storefront.catalogue.category.events import (
    CategoryActivationChanged,
    CategoryCreated,
    CategoryDetailsUpdated,
    CategoryRepositioned,
)
from storefront.domain import storefront
from storefront.shared.queries import exists, fetch_all, fetch_first


@storefront.aggregate
class Category:
    """A storefront category.

    The slug is derived from the name when the category is created and is not
    regenerated on rename, so existing links keep working. Categories are listed
    by ``position`` and then by name.
    """

    name = String(required=True, max_length=100, unique=True)
    description = Text()
    slug = String(required=True, max_length=120, unique=True)
    position = Integer(default=0, min_value=0)
    active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, name, slug, description=None, position=0, active=True):
        now = datetime.now(UTC)
        category = cls(
            name=name,
            slug=slug,
            description=description,
            position=position,
            active=active,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=name,
                slug=slug,
                position=position,
            )
        )
        return category

    def update_details(self, name=None, description=None):
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CategoryDetailsUpdated(
                category_id=self.id,
                name=self.name,
                slug=self.slug,
            )
        )

    def move_to(self, position):
        previous_position = self.position
        self.position = position
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CategoryRepositioned(
                category_id=self.id,
                previous_position=previous_position,
                new_position=position,
            )
        )

    def set_active(self, active):
        self.active = bool(active)
        self.updated_at = datetime.now(UTC)

        self.raise_(CategoryActivationChanged(category_id=self.id, active=self.active))

    def toggle_active(self):
        self.set_active(not self.active)


@storefront.repository(part_of=Category)
class CategoryRepository:
    def find_by_slug(self, slug: str, active_only: bool = False) -> Category:
        filters = {"slug": slug}
        if active_only:
            filters["active"] = True
        matches = fetch_all(self._dao, **filters)
        if not matches:
            raise ObjectNotFoundError(f"Category with slug `{slug}` does not exist.")
        return matches[0]

    def slug_exists(self, slug: str) -> bool:
        return exists(self._dao, slug=slug)

    def name_taken(self, name: str, exclude_id=None) -> bool:
        return any(str(c.id) != str(exclude_id) for c in fetch_all(self._dao, name=name))

    def ordered(self, active_only: bool = False) -> list[Category]:
        categories = fetch_all(self._dao, active=True) if active_only else fetch_all(self._dao)
        return sorted(categories, key=lambda c: (c.position or 0, c.name))

    def max_position(self) -> int:
        last = fetch_first(self._dao, "-position")
        return (last.position or 0) if last else 0

    def previous_of(self, category: Category) -> Category | None:
        """The category sitting immediately above ``category`` in display order."""
        return fetch_first(self._dao, "-position", position__lt=category.position or 0)

    def next_of(self, category: Category) -> Category | None:
        """The category sitting immediately below ``category`` in display order."""
        return fetch_first(self._dao, "position", position__gt=category.position or 0)

    def remove(self, category: Category) -> None:
        self._dao.delete(category)
