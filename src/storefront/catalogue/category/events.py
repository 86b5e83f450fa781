"""Domain events for the Category aggregate."""

from protean.fields import Boolean, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Category")
class CategoryCreated:
    """A new category was added to the catalogue."""

    category_id = Identifier(required=True)
    name = String(required=True)
    slug = String(required=True)
    position = Integer(required=True)


@storefront.event(part_of="Category")
class CategoryDetailsUpdated:
    """A category's name or description changed."""

    category_id = Identifier(required=True)
    name = String(required=True)
    slug = String(required=True)


@storefront.event(part_of="Category")
class CategoryRepositioned:
    """A category moved to a new position in the display order."""

    category_id = Identifier(required=True)
    previous_position = Integer(required=True)
    new_position = Integer(required=True)


@storefront.event(part_of="Category")
class CategoryActivationChanged:
    """A category was shown or hidden on the storefront."""

    category_id = Identifier(required=True)
    active = Boolean(required=True)
