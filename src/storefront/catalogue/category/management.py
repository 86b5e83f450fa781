"""Category management: commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.domain import storefront
from storefront.shared.errors import IntegrityBlockedError
from storefront.shared.slug import generate_slug
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Category")
class CreateCategory:
    name = String(required=True, max_length=100)
    description = Text()
    position = Integer(min_value=0)
    active = Boolean(default=True)


@storefront.command(part_of="Category")
class UpdateCategory:
    category_id = Identifier(required=True)
    name = String(max_length=100)
    description = Text()
    position = Integer(min_value=0)
    active = Boolean()


@storefront.command(part_of="Category")
class ToggleCategoryActive:
    category_id = Identifier(required=True)


@storefront.command(part_of="Category")
class DeleteCategory:
    category_id = Identifier(required=True)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)

        if repo.name_taken(command.name):
            raise ValidationError({"name": ["has already been taken"]})

        # New categories go to the bottom of the list unless placed explicitly
        position = command.position if command.position is not None else repo.max_position() + 1

        category = Category.create(
            name=command.name,
            slug=generate_slug(command.name, repo.slug_exists),
            description=command.description,
            position=position,
            active=command.active if command.active is not None else True,
        )
        repo.add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        if command.name is not None and repo.name_taken(command.name, exclude_id=category.id):
            raise ValidationError({"name": ["has already been taken"]})

        category.update_details(name=command.name, description=command.description)
        if command.position is not None and command.position != category.position:
            category.move_to(command.position)
        if command.active is not None and command.active != category.active:
            category.set_active(command.active)
        repo.add(category)

    @handle(ToggleCategoryActive)
    def toggle_category_active(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.toggle_active()
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        from storefront.catalogue.product.product import Product

        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        if current_domain.repository_for(Product).count_in_category(category.id):
            raise IntegrityBlockedError(
                {"category": ["Cannot delete category with products. Please move or delete products first."]}
            )

        repo.remove(category)
        logger.info("category_deleted", category_id=str(category.id), slug=category.slug)
