"""Category ordering: move up, move down and bulk reorder.

A move swaps positions with the adjacent category. Both categories are read and
written inside the same handler, so the swap commits or fails as one unit of
work.
"""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.domain import storefront


@storefront.command(part_of="Category")
class MoveCategoryUp:
    category_id = Identifier(required=True)


@storefront.command(part_of="Category")
class MoveCategoryDown:
    category_id = Identifier(required=True)


@storefront.command(part_of="Category")
class ReorderCategories:
    category_ids = Text(required=True)  # JSON array of ids, in display order


def _swap(repo, category, neighbour):
    if neighbour is None:
        return

    original_position = category.position
    category.move_to(neighbour.position)
    neighbour.move_to(original_position)

    repo.add(category)
    repo.add(neighbour)


@storefront.command_handler(part_of=Category)
class PositionCategoryHandler:
    @handle(MoveCategoryUp)
    def move_up(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        _swap(repo, category, repo.previous_of(category))

    @handle(MoveCategoryDown)
    def move_down(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        _swap(repo, category, repo.next_of(category))

    @handle(ReorderCategories)
    def reorder(self, command):
        try:
            category_ids = json.loads(command.category_ids)
        except (json.JSONDecodeError, TypeError):
            raise ValidationError({"category_ids": ["must be a JSON array of category ids"]}) from None

        if not isinstance(category_ids, list):
            raise ValidationError({"category_ids": ["must be a JSON array of category ids"]})

        repo = current_domain.repository_for(Category)
        for index, category_id in enumerate(category_ids):
            try:
                category = repo.get(category_id)
            except ObjectNotFoundError:
                # Unknown ids are skipped; the rest still receive their slots
                continue
            if category.position != index + 1:
                category.move_to(index + 1)
                repo.add(category)
