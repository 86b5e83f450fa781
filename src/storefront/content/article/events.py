"""Domain events for the Article aggregate."""

from protean.fields import Boolean, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Article")
class ArticleCreated:
    article_id = Identifier(required=True)
    slug = String(required=True)
    author_id = Identifier(required=True)


@storefront.event(part_of="Article")
class ArticleRevised:
    article_id = Identifier(required=True)


@storefront.event(part_of="Article")
class ArticlePublicationChanged:
    """An article went live on the storefront or was taken down."""

    article_id = Identifier(required=True)
    published = Boolean(required=True)
