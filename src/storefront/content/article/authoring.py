"""Article authoring: commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.content.article.article import EDITABLE_FIELDS, Article
from storefront.domain import storefront
from storefront.shared.slug import generate_slug
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Article")
class CreateArticle:
    title = String(required=True, max_length=255, sanitize=False)
    content = Text(required=True, sanitize=False)
    author_id = Identifier(required=True)
    slug = String(max_length=255)
    excerpt = String(max_length=500, sanitize=False)
    published = Boolean(default=False)
    featured = Boolean(default=False)
    category = String(max_length=100)
    tags = Text()
    meta_title = String(max_length=60, sanitize=False)
    meta_description = String(max_length=160, sanitize=False)


@storefront.command(part_of="Article")
class UpdateArticle:
    article_id = Identifier(required=True)
    title = String(max_length=255, sanitize=False)
    content = Text(sanitize=False)
    excerpt = String(max_length=500, sanitize=False)
    published = Boolean()
    featured = Boolean()
    category = String(max_length=100)
    tags = Text()
    meta_title = String(max_length=60, sanitize=False)
    meta_description = String(max_length=160, sanitize=False)


@storefront.command(part_of="Article")
class SetArticlePublished:
    article_id = Identifier(required=True)
    published = Boolean(required=True)


@storefront.command(part_of="Article")
class DeleteArticle:
    article_id = Identifier(required=True)


@storefront.command_handler(part_of=Article)
class ArticleAuthoringHandler:
    @handle(CreateArticle)
    def create_article(self, command):
        repo = current_domain.repository_for(Article)
        slug = generate_slug(command.slug or command.title, repo.slug_exists)

        attributes = {
            name: getattr(command, name)
            for name in EDITABLE_FIELDS
            if name not in ("title", "content") and getattr(command, name) is not None
        }
        article = Article.create(
            title=command.title,
            content=command.content,
            slug=slug,
            author_id=command.author_id,
            published=bool(command.published),
            **attributes,
        )
        repo.add(article)
        logger.info("article_created", article_id=str(article.id), slug=slug)
        return str(article.id)

    @handle(UpdateArticle)
    def update_article(self, command):
        repo = current_domain.repository_for(Article)
        article = repo.get(command.article_id)

        changes = {name: getattr(command, name) for name in EDITABLE_FIELDS if getattr(command, name) is not None}
        if changes:
            article.revise(**changes)
        if command.published is not None:
            article.set_published(command.published)
        repo.add(article)

    @handle(SetArticlePublished)
    def set_published(self, command):
        repo = current_domain.repository_for(Article)
        article = repo.get(command.article_id)
        article.set_published(command.published)
        repo.add(article)

    @handle(DeleteArticle)
    def delete_article(self, command):
        repo = current_domain.repository_for(Article)
        repo.remove(repo.get(command.article_id))
        logger.info("article_deleted", article_id=command.article_id)
