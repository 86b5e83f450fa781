"""Article aggregate: editorial content shown on the storefront blog.

Excerpt and meta fields fill themselves in when left blank:

    excerpt          = content without HTML, cut to 300 characters
    meta_title       = title, cut to 60 characters
    meta_description = excerpt, cut to 160 characters
"""

import math
from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Identifier, String, Text

from storefront.content.article.events import ArticleCreated, ArticlePublicationChanged, ArticleRevised
from storefront.domain import storefront
from storefront.shared.queries import fetch_all
from storefront.shared.text import strip_html, truncate

EXCERPT_LENGTH = 300
WORDS_PER_MINUTE = 200

EDITABLE_FIELDS = (
    "title",
    "content",
    "excerpt",
    "featured",
    "category",
    "tags",
    "meta_title",
    "meta_description",
)


@storefront.aggregate
class Article:
    # Authored markup is stored as written; excerpts and meta fields strip it
    title = String(required=True, max_length=255, sanitize=False)
    content = Text(required=True, sanitize=False)
    excerpt = String(max_length=500, sanitize=False)
    slug = String(required=True, max_length=255, unique=True)
    published = Boolean(default=False)
    featured = Boolean(default=False)
    author_id = Identifier(required=True)
    category = String(max_length=100)
    tags = Text()
    meta_title = String(max_length=60, sanitize=False)
    meta_description = String(max_length=160, sanitize=False)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, title, content, slug, author_id, **attributes):
        now = datetime.now(UTC)
        article = cls(
            title=title,
            content=content,
            slug=slug,
            author_id=author_id,
            created_at=now,
            updated_at=now,
            **attributes,
        )
        article._derive_summaries()
        article.raise_(ArticleCreated(article_id=article.id, slug=article.slug, author_id=author_id))
        return article

    def revise(self, **changes):
        for name, value in changes.items():
            setattr(self, name, value)
        self._derive_summaries()
        self.updated_at = datetime.now(UTC)

        self.raise_(ArticleRevised(article_id=self.id))

    def set_published(self, published: bool):
        if self.published == published:
            return
        self.published = published
        self.updated_at = datetime.now(UTC)

        self.raise_(ArticlePublicationChanged(article_id=self.id, published=published))

    def _derive_summaries(self):
        if not self.excerpt and self.content:
            self.excerpt = truncate(strip_html(self.content), EXCERPT_LENGTH)
        if not self.meta_title and self.title:
            self.meta_title = truncate(self.title, 60)
        if not self.meta_description and self.excerpt:
            self.meta_description = truncate(self.excerpt, 160)

    def word_count(self):
        return len((self.content or "").split())

    def reading_time(self):
        """Minutes to read at 200 words per minute, rounded up."""
        return math.ceil(self.word_count() / WORDS_PER_MINUTE)

    def tag_list(self):
        if not self.tags:
            return []
        return [tag.strip() for tag in self.tags.split(",") if tag.strip()]

    def formatted_published_date(self):
        return self.created_at.strftime("%B %d, %Y") if self.created_at else ""


def _newest_first(articles):
    return sorted(articles, key=lambda a: a.created_at.timestamp() if a.created_at else 0, reverse=True)


@storefront.repository(part_of=Article)
class ArticleRepository:
    def find_by_slug(self, slug, published_only: bool = False) -> Article:
        filters = {"slug": slug}
        if published_only:
            filters["published"] = True
        articles = fetch_all(self._dao, **filters)
        if not articles:
            raise ObjectNotFoundError(f"Article with slug {slug} does not exist")
        return articles[0]

    def slug_exists(self, slug, exclude_id=None) -> bool:
        return any(str(a.id) != str(exclude_id) for a in fetch_all(self._dao, slug=slug))

    def everything(self) -> list[Article]:
        return _newest_first(fetch_all(self._dao))

    def published(self, category=None, search=None, featured_only=False) -> list[Article]:
        articles = fetch_all(self._dao, published=True)
        if category:
            articles = [a for a in articles if a.category == category]
        if featured_only:
            articles = [a for a in articles if a.featured]
        if search:
            needle = search.lower()
            articles = [a for a in articles if needle in a.title.lower() or needle in a.content.lower()]
        return _newest_first(articles)

    def remove(self, article: Article) -> None:
        self._dao.delete(article)
