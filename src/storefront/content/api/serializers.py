"""JSON shape of an article."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.identity.user.user import User


def author_name(article) -> str:
    try:
        return current_domain.repository_for(User).get(article.author_id).display_name()
    except ObjectNotFoundError:
        return "Unknown"


def article_data(article, with_content: bool = True) -> dict:
    data = {
        "id": str(article.id),
        "title": article.title,
        "slug": article.slug,
        "excerpt": article.excerpt,
        "published": article.published,
        "featured": article.featured,
        "author_id": str(article.author_id),
        "author_name": author_name(article),
        "category": article.category,
        "tags": article.tag_list(),
        "meta_title": article.meta_title,
        "meta_description": article.meta_description,
        "reading_time": article.reading_time(),
        "published_on": article.formatted_published_date(),
    }
    if with_content:
        data["content"] = article.content
    return data
