"""FastAPI endpoints for the storefront blog."""

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from storefront.content.api.serializers import article_data
from storefront.content.article.article import Article
from storefront.shared.pagination import paginate

router = APIRouter(prefix="/articles", tags=["articles"])

ARTICLES_PER_PAGE = 10


@router.get("")
async def list_articles(
    category: str | None = None,
    search: str | None = None,
    featured: bool = False,
    page: int = Query(1, ge=1),
) -> dict:
    articles = current_domain.repository_for(Article).published(category=category, search=search, featured_only=featured)
    listing = paginate(articles, page, ARTICLES_PER_PAGE)
    return {
        "articles": [article_data(a, with_content=False) for a in listing.items],
        "pagination": listing.to_dict(),
    }


@router.get("/{slug}")
async def show_article(slug: str) -> dict:
    article = current_domain.repository_for(Article).find_by_slug(slug, published_only=True)
    return {"article": article_data(article)}
