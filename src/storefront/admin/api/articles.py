"""Back-office endpoints for blog articles."""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.admin.api.schemas import CreateArticleRequest, StatusResponse, UpdateArticleRequest
from storefront.content.api.serializers import article_data
from storefront.content.article.article import Article
from storefront.content.article.authoring import CreateArticle, DeleteArticle, UpdateArticle
from storefront.identity.ability import Ability
from storefront.shared.pagination import paginate
from storefront.web.dependencies import admin_ability

router = APIRouter(prefix="/articles", tags=["admin: articles"])

ARTICLES_PER_PAGE = 25


def _article(article_id: str) -> Article:
    return current_domain.repository_for(Article).get(article_id)


@router.get("")
async def list_articles(page: int = Query(1, ge=1), ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("read", "Article")
    listing = paginate(current_domain.repository_for(Article).everything(), page, ARTICLES_PER_PAGE)
    return {
        "articles": [article_data(a, with_content=False) for a in listing.items],
        "pagination": listing.to_dict(),
    }


@router.post("", status_code=201)
async def create_article(body: CreateArticleRequest, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("create", "Article")
    command = CreateArticle(author_id=ability.actor.user_id, **body.model_dump())
    article_id = current_domain.process(command, asynchronous=False)
    return {"article_id": article_id, "article": article_data(_article(article_id))}


@router.get("/{article_id}")
async def show_article(article_id: str, ability: Ability = Depends(admin_ability)) -> dict:
    article = _article(article_id)
    ability.authorize("read", "Article", article)
    return {"article": article_data(article)}


@router.patch("/{article_id}")
async def update_article(article_id: str, body: UpdateArticleRequest, ability: Ability = Depends(admin_ability)) -> dict:
    ability.authorize("update", "Article", _article(article_id))
    current_domain.process(UpdateArticle(article_id=article_id, **body.model_dump()), asynchronous=False)
    return {"article": article_data(_article(article_id))}


@router.delete("/{article_id}", response_model=StatusResponse)
async def delete_article(article_id: str, ability: Ability = Depends(admin_ability)) -> StatusResponse:
    ability.authorize("destroy", "Article", _article(article_id))
    current_domain.process(DeleteArticle(article_id=article_id), asynchronous=False)
    return StatusResponse(message="Article was successfully deleted.")
