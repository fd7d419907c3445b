from typing import Dict, List

from fastapi import APIRouter, Request, Response
from sqlalchemy.orm import Session
from starlette.datastructures import QueryParams

from app.api.dispatch import handle_mutation, handle_query
from app.api.params import parse_body, parse_id
from app.core.context import RequestContext
from app.core.exceptions import bad_request, not_found
from app.db.transaction import TxOptions, run_in_transaction
from app.modules.posts.schemas.post import Post as PostSchema, PostInput
from app.modules.posts.services.post import post_store
from app.modules.user_management.services.user import user_store

router = APIRouter()

POST_NOT_FOUND = "post does not exist"


def _check_owner(db: Session, post_in: PostInput) -> None:
    # Reported as a bad request rather than left to the foreign key constraint
    if not user_store.exists(db, str(post_in.user_id)):
        raise bad_request("user does not exist")


def posts_get_all(ctx: RequestContext, params: Dict[str, str], query: QueryParams) -> List[PostSchema]:
    return run_in_transaction(ctx, TxOptions(), post_store.get_all)


def posts_get(ctx: RequestContext, params: Dict[str, str], query: QueryParams) -> PostSchema:
    post_id = parse_id(params)

    def work(db: Session) -> PostSchema:
        post = post_store.get(db, post_id)
        if post is None:
            raise not_found(POST_NOT_FOUND)
        return post

    return run_in_transaction(ctx, TxOptions(), work)


def posts_create(ctx: RequestContext, params: Dict[str, str], body: bytes) -> PostSchema:
    post_in = parse_body(PostInput, body)

    def work(db: Session) -> PostSchema:
        _check_owner(db, post_in)
        return post_store.create(db, post_in)

    return run_in_transaction(ctx, TxOptions(), work)


def posts_update(ctx: RequestContext, params: Dict[str, str], body: bytes) -> PostSchema:
    post_in = parse_body(PostInput, body)
    post_id = parse_id(params)

    def work(db: Session) -> PostSchema:
        _check_owner(db, post_in)
        post = post_store.update(db, post_id, post_in)
        if post is None:
            raise not_found(POST_NOT_FOUND)
        return post

    return run_in_transaction(ctx, TxOptions(), work)


def posts_delete(ctx: RequestContext, params: Dict[str, str], query: QueryParams) -> PostSchema:
    post_id = parse_id(params)

    def work(db: Session) -> PostSchema:
        post = post_store.delete(db, post_id)
        if post is None:
            raise not_found(POST_NOT_FOUND)
        return post

    return run_in_transaction(ctx, TxOptions(), work)


@router.get("", response_model=List[PostSchema])
async def read_posts(request: Request) -> Response:
    """
    Retrieve all posts, newest first.
    """
    return await handle_query(request, posts_get_all)

@router.post("", response_model=PostSchema)
async def create_new_post(request: Request) -> Response:
    """
    Create new post. The referenced user must exist.
    """
    return await handle_mutation(request, posts_create)

@router.get("/{id}", response_model=PostSchema)
async def read_post_by_id(request: Request) -> Response:
    """
    Get post by ID.
    """
    return await handle_query(request, posts_get)

@router.put("/{id}", response_model=PostSchema)
async def update_post_by_id(request: Request) -> Response:
    """
    Replace a post's title, content and owner.
    """
    return await handle_mutation(request, posts_update)

@router.delete("/{id}", response_model=PostSchema)
async def delete_post_by_id(request: Request) -> Response:
    """
    Delete a post.
    """
    return await handle_query(request, posts_delete)
