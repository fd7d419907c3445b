from typing import Dict, List

from fastapi import APIRouter, Request, Response
from sqlalchemy.orm import Session
from starlette.datastructures import QueryParams

from app.api.dispatch import handle_mutation, handle_query
from app.api.params import parse_body, parse_id
from app.core.context import RequestContext
from app.core.exceptions import not_found
from app.db.transaction import TxOptions, run_in_transaction
from app.modules.posts.schemas.post import Post as PostSchema
from app.modules.posts.services.post import get_user_posts
from app.modules.user_management.schemas.user import User as UserSchema, UserInput
from app.modules.user_management.services.user import delete_user, user_store

router = APIRouter()

USER_NOT_FOUND = "user does not exist"


def users_get_all(ctx: RequestContext, params: Dict[str, str], query: QueryParams) -> List[UserSchema]:
    return run_in_transaction(ctx, TxOptions(), user_store.get_all)


def users_get(ctx: RequestContext, params: Dict[str, str], query: QueryParams) -> UserSchema:
    user_id = parse_id(params)

    def work(db: Session) -> UserSchema:
        user = user_store.get(db, user_id)
        if user is None:
            raise not_found(USER_NOT_FOUND)
        return user

    return run_in_transaction(ctx, TxOptions(), work)


def users_get_posts(ctx: RequestContext, params: Dict[str, str], query: QueryParams) -> List[PostSchema]:
    user_id = parse_id(params)

    def work(db: Session) -> List[PostSchema]:
        if not user_store.exists(db, user_id):
            raise not_found(USER_NOT_FOUND)
        return get_user_posts(db, user_id)

    return run_in_transaction(ctx, TxOptions(), work)


def users_create(ctx: RequestContext, params: Dict[str, str], body: bytes) -> UserSchema:
    user_in = parse_body(UserInput, body)
    return run_in_transaction(ctx, TxOptions(), lambda db: user_store.create(db, user_in))


def users_update(ctx: RequestContext, params: Dict[str, str], body: bytes) -> UserSchema:
    user_in = parse_body(UserInput, body)
    user_id = parse_id(params)

    def work(db: Session) -> UserSchema:
        user = user_store.update(db, user_id, user_in)
        if user is None:
            raise not_found(USER_NOT_FOUND)
        return user

    return run_in_transaction(ctx, TxOptions(), work)


def users_delete(ctx: RequestContext, params: Dict[str, str], query: QueryParams) -> UserSchema:
    user_id = parse_id(params)

    def work(db: Session) -> UserSchema:
        user = delete_user(db, user_id)
        if user is None:
            raise not_found(USER_NOT_FOUND)
        return user

    return run_in_transaction(ctx, TxOptions(), work)


@router.get("", response_model=List[UserSchema])
async def read_users(request: Request) -> Response:
    """
    Retrieve all users, newest first.
    """
    return await handle_query(request, users_get_all)

@router.post("", response_model=UserSchema)
async def create_user(request: Request) -> Response:
    """
    Create new user from a JSON body with name and email.
    """
    return await handle_mutation(request, users_create)

@router.get("/{id}", response_model=UserSchema)
async def read_user_by_id(request: Request) -> Response:
    """
    Get user by ID.
    """
    return await handle_query(request, users_get)

@router.get("/{id}/posts", response_model=List[PostSchema])
async def read_user_posts(request: Request) -> Response:
    """
    Get posts owned by a user, newest first.
    """
    return await handle_query(request, users_get_posts)

@router.put("/{id}", response_model=UserSchema)
async def update_user_by_id(request: Request) -> Response:
    """
    Replace a user's name and email.
    """
    return await handle_mutation(request, users_update)

@router.delete("/{id}", response_model=UserSchema)
async def delete_user_by_id(request: Request) -> Response:
    """
    Delete a user. Posts owned by the user are deleted with it.
    """
    return await handle_query(request, users_delete)
