from typing import Dict

from fastapi import APIRouter, Request, Response
from starlette.datastructures import QueryParams

from app.api.dispatch import handle_query
from app.core.context import RequestContext

router = APIRouter()


def health(ctx: RequestContext, params: Dict[str, str], query: QueryParams) -> Dict[str, str]:
    return {"Status": "OK"}


@router.get("/health")
async def health_check(request: Request) -> Response:
    return await handle_query(request, health)
