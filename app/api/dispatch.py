"""
Generic request dispatch.

Endpoints hand the incoming Request and a plain handler function to
handle_query (path + query parameters) or handle_mutation (path parameters +
raw body). The handler runs in the thread pool while the event loop watches
for the client going away:

    Received -> Dispatched -> Cancelled | HandlerError | HandlerAbsent | HandlerSuccess

- Cancelled: the request context is cancelled so the handler aborts at its
  next database call, and no meaningful response is written.
- HandlerError: HTTPException -> its status and detail, anything else -> 500.
- HandlerAbsent: a handler returning None -> 404.
- HandlerSuccess: 200 with the JSON encoded result.
"""

import asyncio
import functools
import logging
from typing import Any, Callable, Dict, Mapping

from fastapi import Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import QueryParams
from starlette.exceptions import HTTPException
from starlette.requests import ClientDisconnect

from app.core.config import settings
from app.core.context import RequestContext

logger = logging.getLogger("app.dispatch")

SERVER_ERROR_MESSAGE = "the server encountered a problem and could not process your request"
NOT_FOUND_MESSAGE = "the requested resource could not be found"

# nginx's "client closed request"; never reaches a client that is gone
CLIENT_CLOSED_REQUEST = 499

QueryHandler = Callable[[RequestContext, Dict[str, str], QueryParams], Any]
MutationHandler = Callable[[RequestContext, Dict[str, str], bytes], Any]


class _Cancelled:
    pass


CANCELLED = _Cancelled()


def error_response(status_code: int, message: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message})


async def _wait_for_disconnect(request: Request) -> None:
    while not await request.is_disconnected():
        await asyncio.sleep(settings.DISCONNECT_POLL_INTERVAL)


def _reap(task: "asyncio.Future") -> None:
    # Retrieve the outcome of abandoned work so it is logged, not lost
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("Abandoned handler finished with %r", exc)


async def _race(request: Request, ctx: RequestContext, call: Callable[[], Any]) -> Any:
    work = asyncio.ensure_future(run_in_threadpool(call))
    watcher = asyncio.ensure_future(_wait_for_disconnect(request))
    try:
        done, _ = await asyncio.wait({work, watcher}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        ctx.cancel()
        work.add_done_callback(_reap)
        raise
    finally:
        watcher.cancel()

    if work not in done:
        ctx.cancel()
        work.add_done_callback(_reap)
        return CANCELLED
    return work.result()


async def _dispatch(request: Request, ctx: RequestContext, call: Callable[[], Any]) -> Response:
    try:
        result = await _race(request, ctx, call)
    except HTTPException as exc:
        return error_response(exc.status_code, exc.detail)
    except Exception:
        logger.exception(f"Unhandled error serving {request.method} {request.url.path}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE)

    if result is CANCELLED:
        logger.info(f"Client went away during {request.method} {request.url.path}")
        return Response(status_code=CLIENT_CLOSED_REQUEST)

    if result is None:
        return error_response(status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE)

    try:
        content = jsonable_encoder(result, by_alias=True, exclude_none=True)
    except Exception:
        logger.exception("Failed to encode response")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE)
    return JSONResponse(status_code=status.HTTP_200_OK, content=content)


async def handle_query(request: Request, handler: QueryHandler) -> Response:
    ctx = RequestContext()
    params: Mapping[str, str] = dict(request.path_params)
    call = functools.partial(handler, ctx, params, request.query_params)
    return await _dispatch(request, ctx, call)


async def handle_mutation(request: Request, handler: MutationHandler) -> Response:
    try:
        body = await request.body()
    except ClientDisconnect:
        return error_response(status.HTTP_400_BAD_REQUEST, "Error reading request body")

    ctx = RequestContext()
    params: Mapping[str, str] = dict(request.path_params)
    call = functools.partial(handler, ctx, params, body)
    return await _dispatch(request, ctx, call)
