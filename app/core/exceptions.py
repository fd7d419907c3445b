from fastapi import HTTPException, status


class RequestCancelled(Exception):
    """Raised inside a unit of work once the originating request is cancelled."""


def bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def not_found(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)
