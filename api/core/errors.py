"""
Error taxonomy and its HTTP mapping.

- ConfigError: startup only, the process exits before serving.
- request validation: 400 `{"message": ...}`, nothing reaches the store.
- RecordNotFoundError: 404 `{"message": "Data not found"}`.
- store failures: 500 `{"error": <driver message>}`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import asyncpg
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Data not found"

# Everything the data layer can raise once a statement has been issued.
STORE_ERRORS: tuple[type[BaseException], ...] = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


class ConfigError(RuntimeError):
    pass


class RecordNotFoundError(LookupError):
    def __init__(self, key: Any = None) -> None:
        super().__init__(NOT_FOUND_MESSAGE)
        self.key = key


def _describe_location(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc[1:]) or str(loc[0])


def validation_message(errors: list[dict[str, Any]]) -> str:
    """
    Turn pydantic/FastAPI validation errors into one client-facing line.
    """
    for err in errors:
        loc = tuple(err.get("loc") or ())
        if len(loc) >= 2 and loc[0] == "path":
            return f"Invalid {loc[1]}: {err.get('input')}"

    details = "; ".join(
        f"{_describe_location(tuple(err.get('loc') or ('body',)))}: {err.get('msg', 'invalid value')}"
        for err in errors
    )
    return f"Failed to bind JSON: {details}"


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = validation_message(list(exc.errors()))
    logger.info("bad_request method=%s path=%s detail=%s", request.method, request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})


async def _not_found_handler(request: Request, exc: RecordNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": NOT_FOUND_MESSAGE})


async def _store_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "store_error method=%s path=%s error=%s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc) or exc.__class__.__name__},
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(RecordNotFoundError, _not_found_handler)
    for exc_type in STORE_ERRORS:
        app.add_exception_handler(exc_type, _store_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
