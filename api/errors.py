"""Error rendering: every failure leaves the API as ``{"error": ...}``."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=400, detail=message)


def not_found(message: str = "session not found") -> HTTPException:
    return HTTPException(status_code=404, detail=message)


def internal_error(message: str, exc: Exception) -> HTTPException:
    logger.exception(message)
    return HTTPException(status_code=500, detail={"error": message, "details": str(exc)})


def _body(detail: Any) -> dict:
    if isinstance(detail, dict) and "error" in detail:
        return detail
    return {"error": detail}


async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=_body(exc.detail), headers=getattr(exc, "headers", None))


async def _validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', 'invalid')}" for err in exc.errors()
    )
    return JSONResponse(status_code=400, content={"error": "invalid request body", "details": problems})


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)


__all__ = ["bad_request", "install_error_handlers", "internal_error", "not_found"]
