from __future__ import annotations

from typing import Any, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class APIError(Exception):
    """Error surfaced to the client as ``{"error": ..., "details": ...}``."""

    def __init__(self, status_code: int, error: str, details: Optional[Any] = None) -> None:
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details


def _error_body(error: str, details: Optional[Any]) -> dict:
    return {"error": error, "details": details}


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.error, exc.details))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        msg = err.get("msg", "invalid value")
        problems.append(f"{loc}: {msg}" if loc else msg)
    return JSONResponse(
        status_code=400,
        content=_error_body("Invalid request body", "; ".join(problems)),
    )
