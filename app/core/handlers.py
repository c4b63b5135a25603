# app/core/handlers.py
import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import BaseAPIException
from app.core.responses import error_response

logger = logging.getLogger(__name__)

REQUIRED_ERROR_TYPES = {"missing", "required"}


def validation_messages(errors: List[Dict[str, Any]]) -> str:
    """
    Turn pydantic/FastAPI errors into one sentence per failing field,
    joined by ", ".
    """
    # A bad path id is reported on its own, before anything about the body
    if any(err["loc"][0] == "path" for err in errors):
        return "invalid id: must be an integer"

    messages = []
    for err in errors:
        loc = tuple(err["loc"])
        if err["type"] == "json_invalid":
            detail = (err.get("ctx") or {}).get("error", err["msg"])
            return f"invalid JSON body: {detail}"
        if loc == ("body",):
            if err["type"] in REQUIRED_ERROR_TYPES:
                return "request body is empty"
            return "request body must be a JSON object"

        field = ".".join(str(x) for x in loc if x != "body")
        if err["type"] in REQUIRED_ERROR_TYPES:
            messages.append(f"field {field} is required")
        else:
            messages.append(f"field {field} is invalid")

    return ", ".join(messages)


# 1. Errors raised on purpose (bad request, not found, storage)
async def custom_api_exception_handler(request: Request, exc: BaseAPIException):
    if exc.status_code >= 500:
        logger.error(
            "request failed",
            extra={"path": request.url.path, "error": exc.message},
        )
    return error_response(exc.status_code, exc.message)

# 2. Body / path parameters that do not fit the schema
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        validation_messages(exc.errors()),
    )

# 3. Standard HTTP errors (unknown URL, method not allowed)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))

# 4. Anything else
async def general_exception_handler(request: Request, exc: Exception):
    logger.critical(f"Unhandled Exception: {exc}", exc_info=True)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAPIException, custom_api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
