from typing import Annotated, Type, TypeVar

from fastapi import Path, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from app.schemas.student import SQLITE_INT_MAX, SQLITE_INT_MIN
from app.services.student.storage import StudentStorage

ModelT = TypeVar("ModelT", bound=BaseModel)

# Path ids outside the range SQLite can bind are rejected like non-integers
StudentId = Annotated[int, Path(ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)]


def get_storage(request: Request) -> StudentStorage:
    """
    Dependency returning the student store the app was started with.
    """
    return request.app.state.storage


async def get_raw_body(request: Request) -> bytes:
    """
    Dependency returning the request body untouched.
    The body is decoded as JSON whatever Content-Type the client sent.
    """
    return await request.body()


def parse_body(model: Type[ModelT], body: bytes) -> ModelT:
    """
    Decode ``body`` as JSON into ``model``.

    Failures are raised as ``RequestValidationError`` with locations under
    ``body`` so they are reported like any other request validation error.
    """
    if not body.strip():
        raise RequestValidationError(
            [{"type": "missing", "loc": ("body",), "msg": "Field required", "input": None}]
        )
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        errors = []
        for err in e.errors():
            errors.append({**err, "loc": ("body", *err["loc"])})
        raise RequestValidationError(errors) from e
