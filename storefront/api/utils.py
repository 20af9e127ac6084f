from __future__ import annotations

import functools
import logging
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..exceptions import EntityNotFoundError
from ..schemas.envelope import error_response
from .routing import Handler, RequestContext

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_model(model: Type[ModelT], context: RequestContext) -> ModelT:
    return model.model_validate(context.json)


def _validation_message(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg')}" if location else str(first.get("msg"))


def domain_errors(handler: Handler) -> Handler:
    """Turn validation and not-found failures into ``{success: false, message}``."""

    @functools.wraps(handler)
    async def wrapper(context: RequestContext) -> Any:
        try:
            return await handler(context)
        except ValidationError as exc:
            return error_response(_validation_message(exc))
        except EntityNotFoundError as exc:
            return error_response(exc.message)
        except ValueError as exc:
            return error_response(str(exc))

    return wrapper


def found_or_error(record: Any, message: str) -> Any:
    if record is None:
        return error_response(message)
    return record


__all__ = ["parse_model", "domain_errors", "found_or_error"]
