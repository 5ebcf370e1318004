"""Shared Field Types — lenient identifiers and body parsing for requests.

Invariants:
    - LooseText never fails validation: strings pass through, None stays None,
      any other JSON value becomes its JSON text (true → "true", 42 → "42")
    - model_or_empty() turns any JSON value into a model: objects are validated,
      every other value (string, number, null) yields a model with no fields set
    - Field errors surface as RequestValidationError, never as a raw pydantic error
"""

import json
from typing import Annotated, Any, TypeVar

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, BeforeValidator, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def as_text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value)


LooseText = Annotated[str | None, BeforeValidator(as_text)]


def model_or_empty(model: type[ModelT], value: Any) -> ModelT:
    if not isinstance(value, dict):
        return model()
    try:
        return model.model_validate(value)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False), body=value) from e
