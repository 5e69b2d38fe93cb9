"""Validation Layer: turns Pydantic error lists into ordered field-level errors.

Invariants:
    - PURE: no persistence, no domain errors raised from validate_payload
    - One FieldError per violated rule, in the order Pydantic reports them
      (schema-declaration order, list elements by index)
    - Field paths are dotted client-facing names ("exercises.0.series");
      the request source prefix (body/query/path) is dropped; path
      parameters are camelCased like body fields; an empty path becomes "body"
    - Messages resolved by (path pattern, error type), then by error type,
      then fall back to Pydantic's own message

Design Decisions:
    - Path patterns replace list indices with "*" so one table entry covers
      every element of a nested list
"""

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from pydantic import AnyUrl, BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from app.core.errors import FieldError
from app.core.validation_messages import FIELD_MESSAGES, TYPE_MESSAGES

ModelT = TypeVar("ModelT", bound=BaseModel)

REQUEST_SOURCES = frozenset({"body", "query", "path", "header", "cookie"})
ROOT_FIELD = "body"

_url_adapter = TypeAdapter(AnyUrl)


def check_url(value: str) -> str:
    """Field validator: value must parse as a URL. Returns the input unchanged."""
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError:
        raise PydanticCustomError(
            "url_invalid", "Value must be a valid URL",
        ) from None
    return value


def validate_payload(
    model: type[ModelT], data: Any,
) -> ModelT | list[FieldError]:
    """Validate raw input against a schema: model instance or error list."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        return field_errors(e.errors())


def field_errors(
    errors: Sequence[Mapping[str, Any]], strip_source: bool = False,
) -> list[FieldError]:
    """Translate Pydantic/FastAPI error dicts to FieldError list."""
    result = []
    for err in errors:
        loc = list(err.get("loc", ()))
        if strip_source and loc and loc[0] in REQUEST_SOURCES:
            source, loc = loc[0], loc[1:]
            if source == "path":
                loc = [to_camel(p) if isinstance(p, str) else p for p in loc]
        if err.get("type") == "json_invalid":
            loc = []
        field = ".".join(str(part) for part in loc) or ROOT_FIELD
        result.append(FieldError(field, _message_for(loc, err)))
    return result


def path_pattern(loc: Sequence[Any]) -> str:
    """("exercises", 0, "series") -> "exercises.*.series"."""
    return ".".join("*" if isinstance(p, int) else str(p) for p in loc)


def _message_for(loc: Sequence[Any], err: Mapping[str, Any]) -> str:
    error_type = err.get("type", "")
    specific = FIELD_MESSAGES.get(path_pattern(loc), {})
    if error_type in specific:
        return specific[error_type]
    template = TYPE_MESSAGES.get(error_type)
    if template and loc:
        try:
            return template.format(field=str(loc[-1]), **_ctx(err))
        except KeyError:
            pass  # ctx lacks a placeholder; use Pydantic's message
    return _strip_value_error_prefix(str(err.get("msg", "Invalid value")))


def _ctx(err: Mapping[str, Any]) -> dict:
    ctx = err.get("ctx") or {}
    return {k: _render(v) for k, v in ctx.items() if k != "field"}


def _render(value: Any) -> Any:
    # float bounds (gt=0 on a float field) arrive as 0.0
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _strip_value_error_prefix(msg: str) -> str:
    # model validators raise ValueError; Pydantic prefixes "Value error, "
    prefix = "Value error, "
    return msg[len(prefix):] if msg.startswith(prefix) else msg
