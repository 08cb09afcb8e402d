# ============================================================================
# REQUEST PARAMETERS
# ============================================================================
# STATUS: Core - Route parameter collection and validation
# PURPOSE: Merge query/form/JSON params and validate them against a schema
# ============================================================================
"""
Request Parameters

Before a handler runs:

1. Parameters are collected: query string first, then the body (JSON or
   form), later sources overriding earlier ones. String values that are not
   valid UTF-8 are replaced by "".
2. The merged params are validated with the route's pydantic schema.
   A missing required field          -> MissingParamError (400)
   A wrongly typed field             -> InvalidParamError (400)
3. Validate callbacks run on the raw values they are registered for
                                      -> InvalidParamError (400)

Presence is about keys: a field sent as "" is present.
"""

import inspect
from typing import Any, Awaitable, Callable, Dict, Optional, Type, TypeVar, Union
from urllib.parse import parse_qsl

from fastapi import Request
from pydantic import BaseModel, ValidationError

from core.errors import InvalidParamError, MissingParamError, RestError
from core.sanitize import check_invalid_utf8

Validator = Callable[[Any], Union[bool, Awaitable[bool]]]
SchemaT = TypeVar("SchemaT", bound=BaseModel)


def parse_urlencoded(text: str) -> Dict[str, str]:
    """
    Decode application/x-www-form-urlencoded pairs.

    Percent-escapes that do not form valid UTF-8 make the whole value "".
    """
    pairs = parse_qsl(text, keep_blank_values=True, encoding="utf-8", errors="surrogateescape")
    return {key: check_invalid_utf8(value) for key, value in pairs}


async def collect_params(request: Request) -> Dict[str, Any]:
    """
    Merge query string and body parameters.

    Raises:
        RestError: rest_invalid_json for a malformed JSON body.
    """
    query = request.scope.get("query_string", b"").decode("utf-8", "surrogateescape")
    params: Dict[str, Any] = parse_urlencoded(query)

    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type == "application/json":
        if (await request.body()).strip():
            try:
                body = await request.json()
            except ValueError:
                raise RestError("Invalid JSON body passed.", code="rest_invalid_json", status=400)
            if isinstance(body, dict):
                params.update({
                    key: check_invalid_utf8(value) if isinstance(value, str) else value
                    for key, value in body.items()
                })
    elif content_type == "application/x-www-form-urlencoded":
        raw = await request.body()
        params.update(parse_urlencoded(raw.decode("utf-8", "surrogateescape")))
    elif content_type == "multipart/form-data":
        form = await request.form()
        params.update({key: value for key, value in form.items() if isinstance(value, str)})

    return params


def _describe_error(name: str, error: Dict[str, Any]) -> str:
    if error["type"] == "string_type":
        return f"{name} is not of type string."
    return "Invalid parameter."


async def validate_params(
    schema: Type[SchemaT],
    params: Dict[str, Any],
    validators: Optional[Dict[str, Validator]] = None,
) -> SchemaT:
    """
    Validate collected params against a schema, then run validate callbacks.

    Every invalid field is reported in one error, in schema field order.
    A callback is skipped for an absent field or one the schema rejected.

    Raises:
        MissingParamError: A required field is absent.
        InvalidParamError: A type check or validate callback failed.
    """
    validators = validators or {}
    invalid: Dict[str, str] = {}
    parsed: Optional[SchemaT] = None

    try:
        parsed = schema.model_validate(params)
    except ValidationError as e:
        errors = e.errors()
        missing = {str(err["loc"][0]) for err in errors if err["type"] == "missing"}
        if missing:
            raise MissingParamError([name for name in schema.model_fields if name in missing])
        for err in errors:
            name = str(err["loc"][0])
            invalid.setdefault(name, _describe_error(name, err))

    for name, validator in validators.items():
        if name not in params or name in invalid:
            continue
        outcome = validator(params[name])
        if inspect.isawaitable(outcome):
            outcome = await outcome
        if not outcome:
            invalid[name] = "Invalid parameter."

    if invalid:
        raise InvalidParamError({name: invalid[name] for name in schema.model_fields if name in invalid})

    return parsed
