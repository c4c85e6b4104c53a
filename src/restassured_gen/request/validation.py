"""Inbound validation for request descriptions.

Runs the checks the generator relies on as preconditions, with the
messages the web form expects, before building a RequestDescription.
"""

import json

from pydantic import ValidationError

from restassured_gen.errors import InvalidRequestError
from restassured_gen.request.base import BODY_METHODS, RequestDescription

_BODY_METHOD_NAMES = {m.value for m in BODY_METHODS}


def _get(data: dict, alias: str, name: str):
    value = data.get(alias)
    return data.get(name) if value is None else value


def validate_request(data: dict) -> RequestDescription:
    """Validate raw request data and build a RequestDescription.

    Accepts both the camelCase wire names and the python field names.
    Raises InvalidRequestError with a human-readable message.
    """
    if not isinstance(data, dict):
        raise InvalidRequestError("Request description must be an object")

    method = data.get("method")
    if not method:
        raise InvalidRequestError("HTTP method is required")
    if not data.get("endpoint"):
        raise InvalidRequestError("Endpoint URL is required")
    if not _get(data, "expectedStatus", "expected_status"):
        raise InvalidRequestError("Expected status code is required")

    method_name = str(method).strip().upper()
    if method_name in _BODY_METHOD_NAMES:
        body = _get(data, "requestBody", "request_body")
        if not body:
            raise InvalidRequestError(f"Request body is required for {method_name} method")
        try:
            json.loads(body)
        except (TypeError, ValueError):
            raise InvalidRequestError("Request body must be valid JSON") from None

    try:
        return RequestDescription.model_validate(data)
    except ValidationError as e:
        raise InvalidRequestError(_format_errors(e)) from e


def _format_errors(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)
