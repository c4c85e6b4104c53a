"""Postman Collection v2.1 importer.

Turns every request in an exported collection into a RequestDescription.
Collection- and folder-level auth is inherited by the requests below it.
"""

import logging
from pathlib import Path

from restassured_gen.errors import InvalidRequestError, RequestFileError
from restassured_gen.request.base import RequestDescription
from restassured_gen.request.loader import read_document
from restassured_gen.request.validation import validate_request

logger = logging.getLogger(__name__)


def parse_postman(file_path: Path, expected_status: int = 200) -> list[RequestDescription]:
    """Parse a Postman Collection v2.1 file into a list of RequestDescription.

    Requests that fail validation (e.g. a POST without a raw body) are
    skipped with a warning.
    """
    collection = read_document(file_path)
    if not isinstance(collection, dict) or "item" not in collection:
        raise RequestFileError(f"{file_path} is not a Postman collection")

    requests: list[RequestDescription] = []
    _parse_items(collection["item"], requests, collection.get("auth"), expected_status)
    return requests


def _parse_items(items: list[dict], requests: list[RequestDescription], auth: dict | None, expected_status: int) -> None:
    """Recursively parse items (supports folders)."""
    for item in items:
        if "item" in item:
            _parse_items(item["item"], requests, item.get("auth") or auth, expected_status)
        elif "request" in item:
            data = _parse_request(item["request"], auth, expected_status)
            try:
                requests.append(validate_request(data))
            except InvalidRequestError as e:
                logger.warning("Skipping Postman request %r: %s", item.get("name", ""), e.message)


def _parse_request(req: dict | str, inherited_auth: dict | None, expected_status: int) -> dict:
    if isinstance(req, str):
        # Shorthand form: the request is just a URL
        req = {"method": "GET", "url": req}

    url = req.get("url", "")
    raw_url = url if isinstance(url, str) else url.get("raw", "")
    endpoint = raw_url.split("?", 1)[0]

    headers = {
        h["key"]: h.get("value") or ""
        for h in req.get("header", [])
        if h.get("key") and not h.get("disabled") and h["key"].lower() != "content-type"
    }
    query_params = {}
    if isinstance(url, dict):
        query_params = {
            q["key"]: q.get("value") or ""
            for q in url.get("query", [])
            if q.get("key") and not q.get("disabled")
        }

    authorization = _parse_auth(req.get("auth") or inherited_auth, query_params)
    if authorization is None or authorization["type"] == "none":
        authorization = _auth_from_header(headers)

    return {
        "method": req.get("method", "GET"),
        "endpoint": endpoint,
        "authorization": authorization,
        "headers": headers,
        "queryParams": query_params,
        "requestBody": _parse_body(req.get("body")),
        "expectedStatus": expected_status,
    }


def _auth_values(auth: dict, auth_type: str) -> dict[str, str]:
    entries = auth.get(auth_type, [])
    # v2.0 collections store auth attributes as a plain mapping
    if isinstance(entries, dict):
        return {k: str(v) for k, v in entries.items()}
    return {e["key"]: str(e.get("value", "")) for e in entries}


def _parse_auth(auth: dict | None, query_params: dict[str, str]) -> dict | None:
    if not auth:
        return None
    auth_type = auth.get("type")
    values = _auth_values(auth, auth_type)
    if auth_type == "bearer":
        return {"type": "bearer", "token": values.get("token", "")}
    if auth_type == "basic":
        return {"type": "basic", "username": values.get("username", ""), "password": values.get("password", "")}
    if auth_type == "apikey":
        if values.get("in") == "query":
            query_params[values.get("key", "")] = values.get("value", "")
            return {"type": "none"}
        return {"type": "apikey", "keyName": values.get("key", ""), "keyValue": values.get("value", "")}
    return {"type": "none"}


def _auth_from_header(headers: dict[str, str]) -> dict:
    for key in list(headers):
        if key.lower() == "authorization" and headers[key].startswith("Bearer "):
            token = headers.pop(key)[len("Bearer "):]
            return {"type": "bearer", "token": token}
    return {"type": "none"}


def _parse_body(body: dict | None) -> str | None:
    if not body or body.get("mode") != "raw":
        return None
    return body.get("raw") or None
