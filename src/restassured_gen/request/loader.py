"""Request file loader.

Reads one request description, or a list of them, from a JSON or YAML
file.
"""

import json
from pathlib import Path

import yaml

from restassured_gen.errors import InvalidRequestError, RequestFileError
from restassured_gen.request.base import RequestDescription
from restassured_gen.request.validation import validate_request


def read_document(file_path: Path):
    """Parse a JSON or YAML document."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise RequestFileError(f"Cannot read {file_path}: {e}") from e

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError:
        pass
    try:
        return json.loads(text)
    except ValueError as e:
        raise RequestFileError(f"{file_path} is neither valid YAML nor JSON: {e}") from e


_INLINE_FIELDS = ("requestBody", "request_body", "schemaFile", "schema_file")


def _inline_documents(item):
    """Serialise a body or schema written as a YAML mapping back to JSON text."""
    if not isinstance(item, dict):
        return item
    item = dict(item)
    for key in _INLINE_FIELDS:
        if isinstance(item.get(key), (dict, list)):
            item[key] = json.dumps(item[key], ensure_ascii=False)
    return item


def load_requests(file_path: Path) -> list[RequestDescription]:
    """Load and validate the request descriptions in a file."""
    data = read_document(file_path)
    if isinstance(data, dict):
        items = [data]
    elif isinstance(data, list):
        items = data
    else:
        raise RequestFileError(f"{file_path} must contain an object or a list of objects")

    requests = []
    for index, item in enumerate(items):
        try:
            requests.append(validate_request(_inline_documents(item)))
        except InvalidRequestError as e:
            if len(items) == 1:
                raise
            raise InvalidRequestError(f"Request #{index + 1}: {e.message}") from e
    return requests
