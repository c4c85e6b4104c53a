"""Java identifiers derived from the request description."""

import re
from urllib.parse import urlsplit

CLASS_SUFFIX = "ApiTest"
FALLBACK_CLASS_NAME = CLASS_SUFFIX

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def derive_class_name(endpoint: str) -> str:
    """Build a test class name from the last path segment of an absolute URL.

    Example: "https://api.example.com/users" -> "UsersApiTest".
    Anything without a scheme, or with an empty path, gets the fallback
    name. URLs without an authority (file:///srv/users) still count.
    """
    try:
        parts = urlsplit(endpoint)
    except ValueError:
        return FALLBACK_CLASS_NAME
    if not parts.scheme:
        return FALLBACK_CLASS_NAME

    segments = [s for s in parts.path.split("/") if s]
    if not segments:
        return FALLBACK_CLASS_NAME

    sanitized = _NON_ALNUM.sub("", segments[-1])
    return f"{sanitized[:1].upper()}{sanitized[1:]}{CLASS_SUFFIX}"


def derive_method_name(method: str) -> str:
    """GET -> testGetRequest."""
    return f"test{method.capitalize()}Request"
