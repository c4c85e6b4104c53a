"""Fragment builders: one optional request facet -> a piece of the RestAssured chain.

A :class:`Fragment` holds its lines relative to the chain's base
indentation; :meth:`Fragment.render` applies the indent. Builders return
``None`` when their facet is absent so the assembler can skip it.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from restassured_gen.generator.literal import escape_java, java_string
from restassured_gen.request.base import ApiKeyAuth, BasicAuth, BearerAuth

INDENT = " " * 8
STEP = " " * 4
# Continuation lines of a multi-line body literal, relative to INDENT.
CONTINUATION = " " * 11

BEARER_PREFIX = "Bearer "


class Facet(str, Enum):
    REQUEST = "request"
    AUTHORIZATION = "authorization"
    HEADERS = "headers"
    QUERY_PARAMS = "query_params"
    BODY = "body"
    INVOCATION = "invocation"
    STATUS = "status"
    RESPONSE_TIME = "response_time"
    SCHEMA = "schema"
    EXTRACT = "extract"
    LOGGING = "logging"


@dataclass(frozen=True)
class Fragment:
    facet: Facet
    lines: tuple[str, ...]

    def render(self, indent: str = INDENT) -> str:
        return "".join(f"{indent}{line}\n" if line else "\n" for line in self.lines)


def chained_call(name: str, *args: str) -> str:
    """``.name("a", "b")`` with every argument encoded as a string literal."""
    return f"{STEP}.{name}({', '.join(java_string(a) for a in args)})"


def build_authorization(auth) -> Fragment | None:
    if isinstance(auth, BasicAuth):
        line = f"{STEP}.auth().basic({java_string(auth.username)}, {java_string(auth.password)})"
    elif isinstance(auth, BearerAuth):
        line = chained_call("header", "Authorization", BEARER_PREFIX + auth.token)
    elif isinstance(auth, ApiKeyAuth):
        line = chained_call("header", auth.key_name, auth.key_value)
    else:
        return None
    return Fragment(Facet.AUTHORIZATION, (line,))


def build_headers(headers: Mapping[str, str]) -> Fragment | None:
    if not headers:
        return None
    return Fragment(
        Facet.HEADERS,
        tuple(chained_call("header", name, value) for name, value in headers.items()),
    )


def build_query_params(params: Mapping[str, str]) -> Fragment | None:
    if not params:
        return None
    return Fragment(
        Facet.QUERY_PARAMS,
        tuple(chained_call("queryParam", name, value) for name, value in params.items()),
    )


def build_body(body: str) -> Fragment:
    """Render a request body as a ``.body(...)`` call.

    Valid JSON is pretty-printed with a 4-space indent and emitted as one
    concatenated literal per line. Anything else is emitted verbatim as a
    single literal.
    """
    try:
        parsed = json.loads(body)
    except ValueError:
        return Fragment(Facet.BODY, (f"{STEP}.body({java_string(body)})",))

    lines = json.dumps(parsed, indent=4, ensure_ascii=False).split("\n")
    if len(lines) == 1:
        return Fragment(Facet.BODY, (f"{STEP}.body({java_string(lines[0])})",))

    rendered = [f'{STEP}.body("{escape_java(lines[0])}\\n" +']
    rendered.extend(f'{CONTINUATION}"{escape_java(line)}\\n" +' for line in lines[1:-1])
    rendered.append(f'{CONTINUATION}"{escape_java(lines[-1])}")')
    return Fragment(Facet.BODY, tuple(rendered))
