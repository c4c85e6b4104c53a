"""Request-chain assembler.

The emission order below is part of the generated output's contract:
request setup, authorization, headers, query params, body, invocation,
assertions, extraction, logging. Changing it changes every generated file.
"""

from restassured_gen.generator.fragments import (
    STEP,
    Facet,
    Fragment,
    build_authorization,
    build_body,
    build_headers,
    build_query_params,
)
from restassured_gen.generator.literal import java_string
from restassured_gen.request.base import RequestDescription

CONTENT_TYPE = "application/json"


def chain_fragments(desc: RequestDescription) -> list[Fragment]:
    """Return the fragments of the request chain in emission order."""
    fragments = [
        Fragment(
            Facet.REQUEST,
            ("Response response = given()", f"{STEP}.contentType({java_string(CONTENT_TYPE)})"),
        ),
        build_authorization(desc.authorization),
        build_headers(desc.headers),
        build_query_params(desc.query_params),
        build_body(desc.request_body) if desc.request_body else None,
        Fragment(
            Facet.INVOCATION,
            (".when()", f"{STEP}.{desc.method.value.lower()}({java_string(desc.endpoint)})"),
        ),
        Fragment(Facet.STATUS, (".then()", f"{STEP}.statusCode({desc.expected_status})")),
    ]

    # A zero threshold is treated as unset.
    if desc.response_time_threshold:
        fragments.append(
            Fragment(Facet.RESPONSE_TIME, (f"{STEP}.time(lessThan({desc.response_time_threshold}L))",))
        )

    if desc.validate_schema and desc.schema_file:
        fragments.append(
            Fragment(Facet.SCHEMA, (f"{STEP}.body(matchesJsonSchema({java_string(desc.schema_file)}))",))
        )

    fragments.append(Fragment(Facet.EXTRACT, (f"{STEP}.extract().response();",)))
    fragments.append(
        Fragment(
            Facet.LOGGING,
            (
                "",
                'System.out.println("Response Status: " + response.getStatusCode());',
                'System.out.println("Response Body: " + response.getBody().asString());',
            ),
        )
    )
    return [f for f in fragments if f is not None]


def build_chain(desc: RequestDescription) -> str:
    """Render the full test method body for ``desc``."""
    return "".join(fragment.render() for fragment in chain_fragments(desc))
