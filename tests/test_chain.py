from restassured_gen.generator.chain import build_chain, chain_fragments
from restassured_gen.generator.fragments import Facet
from restassured_gen.request.base import RequestDescription


def _make_request(**overrides) -> RequestDescription:
    data = {"method": "GET", "endpoint": "https://api.example.com/v1/users", "expected_status": 200}
    data.update(overrides)
    return RequestDescription(**data)


def _facets(desc: RequestDescription) -> list[Facet]:
    return [f.facet for f in chain_fragments(desc)]


class TestChainOrder:
    def test_minimal_get(self):
        assert _facets(_make_request()) == [
            Facet.REQUEST,
            Facet.INVOCATION,
            Facet.STATUS,
            Facet.EXTRACT,
            Facet.LOGGING,
        ]

    def test_every_facet_in_fixed_order(self):
        desc = _make_request(
            method="POST",
            authorization={"type": "bearer", "token": "t"},
            headers={"X-Trace": "1"},
            query_params={"dryRun": "true"},
            request_body='{"a": 1}',
            response_time_threshold=500,
            validate_schema=True,
            schema_file='{"type": "object"}',
        )
        assert _facets(desc) == [
            Facet.REQUEST,
            Facet.AUTHORIZATION,
            Facet.HEADERS,
            Facet.QUERY_PARAMS,
            Facet.BODY,
            Facet.INVOCATION,
            Facet.STATUS,
            Facet.RESPONSE_TIME,
            Facet.SCHEMA,
            Facet.EXTRACT,
            Facet.LOGGING,
        ]

    def test_schema_without_flag_ignored(self):
        desc = _make_request(schema_file='{"type": "object"}')
        assert Facet.SCHEMA not in _facets(desc)

    def test_flag_without_schema_skipped(self):
        desc = _make_request(validate_schema=True)
        assert Facet.SCHEMA not in _facets(desc)

    def test_zero_threshold_treated_as_unset(self):
        assert Facet.RESPONSE_TIME not in _facets(_make_request(response_time_threshold=0))

    def test_body_on_get_is_emitted(self):
        assert Facet.BODY in _facets(_make_request(request_body='{"q": 1}'))


class TestBuildChain:
    def test_minimal_get_text(self):
        assert build_chain(_make_request()) == (
            "        Response response = given()\n"
            '            .contentType("application/json")\n'
            "        .when()\n"
            '            .get("https://api.example.com/v1/users")\n'
            "        .then()\n"
            "            .statusCode(200)\n"
            "            .extract().response();\n"
            "\n"
            '        System.out.println("Response Status: " + response.getStatusCode());\n'
            '        System.out.println("Response Body: " + response.getBody().asString());\n'
        )

    def test_method_lower_cased(self):
        text = build_chain(_make_request(method="DELETE", expected_status=204))
        assert '            .delete("https://api.example.com/v1/users")\n' in text
        assert ".statusCode(204)" in text

    def test_response_time_assertion(self):
        text = build_chain(_make_request(response_time_threshold=500))
        assert text.count(".time(lessThan(500L))") == 1
        assert text.index(".statusCode(200)") < text.index(".time(lessThan(500L))")

    def test_schema_assertion_encoded(self):
        text = build_chain(_make_request(validate_schema=True, schema_file='{"type": "object"}'))
        assert '            .body(matchesJsonSchema("{\\"type\\": \\"object\\"}"))\n' in text

    def test_endpoint_encoded(self):
        text = build_chain(_make_request(endpoint='https://x.com/a"b'))
        assert '.get("https://x.com/a\\"b")' in text

    def test_headers_before_query_params(self):
        text = build_chain(_make_request(headers={"H": "1"}, query_params={"q": "2"}))
        assert text.index('.header("H", "1")') < text.index('.queryParam("q", "2")')
