from pathlib import Path

import pytest

from restassured_gen.errors import InvalidRequestError, RequestFileError
from restassured_gen.request.base import BearerAuth, HttpMethod
from restassured_gen.request.detect import detect_format
from restassured_gen.request.loader import load_requests
from restassured_gen.request.validation import validate_request

FIXTURES = Path(__file__).parent / "fixtures"


class TestValidateRequest:
    def _data(self, **overrides) -> dict:
        data = {"method": "GET", "endpoint": "https://api.example.com/users", "expectedStatus": 200}
        data.update(overrides)
        return {k: v for k, v in data.items() if v is not None}

    def test_valid(self):
        desc = validate_request(self._data())
        assert desc.method is HttpMethod.GET

    def test_method_required(self):
        with pytest.raises(InvalidRequestError, match="HTTP method is required"):
            validate_request(self._data(method=""))

    def test_endpoint_required(self):
        with pytest.raises(InvalidRequestError, match="Endpoint URL is required"):
            validate_request(self._data(endpoint=None))

    def test_expected_status_required(self):
        with pytest.raises(InvalidRequestError, match="Expected status code is required"):
            validate_request(self._data(expectedStatus=None))

    def test_python_field_names_accepted(self):
        data = {"method": "GET", "endpoint": "https://x.com/a", "expected_status": 200}
        assert validate_request(data).expected_status == 200

    def test_body_required_for_post(self):
        with pytest.raises(InvalidRequestError, match="Request body is required for POST method"):
            validate_request(self._data(method="post"))

    def test_body_must_be_json_for_put(self):
        with pytest.raises(InvalidRequestError, match="Request body must be valid JSON"):
            validate_request(self._data(method="PUT", requestBody="{not json"))

    def test_get_body_not_checked(self):
        desc = validate_request(self._data(requestBody="{not json"))
        assert desc.request_body == "{not json"

    def test_model_errors_wrapped(self):
        with pytest.raises(InvalidRequestError, match="method"):
            validate_request(self._data(method="FETCH"))

    def test_non_object_rejected(self):
        with pytest.raises(InvalidRequestError):
            validate_request(["GET"])

    def test_exit_code(self):
        with pytest.raises(InvalidRequestError) as excinfo:
            validate_request({})
        assert excinfo.value.exit_code == 2


class TestLoadRequests:
    def test_single_json_object(self):
        requests = load_requests(FIXTURES / "get_users.json")
        assert len(requests) == 1
        assert requests[0].endpoint == "https://api.example.com/v1/users"
        assert requests[0].expected_status == 200

    def test_yaml_list(self):
        requests = load_requests(FIXTURES / "requests.yaml")
        assert [r.method for r in requests] == [HttpMethod.GET, HttpMethod.POST]
        first, second = requests
        assert first.authorization == BearerAuth(token="abc123")
        assert list(first.headers) == ["X-Trace", "Accept"]
        assert first.query_params == {"page": "1", "limit": "10"}
        assert second.response_time_threshold == 500

    def test_yaml_mapping_body_serialised(self):
        second = load_requests(FIXTURES / "requests.yaml")[1]
        assert second.request_body == '{"item": "book", "quantity": 2}'

    def test_invalid_item_reports_position(self, tmp_path):
        path = tmp_path / "reqs.json"
        path.write_text(
            '[{"method": "GET", "endpoint": "https://x.com/a", "expectedStatus": 200},'
            ' {"method": "GET", "expectedStatus": 200}]',
            encoding="utf-8",
        )
        with pytest.raises(InvalidRequestError, match=r"Request #2: Endpoint URL is required"):
            load_requests(path)

    def test_scalar_document_rejected(self, tmp_path):
        path = tmp_path / "reqs.yaml"
        path.write_text("just a string\n", encoding="utf-8")
        with pytest.raises(RequestFileError):
            load_requests(path)

    def test_unparseable_file(self, tmp_path):
        path = tmp_path / "reqs.json"
        path.write_text('{"method": [', encoding="utf-8")
        with pytest.raises(RequestFileError):
            load_requests(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(RequestFileError):
            load_requests(tmp_path / "missing.json")


class TestDetectFormat:
    def test_postman(self):
        assert detect_format(FIXTURES / "shop.postman_collection.json") == "postman"

    def test_request_json(self):
        assert detect_format(FIXTURES / "get_users.json") == "request"

    def test_request_yaml(self):
        assert detect_format(FIXTURES / "requests.yaml") == "request"
