"""Data models for request descriptions and generated test units.

The HTTP service, the CLI loaders and the Postman importer all convert
their input into these models before handing them to the generator.
Field aliases match the camelCase JSON the web form sends.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class HttpMethod(str, Enum):
    """HTTP methods RestAssured exposes as request-sender calls."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


BODY_METHODS = frozenset({HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH})


class NoAuth(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["none"] = "none"


class BasicAuth(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["basic"] = "basic"
    username: str
    password: str


class BearerAuth(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["bearer"] = "bearer"
    token: str


class ApiKeyAuth(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["apikey"] = "apikey"
    key_name: str = Field(alias="keyName")
    key_value: str = Field(alias="keyValue")


Authorization = Annotated[
    Union[NoAuth, BasicAuth, BearerAuth, ApiKeyAuth],
    Field(discriminator="type"),
]

AUTH_TYPES = frozenset({"none", "basic", "bearer", "apikey"})


class RequestDescription(BaseModel):
    """A single HTTP call to render as a RestAssured test."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    method: HttpMethod
    endpoint: str
    authorization: Authorization = NoAuth()
    headers: dict[str, str] = {}
    query_params: dict[str, str] = Field(default={}, alias="queryParams")
    request_body: str | None = Field(default=None, alias="requestBody")
    expected_status: int = Field(alias="expectedStatus")
    response_time_threshold: int | None = Field(default=None, alias="responseTimeThreshold")
    validate_schema: bool = Field(default=False, alias="validateSchema")
    schema_file: str | None = Field(default=None, alias="schemaFile")

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("authorization", mode="before")
    @classmethod
    def _default_auth(cls, value):
        # Auth schemes the generator cannot express emit no auth call at all
        if value is None:
            return NoAuth()
        if isinstance(value, dict) and value.get("type") not in AUTH_TYPES:
            return NoAuth()
        return value

    @field_validator("headers", "query_params", mode="before")
    @classmethod
    def _default_mapping(cls, value):
        return {} if value is None else value

    @model_validator(mode="after")
    def _body_present_for_body_methods(self):
        # Callers validate first; this keeps the generator's precondition from being bypassed.
        if self.method in BODY_METHODS and not self.request_body:
            raise ValueError(f"Request body is required for {self.method.value} method")
        return self


class GeneratedUnit(BaseModel):
    """One generated Java compilation unit."""

    model_config = ConfigDict(frozen=True)

    class_name: str
    file_name: str
    source_text: str
