"""Pydantic models for API Gateway Lambda proxy events, plus the generic request.

Two payload shapes exist for the same concept:

- REST API (payload format 1.0): flat `httpMethod` and `path`.
  https://docs.aws.amazon.com/apigateway/latest/developerguide/set-up-lambda-proxy-integrations.html
- HTTP API (payload format 2.0): `rawPath`, with the method nested under
  `requestContext.http`.
  https://docs.aws.amazon.com/apigateway/latest/developerguide/http-api-develop-integrations-lambda.html

Only the fields the adapter reads are declared; everything else the gateway
sends is accepted and ignored.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class RestApiRequestContext(BaseModel):
    """REST API requestContext. Logged, never routed on."""

    requestId: str | None = None
    stage: str | None = None
    domainName: str | None = None

    model_config = ConfigDict(extra="allow")


class RestApiEvent(BaseModel):
    httpMethod: str
    path: str
    headers: dict[str, str] | None = None
    queryStringParameters: dict[str, str] | None = None
    pathParameters: dict[str, str] | None = None
    body: str | None = None
    isBase64Encoded: bool = False
    requestContext: RestApiRequestContext = Field(default_factory=RestApiRequestContext)

    model_config = ConfigDict(extra="allow")


class HttpApiHttpContext(BaseModel):
    method: str
    path: str | None = None
    protocol: str | None = None
    sourceIp: str | None = None
    userAgent: str | None = None

    model_config = ConfigDict(extra="allow")


class HttpApiRequestContext(BaseModel):
    http: HttpApiHttpContext
    requestId: str | None = None
    stage: str | None = None
    domainName: str | None = None

    model_config = ConfigDict(extra="allow")


class HttpApiEvent(BaseModel):
    version: str = "2.0"
    rawPath: str
    rawQueryString: str = ""
    headers: dict[str, str] | None = None
    queryStringParameters: dict[str, str] | None = None
    pathParameters: dict[str, str] | None = None
    body: str | None = None
    isBase64Encoded: bool = False
    requestContext: HttpApiRequestContext

    model_config = ConfigDict(extra="allow")

    @field_validator("rawPath")
    @classmethod
    def _absolute_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("rawPath must start with '/'")
        return value


@dataclass(frozen=True)
class RequestDescriptor:
    """Gateway-independent HTTP request handed to the router.

    Built once per inbound event and never mutated afterwards.
    """

    method: HttpMethod
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    query_params: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self):
        # Read-only views over private copies of the caller's mappings
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        object.__setattr__(self, "query_params", MappingProxyType(dict(self.query_params)))

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")
