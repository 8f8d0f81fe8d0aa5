"""
Request and error-envelope models for GraphQL calls relayed to OpenNeuro.

Both are per-call values: a QueryRequest is built when the tool is invoked
and the envelope, when one is needed, is dumped straight into the tool output.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

# Upper bound on the raw body echoed back for non-JSON responses
RESPONSE_TEXT_LIMIT = 1000

EMPTY_QUERY_MESSAGE = "GraphQL query must be a non-empty string."


class QueryRequest(BaseModel):
    """A GraphQL document plus optional variables, as sent on the wire."""

    query: str = Field(description="GraphQL query or mutation document")
    variables: Optional[dict[str, Any]] = Field(default=None, description="Variables keyed by name, any JSON value")

    @field_validator("query")
    @classmethod
    def _query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("empty_query", EMPTY_QUERY_MESSAGE)
        return value

    def to_payload(self) -> dict[str, Any]:
        """
        JSON body for the POST.

        The variables key is left out entirely when no variables were given,
        so the remote never sees ``"variables": null``.
        """
        payload: dict[str, Any] = {"query": self.query}
        if self.variables is not None:
            payload["variables"] = self.variables
        return payload


class GraphQLErrorEntry(BaseModel):
    message: str
    extensions: dict[str, Any] = Field(default_factory=dict)


class ErrorEnvelope(BaseModel):
    """Locally synthesized `{"errors": [...]}` result, shaped like a GraphQL response."""

    errors: list[GraphQLErrorEntry]

    @classmethod
    def single(cls, message: str, **extensions: Any) -> "ErrorEnvelope":
        return cls(errors=[GraphQLErrorEntry(message=message, extensions=extensions)])

    @classmethod
    def client_error(cls, message: str) -> "ErrorEnvelope":
        """The request never produced a usable response (bad input, network, DNS, timeout)."""
        return cls.single(message, clientError=True)

    @classmethod
    def non_json(cls, status_code: int, text: str) -> "ErrorEnvelope":
        return cls.single(
            f"OpenNeuro API Error {status_code}: Non-JSON response.",
            statusCode=status_code,
            responseText=text[:RESPONSE_TEXT_LIMIT],
        )

    @classmethod
    def http_error(cls, status_code: int, body: Any) -> "ErrorEnvelope":
        return cls.single(
            f"OpenNeuro API HTTP Error {status_code}",
            statusCode=status_code,
            responseBody=body,
        )

    def to_result(self) -> dict[str, Any]:
        return self.model_dump()
