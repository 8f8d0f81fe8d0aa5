"""
GraphQL relay to the public OpenNeuro API.

Each call to :meth:`OpenNeuroRelay.execute` makes exactly one POST, following
redirects to the final response, and always returns a JSON mapping. Failures
never raise; they come back as a GraphQL-shaped
``{"errors": [...]}`` envelope:

- transport failure (connect, DNS, timeout): ``extensions.clientError = True``
- body is not JSON: ``extensions.statusCode`` and the first 1000 chars as ``responseText``
- non-2xx status with a JSON body: ``extensions.statusCode`` and ``responseBody``

A 2xx JSON body is returned exactly as received, including any GraphQL-level
``errors`` it carries.
"""

import json
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from .config import RelaySettings
from .logging import PprintLogger, setup_logging
from .models import ErrorEnvelope, QueryRequest

default_logger = setup_logging()

CLIENT_ERROR_FALLBACK = "An unexpected client-side error occurred while attempting to query the OpenNeuro GraphQL API."


def build_client(settings: RelaySettings, transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """HTTP client for the relay: configured timeout, redirects followed to the final response."""
    return httpx.AsyncClient(timeout=settings.timeout, follow_redirects=True, transport=transport)


class OpenNeuroRelay:
    """Sends GraphQL documents to OpenNeuro over one long-lived HTTP client."""

    def __init__(
        self,
        settings: Optional[RelaySettings] = None,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[PprintLogger] = None,
    ):
        """
        Args:
            settings: Endpoint, headers and timeout. Defaults to RelaySettings.from_env().
            client: HTTP client to reuse. Built with build_client() if omitted.
            logger: Diagnostic logger. Defaults to this module's logger.
        """
        self.settings = settings or RelaySettings.from_env()
        self.client = client or build_client(self.settings)
        self.logger = logger or default_logger

    async def execute(self, query: str, variables: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """Run one GraphQL request and classify the outcome. Never raises."""
        try:
            request = QueryRequest(query=query, variables=variables)
        except ValidationError as e:
            message = "; ".join(err["msg"] for err in e.errors())
            self.logger.warning(f"Rejected GraphQL request: {message}")
            return ErrorEnvelope.client_error(message).to_result()

        self.logger.debug(f"Making GraphQL request to: {self.settings.endpoint}")
        try:
            response = await self.client.post(
                self.settings.endpoint,
                json=request.to_payload(),
                headers=self.settings.headers,
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            message = str(e) or f"{type(e).__name__}: {CLIENT_ERROR_FALLBACK}"
            self.logger.error(f"Client-side error during OpenNeuro GraphQL request: {message}")
            return ErrorEnvelope.client_error(message).to_result()

        status = response.status_code
        self.logger.info(f"OpenNeuro API response status: {status}")

        try:
            body = response.json()
        except ValueError:
            text = response.text
            self.logger.error(f"OpenNeuro API response is not JSON. Status: {status}, Body: {text[:500]}")
            return ErrorEnvelope.non_json(status, text).to_result()

        if not response.is_success:
            self.logger.error(f"OpenNeuro API HTTP Error {status}: {json.dumps(body)}")
            return ErrorEnvelope.http_error(status, body).to_result()

        if isinstance(body, dict) and body.get("errors"):
            self._log_graphql_errors(body["errors"])
        return body

    def _log_graphql_errors(self, errors: Any) -> None:
        first = errors[0] if isinstance(errors, list) else errors
        message = first.get("message") if isinstance(first, dict) else first
        count = len(errors) if isinstance(errors, list) else 1
        self.logger.warning(
            {
                "message": "OpenNeuro returned GraphQL errors; passing them through",
                "count": count,
                "first": message,
            }
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "OpenNeuroRelay":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
