"""
MCP server implementation using FastMCP.

Registers the single ``graphql_query`` tool, which relays GraphQL documents to
the public OpenNeuro API and returns the response as pretty-printed JSON.
"""

import json
from typing import Any, Optional

from fastmcp import FastMCP

from .config import OPENNEURO_GRAPHQL_ENDPOINT
from .logging import setup_logging
from .relay import OpenNeuroRelay

logger = setup_logging()

SERVER_NAME = "OpenNeuroExplorer"
SERVER_VERSION = "0.1.0"

mcp_server = FastMCP(
    name=SERVER_NAME,
    instructions=(
        "MCP Server for querying the OpenNeuro GraphQL API. OpenNeuro is a free and open platform "
        "for sharing MRI, MEG, EEG, iEEG, and ECoG data."
    ),
)

# Created on first use so the HTTP client lives as long as the process
_relay: Optional[OpenNeuroRelay] = None


def get_relay() -> OpenNeuroRelay:
    """Return the process-wide relay, creating it on first call."""
    global _relay
    if _relay is None:
        _relay = OpenNeuroRelay()
    return _relay


async def close_relay() -> None:
    """Close the process-wide relay's HTTP client, if one was opened."""
    global _relay
    if _relay is not None:
        await _relay.aclose()
        _relay = None


GRAPHQL_QUERY_DESCRIPTION = f"""Executes GraphQL queries against OpenNeuro API ({OPENNEURO_GRAPHQL_ENDPOINT}) for neuroimaging datasets (MRI, MEG, EEG).
Query dataset info, snapshot details, file listings, etc.
Example (dataset): '{{ dataset(id: "ds000224") {{ id name }} }}'.
Example (snapshot files): '{{ snapshot(datasetId: "ds000001", tag: "1.0.0") {{ files {{ filename size }} }} }}'.
For directory contents, use 'tree' arg with dir ID.
IMPORTANT: Before any data query/mutation, ALWAYS run introspection queries (e.g., '{{ __schema {{ queryType {{ name }} types {{ name fields {{ name }} }} }} }}') to confirm all target fields/operations are in the schema. This prevents errors from schema changes.
If a query fails, re-check syntax & re-introspect. Refer to API docs (schema at endpoint) for details."""


@mcp_server.tool(name="graphql_query", description=GRAPHQL_QUERY_DESCRIPTION)
async def graphql_query(query: str, variables: Optional[dict[str, Any]] = None) -> str:
    """
    Run a GraphQL query or mutation against OpenNeuro.

    Args:
        query: GraphQL document, e.g. '{ dataset(id: "ds000224") { id name } }'.
            Introspection queries such as '{ __schema { queryType { name } types { name kind } } }'
            reveal the schema.
        variables: Optional map of variable names to JSON values, e.g. {"datasetId": "ds000224"}.

    Returns:
        The response as JSON text with two-space indentation: the remote body
        as received (``data`` and/or ``errors``), or an ``{"errors": [...]}``
        envelope describing a transport, HTTP or decoding failure.
    """
    logger.info(f"Executing graphql_query with query: {query[:200]}...")
    if variables:
        logger.info(f"With variables: {json.dumps(variables)[:150]}...")

    result = await get_relay().execute(query, variables)
    return json.dumps(result, indent=2)
