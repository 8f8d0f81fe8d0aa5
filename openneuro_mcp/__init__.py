"""
MCP (Model Context Protocol) server for the OpenNeuro GraphQL API.

Exposes one tool, ``graphql_query``, that relays GraphQL documents to
https://openneuro.org/crn/graphql over a Server-Sent-Events transport.
"""

from .relay import OpenNeuroRelay
from .server import mcp_server

__all__ = ["OpenNeuroRelay", "mcp_server"]
