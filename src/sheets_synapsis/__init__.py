"""Sheets Synapsis - Google Sheets MCP Server Package.

This package provides an MCP (Model Context Protocol) server for Google Sheets
integration, authenticating on demand through a local OAuth 2.0 PKCE flow.
"""
from .client import SheetsClient
from .auth import GoogleAuthManager

__version__ = "0.1.0"
__all__ = ["SheetsClient", "GoogleAuthManager"]
