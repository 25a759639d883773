"""Pooled ``httpx`` clients shared by the Bedrock stream and invoke calls."""

from .client import build_timeout, close_all_clients, get_httpx_client

__all__ = ["build_timeout", "close_all_clients", "get_httpx_client"]
