"""Integration tests for the HTTP API.

Drives the FastAPI app through httpx's ASGI transport with a fake gateway.
"""
