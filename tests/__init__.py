"""Test package for SiPangkat.

Structure:
    - unit/: Gateway serialization, orchestration, intake, and config
    - integration/: HTTP endpoints through the FastAPI app

The Gemini SDK is never called: unit tests use a mocked client and
integration tests use a fake gateway. Uses pytest-check for soft assertions.
"""
