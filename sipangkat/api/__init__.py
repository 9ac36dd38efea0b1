"""FastAPI endpoints for the SiPangkat chat.

Endpoints:
    - GET /health: Service health status
    - POST /sessions: Start a chat session
    - GET /sessions/{id}: Session history and state
    - DELETE /sessions/{id}: Close a session
    - POST /sessions/{id}/credential: Select an API key
    - POST /sessions/{id}/attachments: File intake
    - POST /sessions/{id}/messages: Submit a message
    - GET /knowledge-base: Official documents and suggested questions
"""

from sipangkat.api.app import create_app

__all__ = ["create_app"]
