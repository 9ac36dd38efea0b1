"""SiPangkat - KP (Kenaikan Pangkat) assistant for Dinkes Kota Samarinda.

Answers staff questions with Gemini, optionally grounded in PDF or image
attachments forwarded inline with the question.

Components:
    - api: HTTP endpoints for the browser client
    - agent: Gemini gateway, prompts, and error classification
    - conversation: Message history, orchestration, and credentials
    - intake: Attachment validation and base64 encoding
    - models: Data model and request/response schemas
"""

__version__ = "0.1.0"
