"""Unit tests for individual components in isolation.

Coverage:
    - agent/: Request serialization, error classification, configuration
    - conversation/: Submission flow and credential handling
    - intake/: Size ceiling, type checks, and encoding
"""
