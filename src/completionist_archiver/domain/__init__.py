"""Domain layer — protocol payloads, command envelopes, and the export document.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
