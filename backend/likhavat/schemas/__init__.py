"""Pydantic request/response contracts (camelCase on the wire)."""
