"""Pydantic request, response and configuration schemas."""
