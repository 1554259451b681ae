"""Credential handling for the paid generation models."""

from .api_key_gate import ApiKeyAuthGate

__all__ = ["ApiKeyAuthGate"]
