"""Factory for the OpenAI SDK client."""

from __future__ import annotations

from openai import OpenAI as _OpenAIClient

from ..config import OPENAI_API_KEY


def create_openai_client(api_key: str | None = None) -> _OpenAIClient:
    """Return a new :class:`openai.OpenAI` instance.

    The composition root creates one instance and hands it to every service
    that needs it.
    """
    key = api_key or OPENAI_API_KEY
    if not key:
        raise EnvironmentError("OPENAI_API_KEY is not set in environment variables")
    return _OpenAIClient(api_key=key)

__all__ = ["create_openai_client"]
