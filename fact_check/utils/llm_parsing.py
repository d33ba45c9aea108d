"""Utilities for parsing structured outputs returned by LLM calls.

Chat models are asked to answer with a bare JSON object but regularly wrap
it in prose or Markdown fences; the helpers here locate the object
regardless.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict

from .text_cleaning import strip_think_blocks

__all__ = ["extract_structured_json"]


def _as_object(parsed: Any) -> Dict[str, Any]:
    if not isinstance(parsed, dict):
        raise ValueError("LLM response JSON is not an object")
    return parsed


def extract_structured_json(response_text: str) -> Dict[str, Any]:
    """Robustly extract a JSON object from an LLM response.

    Parameters
    ----------
    response_text
        The raw message content returned by the chat completion.

    Returns
    -------
    dict[str, Any]
        The parsed JSON object.

    Raises
    ------
    ValueError
        If no valid JSON object can be located in *response_text*.
    """

    cleaned: str = strip_think_blocks(response_text or "").strip()

    # 1. Try to parse the whole string first (fast path)
    try:
        return _as_object(json.loads(cleaned))
    except ValueError:
        pass

    # 2. Search for fenced JSON block, with or without explicit `json` label
    fenced = re.search(
        r"```(?:json)?\s*(\{.*?\})\s*```",
        cleaned,
        flags=re.DOTALL | re.IGNORECASE,
    )
    if fenced:
        snippet = fenced.group(1).strip()
        try:
            return _as_object(json.loads(snippet))
        except ValueError:
            cleaned = snippet  # Narrow search space.

    # 3. Progressive truncation from the first `{`
    start = cleaned.find("{")
    if start == -1:
        raise ValueError("Could not locate JSON in LLM response")

    candidate = cleaned[start:]

    for end in range(len(candidate), 0, -1):
        if candidate[end - 1] != "}":
            continue
        try:
            return _as_object(json.loads(candidate[:end]))
        except ValueError:
            continue

    raise ValueError("Could not locate JSON in LLM response")
