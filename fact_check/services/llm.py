"""Chat-completion provider used for fact-check judgments."""

from __future__ import annotations

import logging

from openai import OpenAI

from ..config import OPENAI_CHAT_MODEL

logger = logging.getLogger(__name__)


class OpenAIChatProvider:
    """Send a single-message prompt and return the raw reply text."""

    def __init__(self, openai_client: OpenAI, model: str = OPENAI_CHAT_MODEL) -> None:
        self._openai = openai_client
        self.model = model

    def complete(self, prompt: str) -> str:
        logger.info("Requesting completion from %s (%d prompt chars)", self.model, len(prompt))
        resp = self._openai.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
        )
        if not resp.choices:
            return ""
        content = resp.choices[0].message.content
        logger.debug("Raw completion: %s", content)
        return content or ""


__all__ = ["OpenAIChatProvider"]
