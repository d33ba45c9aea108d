"""Watch-list keyword stored in MongoDB."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class Keyword:
    id: str
    keyword: str
    created_at: Optional[datetime] = None


__all__ = ["Keyword"]
