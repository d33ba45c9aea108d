"""Utility functions for the fact_check project.

Re-exports the text-cleaning helpers and datetime utilities so that imports like
`from ..utils import tokenize` or `from ..utils import get_current_timestamp`
work as expected.
"""

from .text_cleaning import strip_think_blocks, normalize_whitespace, truncate, tokenize  # noqa: F401
from .datetime_utils import get_current_timestamp, parse_timestamp, format_timestamp  # noqa: F401
from .llm_parsing import extract_structured_json  # noqa: F401

__all__ = [
    "strip_think_blocks",
    "normalize_whitespace",
    "truncate",
    "tokenize",
    "get_current_timestamp",
    "parse_timestamp",
    "format_timestamp",
    "extract_structured_json",
]
