"""Top-level package for the fact_check project.

The HTTP app lives in :mod:`fact_check.api.app`; run it with any ASGI server,
e.g. ``uvicorn fact_check.api.app:app``.
"""

from importlib import metadata as _metadata

try:
    __version__: str = _metadata.version("fact-check")
except _metadata.PackageNotFoundError:  # pragma: no cover - running from source
    __version__ = "0.0.0"

__all__ = ["__version__"]
