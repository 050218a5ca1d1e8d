"""
Environment-driven settings. Values may come from a .env file, which the CLI
loads with python-dotenv before anything reads them.
"""

import os

DEFAULT_FILE = "marker.json"
DEFAULT_MAX_TOKENS = 4096


def default_path() -> str:
    return os.environ.get("MARKER_GEOMETRY_FILE") or DEFAULT_FILE


def max_tokens() -> int:
    raw = os.environ.get("MARKER_GEOMETRY_MAX_TOKENS")
    if not raw:
        return DEFAULT_MAX_TOKENS
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"MARKER_GEOMETRY_MAX_TOKENS must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"MARKER_GEOMETRY_MAX_TOKENS must be positive, got {value}")
    return value
