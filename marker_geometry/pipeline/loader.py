"""
File loading: read the whole file, then split it into a flat token list.
"""

import logging
from pathlib import Path

from marker_geometry.errors import ReadError
from marker_geometry.pipeline.tokenizer import tokenize

logger = logging.getLogger(__name__)


def read_whole_file(path: str | Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise ReadError(f"File read failed: {path}: {exc.strerror or exc}") from exc


def load_document(state: dict) -> dict:
    """Read and tokenize the file named in state; nothing is interpreted yet."""
    path = state["path"]
    logger.info("Reading %s", path)
    buffer = read_whole_file(path)
    logger.debug("File %s", buffer.decode("utf-8", errors="replace"))

    tokens = tokenize(buffer, state["max_tokens"])
    logger.info("Loaded %d bytes, %d tokens", len(buffer), len(tokens))
    return {"buffer": buffer, "tokens": tokens}
