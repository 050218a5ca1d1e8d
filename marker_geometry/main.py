"""CLI entry point and loader for marker geometry calibration files."""

import argparse
import logging
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from marker_geometry import config
from marker_geometry.errors import LoadError
from marker_geometry.pipeline.loader import load_document
from marker_geometry.pipeline.dimensions import read_dimensions
from marker_geometry.pipeline.allocator import allocate_outputs
from marker_geometry.pipeline.arrays import fill_arrays
from marker_geometry.pipeline.assembler import assemble
from marker_geometry.state import LOCATION_FIELDS, MarkerGeometry

logger = logging.getLogger(__name__)


def load_marker_geometry(path: str | Path, max_tokens: int | None = None) -> MarkerGeometry:
    """Run the full loading pipeline, return the geometry. Raises LoadError."""
    if max_tokens is None:
        max_tokens = config.max_tokens()
    elif max_tokens <= 0:
        raise ValueError(f"max_tokens must be positive, got {max_tokens}")

    state: dict = {"path": str(path), "max_tokens": max_tokens}
    try:
        state.update(load_document(state))
        state.update(read_dimensions(state))
        state.update(allocate_outputs(state))
        state.update(fill_arrays(state))
        state.update(assemble(state))
        return state["geometry"]
    finally:
        # Drops the buffer, the tokens and, on failure, any half-filled arrays.
        state.clear()


def _log_geometry(geometry: MarkerGeometry) -> None:
    num_angles = geometry["num_angles"]
    rows = geometry["num_markers"] * 2
    logger.info("angles: %s", geometry["angles"].tolist())
    logger.info("marker_color: %s", geometry["marker_color"].tolist())
    for field in LOCATION_FIELDS:
        logger.info("%s [coordinate][angle]:\n%s", field, geometry[field].reshape(rows, num_angles))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Load a marker geometry calibration file.")
    parser.add_argument("path", nargs="?", default=None,
                        help="Path to the marker JSON file (default: $MARKER_GEOMETRY_FILE or marker.json)")
    parser.add_argument("--max-tokens", type=int, default=None,
                        help="Tokenizer capacity (default: $MARKER_GEOMETRY_MAX_TOKENS or 4096)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--show", action="store_true", help="Log the loaded arrays")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    path = Path(args.path or config.default_path())

    start = time.time()
    logger.info("Loading marker geometry from %s", path)

    try:
        geometry = load_marker_geometry(path, args.max_tokens)
    except LoadError as exc:
        logger.error("Load failed: %s", exc)
        return exc.exit_code
    except Exception:
        logger.exception("Pipeline failed")
        return 1

    if args.show:
        _log_geometry(geometry)

    logger.info("Done: %d angles, %d markers <- %s (%.3fs)",
                geometry["num_angles"], geometry["num_markers"], path, time.time() - start)
    return 0


if __name__ == "__main__":
    sys.exit(main())
