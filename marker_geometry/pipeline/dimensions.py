"""
Pass 1: read num_angles and num_markers from the root object.

Every value is skipped as a whole subtree, so array or object values under
other keys cannot throw the scan off. No output array exists until both
dimensions are known and positive.
"""

import logging

from marker_geometry.errors import DimensionError
from marker_geometry.pipeline.cursor import TokenCursor, match_key, open_root_object, parse_int
from marker_geometry.state import SCALAR_FIELDS

logger = logging.getLogger(__name__)


def read_dimensions(state: dict) -> dict:
    buffer = state["buffer"]
    cursor = TokenCursor(state["tokens"])
    root = open_root_object(cursor)

    dims = dict.fromkeys(SCALAR_FIELDS, 0)
    for _ in range(root["size"]):
        if all(dims.values()):
            break
        name = match_key(buffer, cursor.advance(), SCALAR_FIELDS)
        value = cursor.skip_subtree()
        if name is not None:
            dims[name] = parse_int(buffer, value)

    logger.info("Dimensions, num_angles %d, num_markers %d", dims["num_angles"], dims["num_markers"])

    for name, value in dims.items():
        if value <= 0:
            raise DimensionError(f"Dimension error: {name} is {value}, expected a positive integer")
    return dims
