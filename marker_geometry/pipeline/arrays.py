"""
Pass 2: fill the output arrays from the array fields of the root object.

Location fields nest angle-major in JSON ([angle][coordinate]) but are stored
coordinate-major, so element k of angle j lands at k * num_angles + j.
Length mismatches abort the load; a recognized field whose value is not an
array is left zero-filled.
"""

import logging

import numpy as np

from marker_geometry.errors import DimensionError, SchemaError
from marker_geometry.pipeline.allocator import OUTPUT_DTYPE
from marker_geometry.pipeline.cursor import (
    TokenCursor,
    match_key,
    open_root_object,
    parse_int,
    token_text,
)
from marker_geometry.state import ARRAY, ARRAY_FIELDS, SCALAR_FIELDS, VECTOR_FIELDS

logger = logging.getLogger(__name__)

_INT_LIMITS = np.iinfo(OUTPUT_DTYPE)


def transposed_index(coordinate: int, angle: int, num_angles: int) -> int:
    """Flat offset of JSON element [angle][coordinate] in a location array."""
    return coordinate * num_angles + angle


def _read_int(cursor: TokenCursor, buffer: bytes, field: str) -> int:
    value = parse_int(buffer, cursor.skip_subtree())
    if not _INT_LIMITS.min <= value <= _INT_LIMITS.max:
        raise SchemaError(f"Value {value} in {field} does not fit in {OUTPUT_DTYPE}")
    return value


def _fill_vector(
    cursor: TokenCursor, buffer: bytes, out: np.ndarray, field: str, dimension: str, expected: int,
) -> bool:
    values = cursor.peek()
    if values["kind"] != ARRAY:
        logger.warning("%s is not an array, leaving it zero-filled", field)
        cursor.skip_subtree()
        return False
    cursor.advance()

    if values["size"] != expected:
        raise DimensionError(
            f"Number of {field} {values['size']} does not match {dimension} {expected}"
        )

    for j in range(expected):
        out[j] = _read_int(cursor, buffer, field)
    return True


def _fill_locations(
    cursor: TokenCursor, buffer: bytes, out: np.ndarray, field: str, num_angles: int, num_markers: int,
) -> bool:
    grid = cursor.peek()
    if grid["kind"] != ARRAY:
        logger.warning("%s is not an array, leaving it zero-filled", field)
        cursor.skip_subtree()
        return False
    cursor.advance()

    if grid["size"] != num_angles:
        raise DimensionError(
            f"First dimension {grid['size']} of {field} does not match num_angles {num_angles}"
        )

    width = num_markers * 2
    for j in range(num_angles):
        row = cursor.peek()
        if row["kind"] != ARRAY:
            logger.debug("Skipping non-array entry %d of %s", j, field)
            cursor.skip_subtree()
            continue
        cursor.advance()

        if row["size"] != width:
            raise DimensionError(
                f"Second dimension {row['size']} of {field} does not match "
                f"2 * num_markers {width}"
            )

        for k in range(width):
            out[transposed_index(k, j, num_angles)] = _read_int(cursor, buffer, field)
    return True


def fill_arrays(state: dict) -> dict:
    buffer = state["buffer"]
    cursor = TokenCursor(state["tokens"])
    root = open_root_object(cursor)

    populated: list[str] = []
    for _ in range(root["size"]):
        key = cursor.advance()
        name = match_key(buffer, key, ARRAY_FIELDS)

        if name is None:
            if match_key(buffer, key, SCALAR_FIELDS) is None:
                logger.warning("Unexpected key: %s", token_text(buffer, key))
            cursor.skip_subtree()
            continue

        if name in VECTOR_FIELDS:
            dimension = VECTOR_FIELDS[name]
            filled = _fill_vector(cursor, buffer, state[name], name, dimension, state[dimension])
        else:
            filled = _fill_locations(
                cursor, buffer, state[name], name, state["num_angles"], state["num_markers"],
            )

        if filled and name not in populated:
            populated.append(name)

    return {"populated": populated}
