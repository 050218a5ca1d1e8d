"""
Shared TypedDicts for the loading pipeline.
"""

from typing import TypedDict

import numpy as np

OBJECT = "object"
ARRAY = "array"
STRING = "string"
PRIMITIVE = "primitive"

CONTAINER_KINDS = (OBJECT, ARRAY)


class Token(TypedDict):
    kind: str    # object, array, string, primitive
    start: int   # byte offset, excludes the opening quote for strings
    end: int     # byte offset one past the last byte
    size: int    # immediate children; key/value pairs for objects


class MarkerGeometry(TypedDict):
    num_angles: int
    num_markers: int
    angles: np.ndarray        # [num_angles]
    marker_color: np.ndarray  # [num_markers]
    marker_start: np.ndarray  # flat [num_markers * 2][num_angles]
    marker_mid: np.ndarray
    marker_end: np.ndarray


SCALAR_FIELDS = ("num_angles", "num_markers")

# vector field -> dimension that fixes its length
VECTOR_FIELDS = {"angles": "num_angles", "marker_color": "num_markers"}

LOCATION_FIELDS = ("marker_start", "marker_mid", "marker_end")

ARRAY_FIELDS = (*VECTOR_FIELDS, *LOCATION_FIELDS)
