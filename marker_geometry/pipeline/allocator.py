"""
Allocation gate: zero-filled output arrays, sized from the two dimensions.
"""

import logging

import numpy as np

from marker_geometry.errors import AllocationError
from marker_geometry.state import LOCATION_FIELDS

logger = logging.getLogger(__name__)

OUTPUT_DTYPE = np.dtype(np.int32)


def allocate_outputs(state: dict) -> dict:
    num_angles = state["num_angles"]
    num_markers = state["num_markers"]
    location_size = num_angles * num_markers * 2

    try:
        outputs = {
            "angles": np.zeros(num_angles, dtype=OUTPUT_DTYPE),
            "marker_color": np.zeros(num_markers, dtype=OUTPUT_DTYPE),
        }
        for field in LOCATION_FIELDS:
            outputs[field] = np.zeros(location_size, dtype=OUTPUT_DTYPE)
    except (MemoryError, ValueError) as exc:
        raise AllocationError(
            f"Memory not allocated for {num_angles} angles x {num_markers} markers"
        ) from exc

    logger.debug("Allocated %d location entries per field", location_size)
    return outputs
