"""
Final assembly: hand the filled arrays over as a single MarkerGeometry.
"""

import logging

from marker_geometry.state import ARRAY_FIELDS, MarkerGeometry

logger = logging.getLogger(__name__)


def assemble(state: dict) -> dict:
    populated = set(state.get("populated", []))
    missing = [field for field in ARRAY_FIELDS if field not in populated]
    if missing:
        logger.warning("Fields left zero-filled: %s", ", ".join(missing))

    geometry = MarkerGeometry(
        num_angles=state["num_angles"],
        num_markers=state["num_markers"],
        angles=state["angles"],
        marker_color=state["marker_color"],
        marker_start=state["marker_start"],
        marker_mid=state["marker_mid"],
        marker_end=state["marker_end"],
    )

    logger.info("Assembly complete: %d angles, %d markers",
                geometry["num_angles"], geometry["num_markers"])
    return {"geometry": geometry}
