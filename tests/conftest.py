import json

import pytest

from marker_geometry.pipeline.tokenizer import tokenize

# Two angles, three markers; marker_start rows are 1..6 and 7..12.
SAMPLE = {
    "num_angles": 2,
    "num_markers": 3,
    "angles": [0, 10],
    "marker_color": [1, 2, 3],
    "marker_start": [[1, 2, 3, 4, 5, 6], [7, 8, 9, 10, 11, 12]],
    "marker_mid": [[0, 0, 0, 0, 0, 0], [0, 0, 0, 0, 0, 0]],
    "marker_end": [[0, 0, 0, 0, 0, 0], [0, 0, 0, 0, 0, 0]],
}


def make_state(source) -> dict:
    """Pipeline state as load_document would leave it."""
    buffer = source if isinstance(source, bytes) else json.dumps(source).encode("utf-8")
    return {"buffer": buffer, "tokens": tokenize(buffer, 4096)}


@pytest.fixture
def sample() -> dict:
    return json.loads(json.dumps(SAMPLE))


@pytest.fixture
def write_json(tmp_path):
    def _write(source, name: str = "marker.json"):
        path = tmp_path / name
        if isinstance(source, bytes):
            path.write_bytes(source)
        else:
            path.write_text(json.dumps(source), encoding="utf-8")
        return path
    return _write
