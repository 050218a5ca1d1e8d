import pytest

from marker_geometry import config


def test_defaults(monkeypatch):
    monkeypatch.delenv("MARKER_GEOMETRY_FILE", raising=False)
    monkeypatch.delenv("MARKER_GEOMETRY_MAX_TOKENS", raising=False)
    assert config.default_path() == "marker.json"
    assert config.max_tokens() == 4096


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MARKER_GEOMETRY_FILE", "/tmp/calib.json")
    monkeypatch.setenv("MARKER_GEOMETRY_MAX_TOKENS", "128")
    assert config.default_path() == "/tmp/calib.json"
    assert config.max_tokens() == 128


@pytest.mark.parametrize("raw", ["lots", "0", "-5"])
def test_invalid_max_tokens(monkeypatch, raw):
    monkeypatch.setenv("MARKER_GEOMETRY_MAX_TOKENS", raw)
    with pytest.raises(ValueError):
        config.max_tokens()
