import json
import logging

import pytest

from pathgrid.app.config import CONFIG_PATH, ConfigError, PathgridConfig, load_config, parse_config


def _write(tmp_path, data):
    path = tmp_path / "pathgrid.json"
    path.write_text(json.dumps(data))
    return path


def test_shipped_default_config():
    # lives inside the package so a regular install carries it
    assert CONFIG_PATH.is_file()
    assert CONFIG_PATH.parent.parent.name == "pathgrid"
    cfg = load_config(CONFIG_PATH, argv=[], environ={})
    assert (cfg.width, cfg.height) == (16, 16)
    assert cfg.start == (0, 0)
    assert cfg.resolved_target == (15, 15)
    assert cfg.heuristic == "manhattan"
    assert cfg.step_cost == "heuristic"
    assert cfg.max_expansions is None


def test_missing_file_falls_back_to_defaults(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="pathgrid.app.config"):
        cfg = load_config(tmp_path / "nope.json", argv=[], environ={})
    assert cfg == PathgridConfig()
    assert "not found" in caplog.text


def test_file_values(tmp_path):
    path = _write(tmp_path, {
        "width": 8, "height": 4, "start": [1, 2], "heuristic": "Pythagorean",
        "step_cost": "unit", "max_expansions": 50, "log_level": "debug",
    })
    cfg = load_config(path, argv=[], environ={})
    assert (cfg.width, cfg.height) == (8, 4)
    assert cfg.start == (1, 2)
    assert cfg.target is None
    assert cfg.resolved_target == (7, 3)
    assert cfg.heuristic == "euclidean_squared"
    assert cfg.step_cost == "unit"
    assert cfg.max_expansions == 50
    assert cfg.log_level == "DEBUG"


def test_env_then_argv_override(tmp_path):
    path = _write(tmp_path, {"heuristic": "manhattan"})
    env = {"PATHGRID_HEURISTIC": "zero", "PATHGRID_LOG_LEVEL": "info"}
    cfg = load_config(path, argv=[], environ=env)
    assert cfg.heuristic == "zero"
    assert cfg.log_level == "INFO"

    cfg = load_config(path, argv=["--heuristic=euclidean_squared", "--log-level=error"], environ=env)
    assert cfg.heuristic == "euclidean_squared"
    assert cfg.log_level == "ERROR"


@pytest.mark.parametrize(
    "data",
    [
        {"width": 0},
        {"width": "wide"},
        {"start": [4, 0], "width": 4},
        {"target": [0, 99]},
        {"start": "origin"},
        {"heuristic": "chebyshev"},
        {"step_cost": "octile"},
        {"max_expansions": -3},
        {"log_level": "loud"},
        {"stop_at_target": "false"},
        {"stop_at_target": 0},
        ["not", "an", "object"],
    ],
)
def test_invalid_configs(data):
    with pytest.raises(ConfigError):
        parse_config(data)


def test_bad_override_is_rejected(tmp_path):
    path = _write(tmp_path, {})
    with pytest.raises(ConfigError):
        load_config(path, argv=["--heuristic=nope"], environ={})


def test_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{ width: 3")
    with pytest.raises(ConfigError):
        load_config(path, argv=[], environ={})


def test_stop_at_target_accepts_json_booleans(tmp_path):
    path = _write(tmp_path, {"stop_at_target": False})
    assert load_config(path, argv=[], environ={}).stop_at_target is False


@pytest.mark.parametrize("text", ["[]", "0", '""', "null"])
def test_non_object_root_is_rejected(tmp_path, text):
    path = tmp_path / "root.json"
    path.write_text(text)
    with pytest.raises(ConfigError, match="must be an object"):
        load_config(path, argv=[], environ={})


def test_non_utf8_file(tmp_path):
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"heuristic": "\xe9"}')
    with pytest.raises(ConfigError):
        load_config(path, argv=[], environ={})
