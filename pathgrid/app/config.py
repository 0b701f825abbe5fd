# pathgrid/app/config.py
#!/usr/bin/env python3
"""
Session configuration.

Sources, lowest to highest priority:
- pathgrid/configs/default.json (missing file -> built-in defaults)
- ENV: PATHGRID_HEURISTIC, PATHGRID_LOG_LEVEL
- CLI-style args: --heuristic=..., --log-level=...
"""

import json
import logging
import os
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

from pathgrid.core.astar import resolve_step_cost
from pathgrid.core.heuristics import resolve_heuristic

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parents[1] / "configs"
CONFIG_PATH = CONFIG_DIR / "default.json"

ENV_HEURISTIC = "PATHGRID_HEURISTIC"
ENV_LOG_LEVEL = "PATHGRID_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class PathgridConfig:
    width: int = 16
    height: int = 16
    start: Tuple[int, int] = (0, 0)
    target: Optional[Tuple[int, int]] = None   # None -> bottom-right corner
    heuristic: str = "manhattan"
    step_cost: str = "heuristic"
    max_expansions: Optional[int] = None
    stop_at_target: bool = True
    log_level: str = "WARNING"

    @property
    def resolved_target(self) -> Tuple[int, int]:
        if self.target is None:
            return (self.width - 1, self.height - 1)
        return self.target


def _coord(data: Dict[str, Any], key: str) -> Optional[Tuple[int, int]]:
    raw = data.get(key)
    if raw is None:
        return None
    try:
        x, y = raw
        return (int(x), int(y))
    except (TypeError, ValueError) as ex:
        raise ConfigError(f"{key!r} must be a pair of integers, got {raw!r}") from ex


def _flag(data: Dict[str, Any], key: str, default: bool) -> bool:
    raw = data.get(key, default)
    if not isinstance(raw, bool):
        raise ConfigError(f"{key!r} must be true or false, got {raw!r}")
    return raw


def _validate(cfg: PathgridConfig) -> PathgridConfig:
    if cfg.width <= 0 or cfg.height <= 0:
        raise ConfigError(f"grid size must be positive, got {cfg.width}x{cfg.height}")
    for label, (x, y) in (("start", cfg.start), ("target", cfg.resolved_target)):
        if not (0 <= x < cfg.width and 0 <= y < cfg.height):
            raise ConfigError(f"{label} {(x, y)} out of bounds for {cfg.width}x{cfg.height}")
    try:
        heuristic = resolve_heuristic(cfg.heuristic).value
        step_cost = resolve_step_cost(cfg.step_cost)
    except ValueError as ex:
        raise ConfigError(str(ex)) from ex
    if cfg.max_expansions is not None and cfg.max_expansions < 0:
        raise ConfigError("max_expansions must be >= 0")
    level = str(cfg.log_level).upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(f"Unknown log level {cfg.log_level!r}")
    return replace(cfg, heuristic=heuristic, step_cost=step_cost, log_level=level)


def parse_config(data: Dict[str, Any]) -> PathgridConfig:
    """Convert raw JSON ``data`` into a validated PathgridConfig."""
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be an object, got {type(data).__name__}")
    defaults = PathgridConfig()
    try:
        width = int(data.get("width", defaults.width))
        height = int(data.get("height", defaults.height))
        max_exp = data.get("max_expansions")
        max_exp = None if max_exp is None else int(max_exp)
    except (TypeError, ValueError) as ex:
        raise ConfigError(f"bad numeric field: {ex}") from ex
    cfg = PathgridConfig(
        width=width,
        height=height,
        start=_coord(data, "start") or defaults.start,
        target=_coord(data, "target"),
        heuristic=data.get("heuristic", defaults.heuristic),
        step_cost=data.get("step_cost", defaults.step_cost),
        max_expansions=max_exp,
        stop_at_target=_flag(data, "stop_at_target", defaults.stop_at_target),
        log_level=data.get("log_level", defaults.log_level),
    )
    return _validate(cfg)


def _arg_value(argv: Sequence[str], flag: str) -> Optional[str]:
    value = None
    for arg in argv:
        if arg.startswith(f"--{flag}="):
            value = arg.split("=", 1)[1]
    return value


def load_config(path: Path = CONFIG_PATH, argv: Optional[Sequence[str]] = None,
                environ: Optional[Dict[str, str]] = None) -> PathgridConfig:
    """Load ``path`` (if present) and apply env / argv overrides."""
    path = Path(path)
    if path.is_file():
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as ex:
            raise ConfigError(f"{path}: invalid JSON ({ex})") from ex
    else:
        logger.warning("Config file %s not found, using defaults", path)
        raw = {}
    cfg = parse_config(raw)

    env = os.environ if environ is None else environ
    argv = sys.argv[1:] if argv is None else argv

    overrides: Dict[str, Any] = {}
    if env.get(ENV_HEURISTIC):
        overrides["heuristic"] = env[ENV_HEURISTIC]
    if env.get(ENV_LOG_LEVEL):
        overrides["log_level"] = env[ENV_LOG_LEVEL]
    arg_h = _arg_value(argv, "heuristic")
    if arg_h:
        overrides["heuristic"] = arg_h
    arg_l = _arg_value(argv, "log-level")
    if arg_l:
        overrides["log_level"] = arg_l

    if overrides:
        cfg = _validate(replace(cfg, **overrides))
    return cfg
