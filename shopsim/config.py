"""Run configuration for the command line entry point.

Configuration lives in a YAML (``.yml``/``.yaml``) or JSON file. Unknown keys
are ignored; missing keys take the defaults of ``SimulationConfig``.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml


@dataclass(slots=True)
class SimulationConfig:
    """Settings for one replay run.

    ``min_start``/``max_start`` bound the random start times and ``limit`` is
    the exclusive simulation horizon. ``strict`` turns any violation into a
    non-zero exit status.
    """

    dataset: str = "sample"
    seed: Optional[int] = None
    min_start: int = 100
    max_start: int = 1000
    limit: int = 10_000_000
    indexed: bool = True
    strict: bool = False
    log_level: str = "INFO"
    charts_dir: Optional[str] = None

    def validate(self) -> None:
        """Raise ValueError on inconsistent values."""
        if self.min_start < 0:
            raise ValueError("min_start must be non-negative")
        if self.min_start > self.max_start:
            raise ValueError("min_start must not exceed max_start")
        if self.limit < 0:
            raise ValueError("limit must be non-negative")
        if not self.dataset:
            raise ValueError("dataset must be 'sample' or a CSV path")


def config_from_dict(cfg: Dict[str, Any]) -> SimulationConfig:
    seed = cfg.get("seed")
    charts_dir = cfg.get("charts_dir")
    config = SimulationConfig(
        dataset=str(cfg.get("dataset", "sample")),
        seed=int(seed) if seed is not None else None,
        min_start=int(cfg.get("min_start", 100)),
        max_start=int(cfg.get("max_start", 1000)),
        limit=int(cfg.get("limit", 10_000_000)),
        indexed=bool(cfg.get("indexed", True)),
        strict=bool(cfg.get("strict", False)),
        log_level=str(cfg.get("log_level", "INFO")),
        charts_dir=str(charts_dir) if charts_dir else None,
    )
    config.validate()
    return config


def load_config(config_file: str = "config.yaml") -> SimulationConfig:
    """Load configuration from a YAML or JSON file."""
    if not os.path.isfile(config_file):
        raise FileNotFoundError(f"Config file not found: {config_file}")
    with open(config_file, "r", encoding="utf-8") as f:
        text = f.read()
    if config_file.endswith((".yml", ".yaml")):
        cfg = yaml.safe_load(text) or {}
    else:
        cfg = json.loads(text)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config root must be a mapping: {config_file}")
    return config_from_dict(cfg)
