# rodger/config.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Tuple

import yaml

DEFAULT_CONFIG: Dict[str, object] = {
    "data_dir": "./data",
    "ledger_file": "ledger.json",
    "items_file": "items.json",
    "search_limit": 10,
}

DATA_DIR_ENV = "RODGER_DATA_DIR"


def _merge_defaults(current: Dict[str, object], defaults: Dict[str, object]) -> Dict[str, object]:
    """Fill keys missing from the current config with their defaults."""
    return {**defaults, **current}


def load_config(path: str | Path | None = None) -> Dict[str, object]:
    """Load a YAML config file, filling in defaults for missing keys.

    A missing file yields the defaults. ``RODGER_DATA_DIR`` in the
    environment overrides ``data_dir``.
    """
    data: Dict[str, object] = {}
    if path is not None and Path(path).exists():
        with Path(path).open("r", encoding="utf-8") as fp:
            data = yaml.safe_load(fp) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
    config = _merge_defaults(data, DEFAULT_CONFIG)
    if os.getenv(DATA_DIR_ENV):
        config["data_dir"] = os.environ[DATA_DIR_ENV]
    return config


def save_config(config: Dict[str, object], path: str | Path) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as fp:
        yaml.safe_dump(config, fp, sort_keys=False)


def resolve_paths(config: Dict[str, object]) -> Tuple[Path, Path]:
    """Return the ledger and item registry file paths."""
    data_dir = Path(str(config["data_dir"])).expanduser()
    return (
        data_dir / str(config["ledger_file"]),
        data_dir / str(config["items_file"]),
    )
