from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .lib.env import PATHS, FetchPaths

_FIELDS = {f.name: f for f in dataclasses.fields(FetchPaths)}


def config_from_mapping(raw: Dict[str, Any], *, base: FetchPaths = PATHS) -> FetchPaths:
    unknown = sorted(set(raw) - set(_FIELDS))
    if unknown:
        raise ValueError(f"Unknown fetch config keys: {', '.join(unknown)}")

    overrides: Dict[str, Any] = {}
    for key, value in raw.items():
        if value is None:
            continue
        overrides[key] = float(value) if key == "http_timeout" else str(value)
    return dataclasses.replace(base, **overrides)


def load_fetch_config(path: Optional[str]) -> FetchPaths:
    """Load path/label overrides from YAML; ``None`` returns the defaults."""

    if path is None:
        return PATHS

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("fetch config must be YAML")

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError("fetch config must contain a mapping/object")

    return config_from_mapping(raw)
