# file: src/household_power/io_utils.py
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict


def ensure_dir(path: Path) -> None:
    Path(path).mkdir(parents=True, exist_ok=True)


def atomic_write_json(payload: Dict[str, Any], path: Path) -> None:
    """
    Atomic JSON write: write to temp in same directory, then replace.

    NaN metrics are written as null so the file stays valid JSON.
    """
    path = Path(path)
    ensure_dir(path.parent)
    tmp = path.with_suffix(path.suffix + ".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(_nan_to_none(payload), f, indent=2, default=str, allow_nan=False)
    os.replace(tmp, path)


def _nan_to_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _nan_to_none(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_nan_to_none(v) for v in value]
    if isinstance(value, float) and value != value:
        return None
    return value
