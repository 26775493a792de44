from __future__ import annotations
import argparse
import json, os
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict

import numpy as np

def _stamp() -> str:
    # microseconds keep back-to-back runs apart, e.g. 2025-10-25T15-04-12-083512
    return datetime.now().strftime("%Y-%m-%dT%H-%M-%S-%f")

def _sanitize(obj: Any):
    """
    Make config/metrics JSON-safe: Paths, enums, numpy scalars, sets, argparse namespaces.
    """
    if isinstance(obj, dict):
        return {str(k): _sanitize(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [_sanitize(v) for v in obj]
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, np.generic):
        return obj.item()
    if isinstance(obj, argparse.Namespace):
        return {k: _sanitize(v) for k, v in vars(obj).items() if k not in ("func",)}
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    return str(obj)

def log_run(config: Dict[str, Any], metrics: Dict[str, Any], dir_path: str = "runs", prefix: str = "benchmark") -> str:
    """
    Write {ts, config, metrics} as JSON to <dir_path>/<prefix>-<timestamp>.json
    (with a -2, -3, ... suffix if that name is already taken).
    Returns full filepath.
    """
    os.makedirs(dir_path, exist_ok=True)
    payload = {
        "ts": _stamp(),
        "config": _sanitize(config),
        "metrics": _sanitize(metrics),
    }
    fpath = os.path.join(dir_path, f"{prefix}-{payload['ts']}.json")
    n = 1
    while os.path.exists(fpath):
        n += 1
        fpath = os.path.join(dir_path, f"{prefix}-{payload['ts']}-{n}.json")
    with open(fpath, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
    return fpath
