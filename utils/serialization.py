"""
JSON-compatible export of analysis results.

Dataclass field names are converted to camelCase (the dashboard contract);
keys of plain dicts are left as they are. Enums become their values,
numpy scalars become Python numbers and datetimes become ISO-8601 strings.
"""

import json
import logging
import math
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

import numpy as np

logger = logging.getLogger(__name__)


def to_camel_case(name: str) -> str:
    """snake_case -> camelCase."""
    head, *rest = name.split('_')
    return head + ''.join(part[:1].upper() + part[1:] for part in rest)


def to_snake_case(name: str) -> str:
    """camelCase -> snake_case."""
    out = []
    for ch in name:
        if ch.isupper():
            out.append('_')
            out.append(ch.lower())
        else:
            out.append(ch)
    return ''.join(out).lstrip('_')


def to_serializable(obj: Any) -> Any:
    """Recursively convert an analysis object into JSON-compatible data."""
    if obj is None or isinstance(obj, (bool, str)):
        return obj

    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, (np.integer,)):
        return int(obj)

    if isinstance(obj, (float, np.floating)):
        value = float(obj)
        return value if math.isfinite(value) else 0.0

    if isinstance(obj, int):
        return obj

    if isinstance(obj, (datetime, date)):
        return obj.isoformat()

    if isinstance(obj, np.ndarray):
        return [to_serializable(v) for v in obj.tolist()]

    if is_dataclass(obj) and not isinstance(obj, type):
        return {
            to_camel_case(f.name): to_serializable(getattr(obj, f.name))
            for f in fields(obj)
        }

    if isinstance(obj, Mapping):
        return {str(k): to_serializable(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple, set)):
        return [to_serializable(v) for v in obj]

    if isinstance(obj, Path):
        return str(obj)

    return str(obj)


def get_field(data: Any, name: str, default: Any = None) -> Any:
    """
    Read a field from a dataclass or mapping.

    Tries the name as given, then its camelCase and snake_case forms, so
    results coming back from JSON and in-memory dataclasses read the same.
    """
    if data is None:
        return default

    candidates = [name, to_camel_case(name), to_snake_case(name)]

    if isinstance(data, Mapping):
        for key in candidates:
            if key in data:
                return data[key]
        return default

    for key in candidates:
        if hasattr(data, key):
            return getattr(data, key)

    return default


def save_json(obj: Any, output_path) -> Path:
    """Serialize obj and write it as indented JSON."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(to_serializable(obj), f, indent=2, ensure_ascii=False)

    logger.info(f"Wrote {output_path}")
    return output_path
