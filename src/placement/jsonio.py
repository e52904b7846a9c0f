from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence


def read_json(path: str | Path, loader: str) -> Any:
    file_path = Path(path).expanduser()
    if file_path.suffix.lower() != ".json":
        raise ValueError(f"{loader} expects a path to a .json file.")
    if not file_path.exists():
        raise FileNotFoundError(f"JSON file not found: {file_path}")
    try:
        return json.loads(file_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {file_path}") from exc


def json_entries(data: Any, keys: Sequence[str], what: str) -> Sequence[Any]:
    """
    Accept either a bare list or an object holding the list under one of `keys`.
    """
    if isinstance(data, Mapping):
        for key in keys:
            if data.get(key) is not None:
                data = data[key]
                break
        else:
            raise ValueError(
                f"JSON file must contain a list or one of the keys {list(keys)}."
            )
    if isinstance(data, (str, bytes, bytearray)) or not isinstance(data, Sequence):
        raise TypeError(f"JSON file must contain a list of {what} objects.")
    return data


def normalize_date(value: Any, field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value).date()
        except ValueError as exc:
            raise ValueError(f"Invalid date string {value!r} for '{field_name}'") from exc
    raise TypeError(f"'{field_name}' must be a date, datetime or ISO string.")
