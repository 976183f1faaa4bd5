"""Helper functions for serialization, dates and files."""

import dataclasses
import datetime as dt
import enum
import json
import os
import pathlib
import re
import uuid
from collections.abc import Mapping
from typing import Any, Optional, Sequence, Union

import yaml


def to_serializable(obj: Any) -> Any:
    """
    Reduce models and manifest objects to plain JSON/YAML types.

    Objects exposing to_dict() use it (tasks and plans keep their camelCase
    keys that way); other dataclasses are converted field by field. Enums
    become their value and dates their ISO-8601 text.
    """
    if obj is None or isinstance(obj, (str, bool, int, float)):
        return obj
    if isinstance(obj, enum.Enum):
        return obj.value
    if isinstance(obj, (dt.datetime, dt.date)):
        return obj.isoformat()
    if isinstance(obj, (pathlib.PurePath, uuid.UUID)):
        return str(obj)
    if callable(getattr(obj, 'to_dict', None)):
        return to_serializable(obj.to_dict())
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_serializable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, Mapping):
        return {str(k): to_serializable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [to_serializable(x) for x in obj]
    raise TypeError(f"Cannot serialize object of type {type(obj).__name__}")


def dumps(obj: Any, *, indent: Optional[int] = None, sort_keys: bool = False) -> str:
    """JSON text for obj; compact unless indent is given."""
    return json.dumps(
        to_serializable(obj),
        indent=indent,
        ensure_ascii=False,
        sort_keys=sort_keys,
        separators=None if indent else (',', ':'),
    )


def load_json(file_path: Union[str, pathlib.Path]) -> Any:
    """Load JSON file and return parsed content."""
    with open(file_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def save_json(data: Any, file_path: Union[str, pathlib.Path], *, indent: int = 2) -> None:
    """Save data to JSON file."""
    with open(file_path, 'w', encoding='utf-8') as f:
        f.write(dumps(data, indent=indent))
        f.write('\n')


class _BlockDumper(yaml.SafeDumper):
    """SafeDumper that indents sequences and keeps multi-line strings readable."""

    def increase_indent(self, flow=False, indentless=False):
        return super().increase_indent(flow, False)


def _represent_str(dumper: yaml.SafeDumper, value: str):
    if '\n' in value:
        return dumper.represent_scalar('tag:yaml.org,2002:str', value, style='|')
    return dumper.represent_scalar('tag:yaml.org,2002:str', value)


_BlockDumper.add_representer(str, _represent_str)


def dump_yaml(data: Any, *, indent: int = 2) -> str:
    """Render data as block-style YAML, preserving key order."""
    return yaml.dump(
        to_serializable(data),
        Dumper=_BlockDumper,
        default_flow_style=False,
        allow_unicode=True,
        indent=indent,
        sort_keys=False,
        width=120,
    )


def dump_yaml_documents(documents: Sequence[Any]) -> str:
    """Render several objects as one multi-document YAML stream."""
    return '---\n'.join(dump_yaml(doc) for doc in documents)


def load_yaml(file_path: Union[str, pathlib.Path]) -> Any:
    """Load YAML file and return parsed content."""
    with open(file_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f)


def save_yaml(data: Any, file_path: Union[str, pathlib.Path], *, indent: int = 2) -> None:
    """Save data to YAML file."""
    with open(file_path, 'w', encoding='utf-8') as f:
        f.write(dump_yaml(data, indent=indent))


def ensure_dir(path: Union[str, pathlib.Path]) -> None:
    """Ensure directory exists, create if necessary."""
    os.makedirs(path, exist_ok=True)


def get_timestamp() -> str:
    """Get current timestamp in ISO-8601 format."""
    return dt.datetime.now().isoformat()


def parse_datetime(value: Union[str, dt.date, dt.datetime]) -> dt.datetime:
    """
    Normalize a date-like value to a naive `datetime`.

    Accepts datetime/date instances and ISO-8601 strings (a trailing 'Z' is
    treated as UTC). Timezone-aware values are converted to local naive time.
    """
    if isinstance(value, dt.datetime):
        parsed = value
    elif isinstance(value, dt.date):
        parsed = dt.datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = dt.datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid date string: {value!r}")
    else:
        raise ValueError(f"Invalid date type: {type(value)}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def generate_id() -> str:
    """Generate a short random identifier for tasks and plans."""
    return uuid.uuid4().hex[:12]


def truncate_text(text: str, max_length: int = 80, suffix: str = "...") -> str:
    """Truncate text to max_length with suffix if needed."""
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix


def slugify(text: str) -> str:
    """Lowercase text and collapse anything non-alphanumeric into single dashes."""
    slug = re.sub(r'[^a-z0-9]+', '-', text.lower())
    return slug.strip('-')
