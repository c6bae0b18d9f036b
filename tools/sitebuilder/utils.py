from __future__ import annotations

import json
import pathlib
import sys
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

import yaml

from .config import DATE_FORMATS, MONTHS


class ContentError(ValueError):
    """A source file that cannot become part of the build."""


class FrontmatterError(ContentError):
    pass


class ProjectError(ContentError):
    pass


def error(msg: str) -> None:
    print(f"ERROR: {msg}", file=sys.stderr)


def warn(msg: str) -> None:
    print(f"! {msg}")


def ensure_dir(p: pathlib.Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def read_yaml(path: pathlib.Path) -> Dict[str, Any]:
    if path.exists():
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return {}


def _norm_text(s: str) -> str:
    return s.replace('\r\n', '\n').replace('\r', '\n').lstrip('\ufeff')


def list_sources(directory: pathlib.Path, suffix: str) -> List[str]:
    """Names of the ``suffix`` files in ``directory``, sorted; [] if absent."""
    if not directory.is_dir():
        print(f"- no {directory.name}/ directory found")
        return []
    return sorted(
        p.name for p in directory.iterdir()
        if p.is_file() and p.name.endswith(suffix)
    )


def parse_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None
    s = value.strip()
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            continue
    return None


def parse_date(value: Any) -> Optional[date]:
    dt = parse_datetime(value)
    return dt.date() if dt else None


def sort_instant(dt: datetime) -> datetime:
    """Naive UTC, so zoned and unzoned values compare."""
    if dt.tzinfo is not None:
        return dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def format_date(value: Any) -> str:
    """Long-form "Month D, YYYY" in English, whatever the process locale."""
    d = parse_date(value)
    if d is None:
        return str(value or "")
    return f"{MONTHS[d.month - 1]} {d.day}, {d.year}"


def iso_timestamp(now: datetime | None = None) -> str:
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def write_json(path: pathlib.Path, data: Dict[str, Any]) -> None:
    ensure_dir(path.parent)
    path.write_text(
        json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8"
    )
