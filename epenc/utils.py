from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from pathlib import Path

_DIGITS_RE = re.compile(r"\d+")


def natural_sort_key(value: str) -> str:
    """Sort key that zero-pads numeric runs to 4 digits, so ``disc2`` < ``disc10``."""
    return _DIGITS_RE.sub(lambda m: f"{int(m.group(0)):04d}", value)


def natural_sorted(values: Iterable[str]) -> list[str]:
    return sorted(values, key=natural_sort_key)


def remap_path(path: str, remap: Mapping[str, str]) -> str:
    """Apply each substring replacement in *remap*, in order."""
    for search, replace in remap.items():
        path = path.replace(search, replace)
    return path


def resolve_disc_path(path: str, remap: Mapping[str, str], working_dir: Path | None = None) -> str:
    """Remap a disc path and anchor relative paths at *working_dir*."""
    remapped = remap_path(path, remap)
    if working_dir is not None and not Path(remapped).is_absolute():
        return str(working_dir / remapped)
    return remapped


def format_clock(seconds: float) -> str:
    """Format seconds as HH:MM:SS."""
    total = int(seconds)
    return f"{total // 3600:02d}:{(total % 3600) // 60:02d}:{total % 60:02d}"


def humanize_duration(seconds: float) -> str:
    """Format seconds as ``"  42m  5s"`` (minutes right-aligned to 3, seconds to 2)."""
    minutes = int(seconds // 60)
    secs = int(seconds) - minutes * 60
    return f"{minutes:>3}m {secs:>2}s"


def describe_duration(seconds: float) -> str:
    return f"{format_clock(seconds)} {humanize_duration(seconds)}"
