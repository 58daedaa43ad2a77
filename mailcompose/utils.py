"""Utility helpers shared across modules."""

from __future__ import annotations

import re
import time
from typing import Sequence

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")
_last_txn_millis = 0


def split_list(value: str | Sequence[str] | None, coerce_lower: bool = True) -> list[str]:
    """Turn comma/semicolon separated strings into cleaned lists."""
    if value is None:
        return []
    if isinstance(value, str):
        items = re.split(r"[;,]", value)
    else:
        items = list(value)
    cleaned: list[str] = []
    for item in items:
        trimmed = item.strip()
        if not trimmed:
            continue
        cleaned.append(trimmed.lower() if coerce_lower else trimmed)
    return cleaned


def parse_recipients(value: str | None) -> str:
    """Normalize a comma/semicolon separated address list into "a,b,c"."""
    return ",".join(split_list(value, coerce_lower=False))


def format_file_size(num_bytes: int) -> str:
    """Human readable size with two decimals at most, e.g. "5 MB"."""
    if num_bytes <= 0:
        return "0 Bytes"
    exponent = 0
    while exponent < len(_SIZE_UNITS) - 1 and num_bytes >= 1024 ** (exponent + 1):
        exponent += 1
    value = round(num_bytes / 1024**exponent, 2)
    if value == int(value):
        value = int(value)
    return f"{value} {_SIZE_UNITS[exponent]}"


def generate_txn_ref_no() -> str:
    """Time based transaction reference; strictly increasing within the process."""
    global _last_txn_millis
    millis = max(time.time_ns() // 1_000_000, _last_txn_millis + 1)
    _last_txn_millis = millis
    return f"Email-{millis}"


def parse_rename_args(items: list[str] | None) -> list[tuple[int, str]]:
    """Parse ["0=new.png", "2=b.pdf"] style CLI values into (index, name) pairs."""
    parsed: list[tuple[int, str]] = []
    for item in items or []:
        index, sep, name = item.partition("=")
        if not sep or not index.strip().isdigit() or not name.strip():
            raise ValueError(f"Expected INDEX=NAME, got {item!r}")
        parsed.append((int(index), name.strip()))
    return parsed
