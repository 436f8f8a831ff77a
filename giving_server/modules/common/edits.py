"""Partial edits: only the fields a caller sent are changed."""

from __future__ import annotations

from typing import Iterable, Optional

from giving_server.core.errors import ValidationError


def collect_edits(label: str, fields: dict[str, Optional[str]], required: Iterable[str] = ("name",)) -> dict[str, str]:
    """Drop unset fields; fields in ``required`` are stripped and may not be blank."""
    required = set(required)
    values: dict[str, str] = {}
    for name, value in fields.items():
        if value is None:
            continue
        if name in required:
            value = value.strip()
            if not value:
                raise ValidationError(f"{label.capitalize()} {name} must not be empty", name)
        values[name] = value
    return values


__all__ = ["collect_edits"]
