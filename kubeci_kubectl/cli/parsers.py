"""CLI argument parsers and validators."""

from __future__ import annotations

from typing import Any

from ..environment.processor import split_csv


def parse_list_option(values: list[str] | None) -> list[str] | None:
    """Flatten repeatable options that may also hold comma-separated values."""
    if not values:
        return None
    return [item for value in values for item in split_csv(value)]


def collect_overrides(**options: Any) -> dict[str, Any]:
    """Keep only the options given on the command line."""
    return {name: value for name, value in options.items() if value is not None}
