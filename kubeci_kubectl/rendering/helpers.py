"""Helper functions available inside templates."""

from __future__ import annotations

import base64
import binascii
import datetime as dt
import logging
from types import MappingProxyType
from typing import Callable, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


def replace(s: str, old: str, new: str, n: int = -1) -> str:
    """Replace the first ``n`` occurrences of ``old`` (all when ``n < 0``)."""
    return s.replace(old, new, n)


def split(s: str, sep: str) -> list[str]:
    if sep == "":
        return list(s)
    return s.split(sep)


def trim(s: str, cutset: str) -> str:
    return s.strip(cutset)


def trim_prefix(s: str, prefix: str) -> str:
    return s.removeprefix(prefix)


def trim_suffix(s: str, suffix: str) -> str:
    return s.removesuffix(suffix)


def format_datetime(timestamp: float | int | str, layout: str, zone: str = "") -> str:
    """Format Unix epoch seconds with a strftime layout.

    An empty or unknown zone renders in the local timezone.
    """
    try:
        moment = dt.datetime.fromtimestamp(int(float(timestamp)), tz=dt.timezone.utc)
        local = moment.astimezone()
    except (OverflowError, OSError, ValueError) as e:
        raise ValueError(f"timestamp {timestamp!r} is not a valid Unix time: {e}") from e
    if not zone:
        return local.strftime(layout)

    try:
        location = ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.debug(f"Unknown timezone {zone!r}, using local time")
        return local.strftime(layout)

    return moment.astimezone(location).strftime(layout)


def to_title(s: str) -> str:
    """Map every letter to its title case, e.g. ``"go app"`` to ``"GO APP"``."""
    return "".join(c.title() for c in s)


def truncate(s: str, n: int) -> str:
    """Return at most the first ``n`` code points of ``s``."""
    if n < 0:
        raise ValueError(f"truncate length must not be negative, got {n}")
    if len(s) <= n:
        return s
    return s[:n]


def base64encode(s: str) -> str:
    return base64.b64encode(s.encode("utf-8")).decode("ascii")


def base64decode(s: str) -> str:
    """Decode standard base64, returning the input unchanged when invalid."""
    try:
        return base64.b64decode(s, validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        return s


HELPERS: Mapping[str, Callable[..., object]] = MappingProxyType(
    {
        "uppercase": str.upper,
        "lowercase": str.lower,
        "replace": replace,
        "split": split,
        "trim": trim,
        "trimPrefix": trim_prefix,
        "trimSuffix": trim_suffix,
        "toTitle": to_title,
        "datetime": format_datetime,
        "truncate": truncate,
        "base64encode": base64encode,
        "base64decode": base64decode,
    }
)
