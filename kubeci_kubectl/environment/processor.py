"""Environment variable processing and normalization."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

TemplateContext = Mapping[str, str]

_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")

ENV_FILE_VAR = "PLUGIN_ENV_FILE"


def to_pascal_case(name: str) -> str:
    """Convert an environment variable name to a template variable name.

    ``DRONE_COMMIT_SHA`` becomes ``DroneCommitSha`` and ``myVar`` becomes
    ``MyVar``. Words break at delimiters and at case changes.
    """
    words = _WORD_PATTERN.findall(name)
    return "".join(w[:1].upper() + w[1:].lower() for w in words)


def split_csv(raw: str) -> list[str]:
    """Split a comma-separated option value into stripped, non-empty items."""
    if not raw.strip():
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def build_context(environ: Mapping[str, str] | None = None) -> TemplateContext:
    """Build the read-only template context from environment variables.

    Args:
        environ: Variables to expose (default: the process environment)

    Returns:
        Mapping of PascalCase names to raw string values
    """
    source = os.environ if environ is None else environ
    logger.debug("Building template context from environment")

    variables: dict[str, str] = {}
    for key in sorted(source):
        name = to_pascal_case(key)
        if name:
            variables[name] = source[key]

    return MappingProxyType(variables)


def load_env_file(environ: Mapping[str, str] | None = None) -> Path | None:
    """Load the dotenv file named by ``PLUGIN_ENV_FILE`` into the environment.

    Variables already set in the environment are left untouched.

    Returns:
        The loaded file path, or None when no env file is configured
    """
    source = os.environ if environ is None else environ
    value = source.get(ENV_FILE_VAR, "")
    if not value:
        return None

    path = Path(value)
    if load_dotenv(path, override=False):
        logger.debug(f"Loaded environment from {path}")
    else:
        logger.warning(f"Environment file {path} not found or empty")
    return path
