"""Fold option rules over a tokenized kubectl command."""

from __future__ import annotations

import functools
import logging
from typing import Iterable, Sequence

from ..core.errors import FileIOError, TemplateError
from ..core.models import (
    FILENAME_FLAGS,
    NAMESPACE_FLAGS,
    FilesInjection,
    NamespaceInjection,
    OptionRule,
    TemplateFilesInjection,
)
from ..rendering.engine import render_template_file
from ..rendering.io import ScratchFiles

logger = logging.getLogger(__name__)


def tokenize(command: str) -> list[str]:
    """Split a command on single spaces. Quoting is not supported."""
    return command.split(" ")


def has_option(args: Sequence[str], aliases: Iterable[str]) -> bool:
    """Return True when any alias is present as an exact token."""
    return any(alias in args for alias in aliases)


def _inject_files(args: list[str], rule: FilesInjection) -> list[str]:
    if has_option(args, FILENAME_FLAGS):
        return args
    for path in rule.files:
        args = [*args, "-f", path]
    return args


def _inject_namespace(args: list[str], rule: NamespaceInjection) -> list[str]:
    if not rule.namespace or has_option(args, NAMESPACE_FLAGS):
        return args
    return [*args, "--namespace", rule.namespace]


def _inject_templates(
    args: list[str], rule: TemplateFilesInjection, scratch: ScratchFiles | None
) -> list[str]:
    if has_option(args, FILENAME_FLAGS) or not rule.templates:
        return args
    if scratch is None:
        raise ValueError("rendering template files requires a scratch area")

    for template_path in rule.templates:
        try:
            rendered = render_template_file(template_path, rule.context, scratch)
        except (TemplateError, FileIOError) as e:
            logger.error(f"Skipping template {template_path}: {e}")
            continue
        args = [*args, "-f", str(rendered)]
    return args


def apply_rule(
    args: list[str], rule: OptionRule, scratch: ScratchFiles | None = None
) -> list[str]:
    """Apply one option rule, returning the (possibly extended) arguments."""
    if isinstance(rule, FilesInjection):
        return _inject_files(args, rule)
    if isinstance(rule, NamespaceInjection):
        return _inject_namespace(args, rule)
    if isinstance(rule, TemplateFilesInjection):
        return _inject_templates(args, rule, scratch)
    raise TypeError(f"Unknown option rule: {rule!r}")


def assemble(
    command: str,
    rules: Sequence[OptionRule] = (),
    scratch: ScratchFiles | None = None,
) -> list[str]:
    """Build the kubectl argument list.

    Args:
        command: kubectl command without the binary, e.g. ``apply``
        rules: Option rules, applied in order
        scratch: Scratch area owning rendered template files

    Returns:
        Argument list for kubectl
    """
    return functools.reduce(
        lambda args, rule: apply_rule(args, rule, scratch), rules, tokenize(command)
    )
