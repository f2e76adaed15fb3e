"""Template rendering engine."""

from __future__ import annotations

import functools
import logging
import re
from pathlib import Path

from jinja2 import Environment, StrictUndefined, TemplateError, TemplateSyntaxError
from jinja2.ext import Extension

from ..core.errors import (
    ConfigError,
    FileIOError,
    TemplateExecuteError,
    TemplateParseError,
)
from ..environment.processor import TemplateContext
from .helpers import HELPERS
from .io import ScratchFiles

logger = logging.getLogger(__name__)

TEMPLATE_OPEN = "{{"
TEMPLATE_CLOSE = "}}"

_TAG_PATTERN = re.compile(r"{{.*?}}|{%.*?%}", re.DOTALL)
_DOT_REFERENCE = re.compile(r"(?<![\w)\].'\"])\.([A-Za-z_]\w*)")


class DotReferenceExtension(Extension):
    """Accept Go-style ``.Name`` variable references inside template tags.

    ``{{ .DroneCommit }}`` is rewritten to ``{{ DroneCommit }}`` before
    parsing. Attribute access such as ``item.name`` is left alone.
    """

    def preprocess(
        self, source: str, name: str | None, filename: str | None = None
    ) -> str:
        return _TAG_PATTERN.sub(
            lambda match: _DOT_REFERENCE.sub(r"\1", match.group(0)), source
        )


@functools.lru_cache(maxsize=1)
def template_environment() -> Environment:
    """Return the shared Jinja2 environment with the helper set installed."""
    env = Environment(
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        extensions=[DotReferenceExtension],
    )
    env.globals.update(HELPERS)
    env.filters.update(HELPERS)
    return env


def render(body: str, context: TemplateContext) -> str:
    """Render a template body against the given context.

    Args:
        body: Template source text
        context: Template variables

    Returns:
        Rendered text

    Raises:
        TemplateParseError: The body is not a valid template
        TemplateExecuteError: A variable or helper failed while rendering
    """
    env = template_environment()
    try:
        template = env.from_string(body)
    except TemplateSyntaxError as e:
        raise TemplateParseError(f"failed to parse template: {e}") from e

    try:
        return template.render(dict(context))
    except (
        TemplateError,
        TypeError,
        ValueError,
        ArithmeticError,
        LookupError,
        AttributeError,
        OSError,
    ) as e:
        raise TemplateExecuteError(f"failed to execute template: {e}") from e


def is_template(text: str) -> bool:
    return TEMPLATE_OPEN in text and TEMPLATE_CLOSE in text


def render_command(command: str, context: TemplateContext) -> str:
    """Validate the kubectl command and render it when it holds template markers."""
    if not command:
        raise ConfigError("no kubectl command specified")

    if not is_template(command):
        return command

    logger.debug("Rendering kubectl command template")
    try:
        return render(command, context)
    except TemplateParseError as e:
        raise TemplateParseError(f"kubectl command: {e}") from e
    except TemplateExecuteError as e:
        raise TemplateExecuteError(f"kubectl command: {e}") from e


def render_template_file(
    template_path: Path, context: TemplateContext, scratch: ScratchFiles
) -> Path:
    """Render a manifest template into a new scratch file.

    Args:
        template_path: Template source file
        context: Template variables
        scratch: Scratch area that owns the rendered file

    Returns:
        Path of the rendered copy
    """
    logger.debug(f"Rendering template: {template_path}")

    try:
        body = template_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileIOError(f"failed to read template {template_path}: {e}") from e

    rendered = render(body, context)
    output_path = scratch.write(
        rendered, prefix=f"{template_path.stem}-", suffix=template_path.suffix
    )
    logger.info(f"Rendered {template_path} → {output_path}")

    return output_path
