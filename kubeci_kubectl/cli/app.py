"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from typing_extensions import Annotated

from ..arguments import assemble
from ..core.errors import ConfigError, PluginError
from ..core.models import FilesInjection, NamespaceInjection, TemplateFilesInjection
from ..core.settings import PluginSettings
from ..environment import credentials, processor
from ..execution import runner
from ..rendering import engine
from ..rendering.io import ScratchFiles
from .parsers import collect_overrides, parse_list_option

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="kubeci-kubectl",
    help="Run kubectl in your pipeline.",
    add_completion=False,
)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )
    logging.getLogger().setLevel(logging.DEBUG if debug else logging.INFO)


def load_settings(**overrides: object) -> PluginSettings:
    try:
        return PluginSettings().with_overrides(**overrides)
    except ValidationError as e:
        raise ConfigError(f"invalid plugin settings: {e}") from e


def execute(settings: PluginSettings) -> int:
    """Assemble and run kubectl for one invocation.

    Args:
        settings: Plugin settings

    Returns:
        kubectl's exit code, or 0 for a dry run
    """
    credentials.scrub_environment()
    context = processor.build_context()

    command = engine.render_command(settings.kubectl, context)

    with ScratchFiles() as scratch:
        kubeconfig = credentials.write_kubeconfig(
            settings.kubeconfig, scratch, debug=settings.debug
        )

        args = assemble(
            command,
            [
                FilesInjection(files=settings.files),
                NamespaceInjection(namespace=settings.namespace),
                TemplateFilesInjection(
                    templates=[Path(t) for t in settings.templates],
                    context=dict(context),
                ),
            ],
            scratch,
        )

        if settings.dry_run:
            typer.echo(runner.format_command(args))
            return 0

        return runner.run_kubectl(args, kubeconfig=kubeconfig)


@app.command()
def run(
    kubectl: Annotated[
        Optional[str],
        typer.Option(
            "--kubectl",
            help="The kubectl command to execute (env: PLUGIN_KUBECTL).",
            metavar="COMMAND",
        ),
    ] = None,
    files: Annotated[
        Optional[List[str]],
        typer.Option(
            "--files",
            help="The files to use with kubectl (env: PLUGIN_FILES). Repeatable.",
            metavar="PATH",
        ),
    ] = None,
    namespace: Annotated[
        Optional[str],
        typer.Option(
            "--namespace",
            help="The namespace used by kubectl (env: PLUGIN_NAMESPACE).",
        ),
    ] = None,
    templates: Annotated[
        Optional[List[str]],
        typer.Option(
            "--templates",
            help="The template files to use with kubectl (env: PLUGIN_TEMPLATES). Repeatable.",
            metavar="PATH",
        ),
    ] = None,
    dry_run: Annotated[
        Optional[bool],
        typer.Option(
            "--dry-run/--no-dry-run",
            help="Don't actually call kubectl (env: PLUGIN_DRY_RUN).",
            show_default=False,
        ),
    ] = None,
    debug: Annotated[
        Optional[bool],
        typer.Option(
            "--debug/--no-debug",
            help="Print out some sensitive debug info (env: PLUGIN_DEBUG).",
            show_default=False,
        ),
    ] = None,
) -> None:
    """Run kubectl with options taken from the pipeline environment."""
    configure_logging(bool(debug))
    processor.load_env_file()

    try:
        settings = load_settings(
            **collect_overrides(
                kubectl=kubectl,
                files=parse_list_option(files),
                namespace=namespace,
                templates=parse_list_option(templates),
                dry_run=dry_run,
                debug=debug,
            )
        )
        configure_logging(settings.debug)
        code = execute(settings)
    except PluginError as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e

    raise typer.Exit(code=code)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
