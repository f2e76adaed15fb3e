"""kubectl process execution."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Iterable, Mapping

from ..core.errors import ExecutionError
from ..environment.credentials import KUBECONFIG_VAR

logger = logging.getLogger(__name__)

BINARY = "kubectl"


def ensure(name: str) -> str:
    """Resolve an executable on PATH."""
    path = shutil.which(name)
    if path is None:
        raise ExecutionError(f"missing dependency: {name}")
    return path


def format_command(args: Iterable[str], binary: str = BINARY) -> str:
    return "+ " + " ".join([binary, *args])


def child_environment(
    kubeconfig: Path | None, environ: Mapping[str, str] | None = None
) -> dict[str, str]:
    """Environment for kubectl: inherited, with KUBECONFIG only when set."""
    env = dict(os.environ if environ is None else environ)
    env.pop(KUBECONFIG_VAR, None)
    if kubeconfig is not None:
        env[KUBECONFIG_VAR] = str(kubeconfig)
    return env


def run_kubectl(
    args: Iterable[str],
    *,
    kubeconfig: Path | None = None,
    binary: str = BINARY,
) -> int:
    """
    Run kubectl once with inherited stdio and return its exit status.
    The command line is echoed to stdout before it starts. A child killed
    by signal N reports 128 + N, as a shell does.
    """
    argv = list(args)
    executable = ensure(binary)

    sys.stdout.write(f"{format_command(argv, binary)}\n")
    sys.stdout.flush()

    try:
        result = subprocess.run(
            [executable, *argv],
            env=child_environment(kubeconfig),
            check=False,
        )
    except OSError as e:
        raise ExecutionError(f"failed to start {binary}: {e}") from e

    return exit_status(result.returncode, binary)


def exit_status(returncode: int, binary: str = BINARY) -> int:
    if returncode < 0:
        logger.error(f"{binary} was killed by signal {-returncode}")
        return 128 - returncode
    if returncode != 0:
        logger.debug(f"{binary} exited with code {returncode}")
    return returncode
