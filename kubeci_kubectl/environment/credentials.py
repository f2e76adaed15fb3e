"""Cluster credential handling."""

from __future__ import annotations

import base64
import binascii
import logging
import os
from pathlib import Path
from typing import MutableMapping

from pydantic import SecretStr

from ..core.errors import CredentialDecodeError
from ..rendering.io import ScratchFiles

logger = logging.getLogger(__name__)

KUBECONFIG_VAR = "KUBECONFIG"


def scrub_environment(environ: MutableMapping[str, str] | None = None) -> None:
    """Remove the raw kubeconfig blob so it never reaches kubectl or templates."""
    target = os.environ if environ is None else environ
    target.pop(KUBECONFIG_VAR, None)


def write_kubeconfig(
    encoded: SecretStr | None, scratch: ScratchFiles, *, debug: bool = False
) -> Path | None:
    """Decode the base64 kubeconfig into a scratch file.

    Args:
        encoded: Base64 kubeconfig, or None for in-cluster credentials
        scratch: Scratch area that owns the decoded file
        debug: Log the decoded kubeconfig

    Returns:
        Path of the kubeconfig file, or None when using in-cluster credentials
    """
    blob = encoded.get_secret_value() if encoded is not None else ""
    if not blob:
        logger.info("Using in-cluster credentials")
        return None

    logger.info("Decoding kubeconfig from secret")
    try:
        # Wrapped base64 output is common in CI secrets.
        data = base64.b64decode("".join(blob.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise CredentialDecodeError(
            "failed to base64 decode kubeconfig from envvar"
        ) from e

    if debug:
        logger.debug(f"decoded KUBECONFIG:\n{data.decode('utf-8', errors='replace')}")

    return scratch.write(data, prefix="kubeconfig-")
