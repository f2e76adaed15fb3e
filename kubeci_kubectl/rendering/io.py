"""Scratch file handling for rendered templates and decoded credentials."""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import ExitStack
from pathlib import Path

from ..core.errors import FileIOError

logger = logging.getLogger(__name__)


def remove_file(path: Path) -> None:
    """Remove a scratch file, logging instead of raising on failure."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Failed to remove tmp file {path}: {e}")


class ScratchFiles:
    """Temporary files owned by one invocation.

    Every file is registered for removal as soon as it is created, and all of
    them are removed when the scratch area is closed.
    """

    def __init__(self, directory: Path | None = None) -> None:
        self.directory = directory
        self.paths: list[Path] = []
        self._stack = ExitStack()

    def __enter__(self) -> ScratchFiles:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._stack.close()
        self.paths.clear()

    def write(self, content: str | bytes, *, prefix: str, suffix: str = "") -> Path:
        """Write content to a new uniquely named file (mode 0600).

        Args:
            content: Text (written as UTF-8) or raw bytes
            prefix: File name prefix
            suffix: File name suffix, e.g. the source extension

        Returns:
            Path of the new file
        """
        try:
            data = content.encode("utf-8") if isinstance(content, str) else content
        except UnicodeEncodeError as e:
            raise FileIOError(f"content for {prefix} is not valid UTF-8: {e}") from e

        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=prefix,
                suffix=suffix,
                dir=str(self.directory) if self.directory else None,
            )
        except OSError as e:
            raise FileIOError(f"failed to create tmp file for {prefix}") from e

        path = Path(tmp_name)
        self._stack.callback(remove_file, path)
        self.paths.append(path)

        try:
            handle = os.fdopen(fd, "wb")
        except OSError as e:
            os.close(fd)
            remove_file(path)
            raise FileIOError(f"failed to open tmp file {path}") from e

        try:
            with handle:
                handle.write(data)
        except OSError as e:
            remove_file(path)
            raise FileIOError(f"failed to write tmp file {path}") from e

        logger.debug(f"Wrote {len(data)} byte(s) to {path}")
        return path
