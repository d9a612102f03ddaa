"""
Source sinks — where generated units are written.

A sink hands out one writable handle per destination name.  The handle
is a context manager: it is opened, written and closed inside a single
``with`` block, and the destination only becomes visible once the block
exits cleanly.

Two sinks ship with the package:

    - FileSystemSink  writes ``<root>/a/b/PersonBuilder.java`` (atomic rename)
    - MemorySink      keeps the text in a dict (previews and tests)

A sink instance is scoped to one generation pass.  Asking it for the
same destination twice is an error.
"""

from __future__ import annotations

import io
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from pathlib import Path
from typing import TextIO

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """Raised when a generated unit cannot be written to its destination.

    Fatal for the whole generation pass; never retried.
    """


def _new_file_mode() -> int:
    """Mode a plain ``open()`` would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def source_path(output_qualified_name: str) -> str:
    """Relative path of a unit: ``a.b.PersonBuilder`` → ``a/b/PersonBuilder.java``."""
    return output_qualified_name.replace(".", "/") + ".java"


class SourceSink(ABC):
    """Destination for generated source text."""

    def __init__(self) -> None:
        self._opened: set[str] = set()

    @abstractmethod
    def open(self, output_qualified_name: str) -> AbstractContextManager[TextIO]:
        """Open the destination for ``output_qualified_name`` for writing.

        Raises:
            GenerationError: The destination cannot be opened.
        """

    def _claim(self, output_qualified_name: str) -> None:
        if output_qualified_name in self._opened:
            raise GenerationError(
                f"Destination already created in this pass: {output_qualified_name}"
            )

    @property
    def opened(self) -> list[str]:
        """Destination names opened so far, sorted."""
        return sorted(self._opened)


class FileSystemSink(SourceSink):
    """Write units under a root directory, one ``.java`` file each.

    Files are written to a temp file in the target directory and renamed
    into place, so a failed write never leaves a partial file behind.
    """

    def __init__(self, root: Path, *, overwrite: bool = True) -> None:
        super().__init__()
        self.root = root
        self.overwrite = overwrite
        self.written: list[Path] = []

    def path_for(self, output_qualified_name: str) -> Path:
        return self.root / source_path(output_qualified_name)

    @contextmanager
    def open(self, output_qualified_name: str) -> Iterator[TextIO]:
        self._claim(output_qualified_name)
        target = self.path_for(output_qualified_name)

        if target.exists() and not self.overwrite:
            raise GenerationError(
                f"File already exists: {target} (set overwrite: true to replace)"
            )

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=target.parent,
                prefix=f".{target.stem}_",
                suffix=".tmp",
            )
        except OSError as e:
            raise GenerationError(f"Cannot open {target} for writing: {e}") from e

        self._opened.add(output_qualified_name)
        tmp = Path(tmp_path)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
                yield handle
            # mkstemp creates 0600
            tmp.chmod(_new_file_mode())
            tmp.replace(target)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise

        self.written.append(target)
        logger.info("Wrote generated source: %s", target)


class MemorySink(SourceSink):
    """Keep generated text in memory, keyed by qualified name."""

    def __init__(self) -> None:
        super().__init__()
        self.sources: dict[str, str] = {}

    @contextmanager
    def open(self, output_qualified_name: str) -> Iterator[TextIO]:
        self._claim(output_qualified_name)
        self._opened.add(output_qualified_name)

        buffer = io.StringIO()
        with buffer:
            yield buffer
            self.sources[output_qualified_name] = buffer.getvalue()
