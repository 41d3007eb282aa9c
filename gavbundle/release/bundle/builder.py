# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Bundle archive writer.

A bundle is one ZIP file per run. Every entry sits at the standard remote
repository location of its artifact:

    org/example/lib/1.0.0/lib-1.0.0.pom
    org/example/lib/1.0.0/lib-1.0.0.pom.md5
    ...

so the receiving portal can unpack it straight into a repository tree.

The archive is append-only. `zipfile` only warns on a repeated entry name and
keeps both copies, which would corrupt a multi-project bundle without anyone
noticing, so the builder tracks entry paths itself and refuses duplicates
before writing a byte.
"""

import shutil
import zipfile
from pathlib import Path
from types import TracebackType
from typing import Optional, Protocol

from gavbundle.artifacts.models import Coordinates
from gavbundle.logging.logger import get_logger
from gavbundle.release.exceptions import BundleWriteError, DuplicateEntryError
from gavbundle.utils.hashing import HASH_BUFFER_SIZE

logger = get_logger(__name__)


class BundleBuilder(Protocol):
    @property
    def path(self) -> Path: ...

    @property
    def entries(self) -> list[str]: ...

    def append(self, file_path: Path, coordinates: Coordinates, target_name: str) -> str: ...

    def close(self) -> None: ...


class ZipBundleBuilder:
    """
    Writes bundle entries into a ZIP archive.

    Use as a context manager so the archive is finalized on every exit path:

        with ZipBundleBuilder(path) as bundle:
            bundle.append(pom, coordinates, "lib-1.0.0.pom")
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._entries: list[str] = []
        self._seen: set[str] = set()
        self._closed = False

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self._archive = zipfile.ZipFile(path, mode="w", compression=zipfile.ZIP_DEFLATED)
        except OSError as err:
            raise BundleWriteError(f"Cannot create bundle {path}: {err}") from err

        logger.debug("Opened bundle", extra={"bundle": str(path)})

    @property
    def path(self) -> Path:
        return self._path

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def closed(self) -> bool:
        return self._closed

    def append(self, file_path: Path, coordinates: Coordinates, target_name: str) -> str:
        """
        Stream `file_path` into a new entry at `coordinates.repository_path + target_name`.

        Returns:
            The entry path that was written.

        Raises:
            DuplicateEntryError: The entry path is already in the bundle.
            BundleWriteError: Bundle closed, source unreadable, or write failed.
        """
        if self._closed:
            raise BundleWriteError(f"Bundle already closed: {self._path}")

        entry_path = coordinates.repository_path + target_name

        try:
            info = zipfile.ZipInfo.from_file(file_path, arcname=entry_path, strict_timestamps=False)
        except OSError as err:
            raise BundleWriteError(f"Cannot add {file_path} to bundle as {entry_path}: {err}") from err

        # zipfile normalizes the name; the stored name is the one that must be unique.
        if info.filename != entry_path:
            raise BundleWriteError(
                f"Entry path {entry_path!r} is not canonical (stored as {info.filename!r})"
            )
        if entry_path in self._seen:
            raise DuplicateEntryError(entry_path)

        try:
            info.compress_type = zipfile.ZIP_DEFLATED
            with open(file_path, "rb") as source, self._archive.open(info, mode="w") as target:
                shutil.copyfileobj(source, target, HASH_BUFFER_SIZE)
        except OSError as err:
            raise BundleWriteError(
                f"Cannot add {file_path} to bundle as {entry_path}: {err}"
            ) from err

        self._seen.add(entry_path)
        self._entries.append(entry_path)
        logger.debug("Added bundle entry", extra={"entry": entry_path})
        return entry_path

    def close(self) -> None:
        """Finalize the archive. Calling it again is a no-op."""
        if self._closed:
            return
        self._closed = True
        try:
            self._archive.close()
        except OSError as err:
            raise BundleWriteError(f"Cannot finalize bundle {self._path}: {err}") from err

        logger.debug(
            "Closed bundle",
            extra={"bundle": str(self._path), "entries": len(self._entries)},
        )

    def __enter__(self) -> "ZipBundleBuilder":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()
