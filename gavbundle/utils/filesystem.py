# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Filesystem helpers for gavbundle.

The bundling pipeline creates two kinds of throwaway files: checksum scratch
files (the archive writer only accepts file-backed entries) and detached
signatures written next to the signed artifact. Both must disappear before
the operation that created them returns, whatever happens in between.

Scratch files carry the `.gavbundle_tmp_` prefix so a leftover one is easy to
recognise and clean up by hand.
"""

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

SCRATCH_PREFIX = ".gavbundle_tmp_"


@contextmanager
def scratch_file(
    content: str,
    directory: Optional[Path] = None,
    encoding: str = "utf-8",
) -> Iterator[Path]:
    """
    Materialize `content` as a temporary file for the duration of a `with` block.

    The file is removed on exit, including when the body raises.

    Args:
        content: Text to write.
        directory: Where to create the file. Defaults to the system temp dir.
        encoding: Text encoding to use.

    Yields:
        Path to the written file.
    """
    if directory is not None:
        directory.mkdir(parents=True, exist_ok=True)

    fd, name = tempfile.mkstemp(
        prefix=SCRATCH_PREFIX,
        suffix=".tmp",
        dir=str(directory) if directory is not None else None,
    )
    temp_path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as handle:
            handle.write(content)
        yield temp_path
    finally:
        safe_delete(temp_path)


def safe_delete(file_path: Path) -> bool:
    """
    Delete a file if it exists. Returns whether anything was actually deleted.

    Never throws on a missing file.

    Raises:
        OSError: If the file exists but can't be deleted (permissions, etc).
    """
    try:
        file_path.unlink()
    except FileNotFoundError:
        return False
    return True
