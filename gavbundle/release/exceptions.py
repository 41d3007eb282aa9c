# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Errors raised by the bundling pipeline.

Every one of these is fatal for the batch: the packager stops at the first
one, discards the unfinished archive and the CLI maps it to an exit code.
Missing optional artifacts and failed scratch-file cleanup are not errors;
they are logged and recorded on the project result instead.
"""

from pathlib import Path
from typing import Optional


class BundleError(Exception):
    """Base for all bundling failures."""


class DescriptorError(BundleError):
    """The project descriptor could not produce a usable identity."""


class DescriptorInvalidError(DescriptorError):
    """The descriptor is unreadable or not well-formed XML."""


class MissingCoordinateError(DescriptorError):
    """A coordinate field is still empty after falling back to the parent block."""

    def __init__(self, field_name: str, descriptor_path: Path) -> None:
        super().__init__(f"Missing or empty {field_name} in descriptor: {descriptor_path}")
        self.field_name = field_name
        self.descriptor_path = descriptor_path


class MissingArtifactError(BundleError):
    """A required file (the descriptor, or a project folder) is absent on disk."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class SigningError(BundleError):
    """The signing tool could not be run or exited non-zero."""

    def __init__(self, message: str, exit_code: Optional[int] = None, output: str = "") -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.output = output


class BundleWriteError(BundleError):
    """The archive could not be created, read from, or written to."""


class DuplicateEntryError(BundleWriteError):
    """An entry path was appended twice; the second write is refused."""

    def __init__(self, entry_path: str) -> None:
        super().__init__(f"Duplicate bundle entry: {entry_path}")
        self.entry_path = entry_path


class PublishError(BundleError):
    """Uploading the bundle or waiting for its deployment state failed."""

    def __init__(self, message: str, deployment_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.deployment_id = deployment_id
