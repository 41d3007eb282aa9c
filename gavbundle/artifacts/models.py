# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Core data structures for artifacts and the results of bundling them.

Coordinates are the addressing key for every bundle entry: the entry path of
any file is `coordinates.repository_path + target_name`.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class Coordinates:
    """Maven-style (group, artifact, version) identity. All three must be non-empty."""

    group_id: str
    artifact_id: str
    version: str

    def __post_init__(self) -> None:
        for name in ("group_id", "artifact_id", "version"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{name} must be a non-empty string")
            if "/" in value or "\\" in value:
                raise ValueError(f"{name} must not contain path separators: {value!r}")

        # Every field becomes a path segment; anything normpath would fold
        # changes the entry name and defeats duplicate detection.
        if any(not segment for segment in self.group_id.split(".")):
            raise ValueError(f"group_id has an empty segment: {self.group_id!r}")
        for name in ("artifact_id", "version"):
            if getattr(self, name) in (".", ".."):
                raise ValueError(f"{name} must not be a relative path segment")

    @property
    def repository_path(self) -> str:
        """`org/example/lib/1.0/` for `org.example:lib:1.0`."""
        return f"{self.group_id.replace('.', '/')}/{self.artifact_id}/{self.version}/"

    @property
    def base_file_name(self) -> str:
        return f"{self.artifact_id}-{self.version}"

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"


class ArtifactKind(str, Enum):
    DESCRIPTOR = "descriptor"
    BINARY = "binary"
    SOURCES = "sources"
    DOCS = "docs"
    SIGNATURE = "signature"
    CHECKSUM = "checksum"


@dataclass(frozen=True)
class ArtifactFile:
    """
    One logical file of an artifact: where it lives on disk and what it is
    called inside the bundle. Carries no content; existence is checked when
    the file is processed.
    """

    source: Path
    target_name: str
    kind: ArtifactKind

    @property
    def required(self) -> bool:
        return self.kind is ArtifactKind.DESCRIPTOR

    def exists(self) -> bool:
        return self.source.is_file()


@dataclass(frozen=True)
class ProjectResult:
    """What one project contributed to the bundle."""

    coordinates: Coordinates
    entries: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def entry_count(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class BundleResult:
    """Outcome of a successful batch: a sealed archive ready for upload."""

    bundle_path: Path
    projects: list[ProjectResult]
    sha256: str

    @property
    def entry_count(self) -> int:
        return sum(project.entry_count for project in self.projects)

    @property
    def warnings(self) -> list[str]:
        return [warning for project in self.projects for warning in project.warnings]
