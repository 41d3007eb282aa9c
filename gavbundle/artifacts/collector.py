# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Artifact file collection.

Turns a project folder plus its coordinates into the ordered list of files
that should end up in the bundle. The collector never touches the disk:
whether a file is missing, and how loudly to complain, is decided by the
deployment service.
"""

from dataclasses import dataclass
from pathlib import Path

from gavbundle.artifacts.models import ArtifactFile, ArtifactKind, Coordinates
from gavbundle.config.schema import BundleConfig


@dataclass(frozen=True)
class CollectorOptions:
    """Inclusion toggles and naming conventions, fixed for a whole run."""

    include_binary: bool = False
    include_sources: bool = False
    include_docs: bool = False
    descriptor_file_name: str = "pom.xml"
    descriptor_suffix: str = ".pom"
    binary_suffix: str = ".jar"
    sources_suffix: str = "-sources.jar"
    docs_suffix: str = "-javadoc.jar"

    @classmethod
    def from_config(cls, config: BundleConfig) -> "CollectorOptions":
        return cls(
            include_binary=config.include_binary,
            include_sources=config.include_sources,
            include_docs=config.include_docs,
            descriptor_file_name=config.descriptor_file_name,
            descriptor_suffix=config.descriptor_suffix,
            binary_suffix=config.binary_suffix,
            sources_suffix=config.sources_suffix,
            docs_suffix=config.docs_suffix,
        )


class ArtifactCollector:
    def __init__(self, options: CollectorOptions) -> None:
        self.options = options

    def collect(self, project_dir: Path, coordinates: Coordinates) -> list[ArtifactFile]:
        """
        List the artifact files for one project.

        The descriptor always comes first, then binary, sources and docs for
        whichever toggles are on.
        """
        options = self.options
        base = coordinates.base_file_name

        artifacts = [
            ArtifactFile(
                source=project_dir / options.descriptor_file_name,
                target_name=base + options.descriptor_suffix,
                kind=ArtifactKind.DESCRIPTOR,
            )
        ]

        optional = (
            (options.include_binary, options.binary_suffix, ArtifactKind.BINARY),
            (options.include_sources, options.sources_suffix, ArtifactKind.SOURCES),
            (options.include_docs, options.docs_suffix, ArtifactKind.DOCS),
        )
        for enabled, suffix, kind in optional:
            if enabled:
                name = base + suffix
                artifacts.append(ArtifactFile(source=project_dir / name, target_name=name, kind=kind))

        return artifacts
