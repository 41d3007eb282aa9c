# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Deployment service — processes one project into a shared bundle.

For each project:
  1. resolve coordinates from the descriptor
  2. collect the candidate files
  3. skip missing optional files with a warning; fail on a missing descriptor
  4. append each file, its checksums, and (when signing) its signature plus
     the signature's checksums
  5. delete every signature produced for the project, success or not

Entry order within a project is fixed: descriptor first, then the remaining
candidates in collector order; per candidate the file, one checksum per
algorithm, then `.asc` and its checksums. Two runs over the same inputs
produce the same entry sequence.

Any exception aborts the whole batch. There is no per-project partial
success; the packager discards the unfinished bundle.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from gavbundle.artifacts.collector import ArtifactCollector
from gavbundle.artifacts.models import ArtifactFile, Coordinates, ProjectResult
from gavbundle.descriptor.resolver import CoordinateResolver
from gavbundle.logging.logger import get_logger
from gavbundle.release.bundle.builder import BundleBuilder
from gavbundle.release.exceptions import MissingArtifactError
from gavbundle.release.processing.processor import FileProcessor
from gavbundle.release.signing.signer import SIGNATURE_SUFFIX
from gavbundle.utils.filesystem import safe_delete, scratch_file
from gavbundle.utils.hashing import DEFAULT_ALGORITHMS

logger = get_logger(__name__)


class DeploymentService:
    def __init__(
        self,
        resolver: CoordinateResolver,
        collector: ArtifactCollector,
        processor: FileProcessor,
        checksum_algorithms: Sequence[str] = DEFAULT_ALGORITHMS,
        scratch_dir: Optional[Path] = None,
    ) -> None:
        self.resolver = resolver
        self.collector = collector
        self.processor = processor
        self.checksum_algorithms = tuple(name.lower() for name in checksum_algorithms)
        self.scratch_dir = scratch_dir

    def process_project(self, descriptor_path: Path, bundle: BundleBuilder) -> ProjectResult:
        """
        Add every file of one project to `bundle`.

        Args:
            descriptor_path: The project's descriptor; its folder is the project folder.
            bundle: The open bundle shared by the whole batch.

        Returns:
            ProjectResult listing the entries written and any warnings.

        Raises:
            MissingArtifactError: The descriptor is missing.
            DescriptorError: The descriptor can't produce coordinates.
            SigningError, BundleWriteError: Signing or archive failures.
        """
        if not descriptor_path.is_file():
            raise MissingArtifactError("Required descriptor not found", descriptor_path)

        coordinates = self.resolver.resolve(descriptor_path)
        logger.info("Adding project", extra={"coordinates": str(coordinates)})

        artifacts = self.collector.collect(descriptor_path.parent, coordinates)

        entries: list[str] = []
        warnings: list[str] = []
        signature_files: list[Path] = []

        try:
            for artifact in artifacts:
                if not artifact.exists():
                    if artifact.required:
                        raise MissingArtifactError(
                            f"Required {artifact.kind.value} file not found", artifact.source
                        )
                    message = f"{artifact.kind.value} file not found: {artifact.source}"
                    logger.warning(
                        "Optional file missing, skipping",
                        extra={
                            "coordinates": str(coordinates),
                            "kind": artifact.kind.value,
                            "path": str(artifact.source),
                        },
                    )
                    warnings.append(message)
                    continue

                logger.info(
                    "Adding file",
                    extra={"kind": artifact.kind.value, "file": artifact.target_name},
                )
                self._process_file(artifact, coordinates, bundle, entries, signature_files)
        finally:
            self._delete_signatures(signature_files)

        return ProjectResult(coordinates=coordinates, entries=entries, warnings=warnings)

    def _process_file(
        self,
        artifact: ArtifactFile,
        coordinates: Coordinates,
        bundle: BundleBuilder,
        entries: list[str],
        signature_files: list[Path],
    ) -> None:
        entries.append(bundle.append(artifact.source, coordinates, artifact.target_name))
        self._add_checksums(artifact.source, artifact.target_name, coordinates, bundle, entries)

        if not self.processor.signing_enabled():
            return

        signature = self.processor.sign(artifact.source)
        if signature is None:
            return

        signature_files.append(signature)
        signature_name = artifact.target_name + SIGNATURE_SUFFIX
        entries.append(bundle.append(signature, coordinates, signature_name))
        self._add_checksums(signature, signature_name, coordinates, bundle, entries)

    def _add_checksums(
        self,
        file_path: Path,
        target_name: str,
        coordinates: Coordinates,
        bundle: BundleBuilder,
        entries: list[str],
    ) -> None:
        for algorithm in self.checksum_algorithms:
            digest = self.processor.checksum(file_path, algorithm)
            with scratch_file(digest, directory=self.scratch_dir) as checksum_path:
                entries.append(bundle.append(checksum_path, coordinates, f"{target_name}.{algorithm}"))

    def _delete_signatures(self, signature_files: list[Path]) -> None:
        for signature in signature_files:
            try:
                safe_delete(signature)
            except OSError as err:
                # Already captured in the bundle; a stale file on disk is not fatal.
                logger.warning(
                    "Failed to delete signature file",
                    extra={"path": str(signature), "error": str(err)},
                )
