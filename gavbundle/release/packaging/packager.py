# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Batch packager — bundles every configured project into a single archive.

One run, one bundle:

    <output>.zip
    ├─ org/example/core-bom/1.0.0/core-bom-1.0.0.pom
    ├─ org/example/core-bom/1.0.0/core-bom-1.0.0.pom.md5
    ├─ ...
    └─ org/example/extras-bom/1.0.0/extras-bom-1.0.0.pom.asc.sha1

The bundle is all-or-nothing. A coordinated release missing one of its
artifacts is unsafe to publish, so the first failure in any project stops
the batch, the archive handle is closed and the unfinished file is deleted.
Only a bundle that was finalized cleanly is ever returned to the caller.
"""

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Optional

from gavbundle.artifacts.collector import ArtifactCollector, CollectorOptions
from gavbundle.artifacts.models import BundleResult, ProjectResult
from gavbundle.config.exceptions import ConfigValidationError
from gavbundle.config.schema import GavBundleConfig
from gavbundle.descriptor.resolver import PomCoordinateResolver
from gavbundle.logging.logger import get_logger
from gavbundle.release.bundle.builder import ZipBundleBuilder
from gavbundle.release.deployment.service import DeploymentService
from gavbundle.release.exceptions import MissingArtifactError
from gavbundle.release.processing.processor import DefaultFileProcessor
from gavbundle.utils.filesystem import safe_delete
from gavbundle.utils.hashing import compute_sha256
from gavbundle.utils.paths import validate_path_within

_logger = get_logger(__name__)


def _resolve_project_dirs(projects_directory: Path, projects: Sequence[str]) -> list[Path]:
    """Check every project folder up front so a typo fails before the archive exists."""
    if not projects:
        raise ConfigValidationError("No projects specified; provide at least one project folder")

    if not projects_directory.is_dir():
        raise ConfigValidationError(f"Projects directory not found: {projects_directory}")

    project_dirs: list[Path] = []
    for name in projects:
        try:
            project_dir = validate_path_within(projects_directory / name, projects_directory)
        except ValueError as err:
            raise ConfigValidationError(str(err)) from err
        if not project_dir.is_dir():
            raise MissingArtifactError("Project directory not found", project_dir)
        project_dirs.append(project_dir)
    return project_dirs


def build_bundle(
    projects_directory: Path,
    projects: Sequence[str],
    output: Path,
    service: DeploymentService,
    descriptor_file_name: str = "pom.xml",
) -> BundleResult:
    """
    Process every project into one bundle and seal it.

    Args:
        projects_directory: Folder holding one sub-folder per project.
        projects: Sub-folder names, processed in this order.
        output: Path of the ZIP archive to write.
        service: Configured deployment service shared by all projects.
        descriptor_file_name: Descriptor name inside each project folder.

    Returns:
        BundleResult for the finalized archive.

    Raises:
        ConfigValidationError: Empty project list, missing projects directory,
            or a project name that escapes it.
        BundleError: Any failure while processing a project. The partial
            archive has been removed by the time this propagates.
    """
    project_dirs = _resolve_project_dirs(projects_directory, projects)

    _logger.info(
        "Creating combined deployment bundle",
        extra={"projects": len(project_dirs), "output": str(output)},
    )

    results: list[ProjectResult] = []
    finalized = False
    bundle = ZipBundleBuilder(output)
    try:
        with bundle:
            for project_dir in project_dirs:
                _logger.info("Processing project", extra={"project": project_dir.name})
                results.append(service.process_project(project_dir / descriptor_file_name, bundle))
        finalized = True
    finally:
        if not finalized:
            # An unfinalized archive must never reach the uploader.
            safe_delete(output)
            _logger.warning(
                "Discarded unfinished bundle after failure",
                extra={"output": str(output)},
            )

    result = BundleResult(
        bundle_path=output,
        projects=results,
        sha256=compute_sha256(output),
    )

    _logger.info(
        "Created combined bundle",
        extra={
            "output": str(output),
            "projects": len(results),
            "entries": result.entry_count,
            "warnings": len(result.warnings),
            "sha256": result.sha256[:16] + "...",
        },
    )
    return result


def create_bundle(
    config: GavBundleConfig,
    base_dir: Path,
    output: Optional[Path] = None,
    scratch_dir: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> BundleResult:
    """
    Wire the pipeline from config and build the bundle.

    Relative paths in the `bundle` section are resolved against `base_dir`
    (the CLI passes the directory holding the config file).

    Raises:
        ConfigValidationError: The config has no `bundle` section.
    """
    bundle_config = config.bundle
    if bundle_config is None:
        raise ConfigValidationError("Config has no 'bundle' section")

    processor = DefaultFileProcessor.from_config(config.signing, environ=environ)
    service = DeploymentService(
        resolver=PomCoordinateResolver(),
        collector=ArtifactCollector(CollectorOptions.from_config(bundle_config)),
        processor=processor,
        checksum_algorithms=bundle_config.checksum_algorithms,
        scratch_dir=scratch_dir,
    )

    _logger.info(
        "Bundle settings",
        extra={
            "signing": processor.signing_enabled(),
            "include_binary": bundle_config.include_binary,
            "include_sources": bundle_config.include_sources,
            "include_docs": bundle_config.include_docs,
            "checksums": list(bundle_config.checksum_algorithms),
        },
    )

    return build_bundle(
        projects_directory=base_dir / bundle_config.projects_directory,
        projects=bundle_config.projects,
        output=output if output is not None else base_dir / bundle_config.output,
        service=service,
        descriptor_file_name=bundle_config.descriptor_file_name,
    )
