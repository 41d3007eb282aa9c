# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Bundle checksum verification.

Re-reads a finished bundle and checks that every checksum entry
(`<entry>.<algorithm>`) holds the digest of the entry it sits next to, and
that every primary entry carries a checksum for each expected algorithm.
Signatures count as primary entries here; they are checksummed exactly like
the files they sign.

Reports ALL mismatches and gaps, not just the first one.
"""

import zipfile
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from gavbundle.logging.logger import get_logger
from gavbundle.utils.hashing import DEFAULT_ALGORITHMS, SUPPORTED_ALGORITHMS, compute_digest_stream

_logger = get_logger(__name__)


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of a bundle verification run."""

    is_valid: bool
    checked_count: int
    mismatches: list[str] = field(default_factory=list)
    missing_files: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def _split_checksum_name(entry_name: str) -> tuple[str, str] | None:
    """`a/b.pom.sha1` -> (`a/b.pom`, `sha1`); None for non-checksum entries."""
    covered, dot, suffix = entry_name.rpartition(".")
    if dot and suffix in SUPPORTED_ALGORITHMS and covered:
        return covered, suffix
    return None


def verify_bundle(
    bundle_path: Path,
    algorithms: Sequence[str] = DEFAULT_ALGORITHMS,
) -> VerificationResult:
    """
    Verify the checksum entries of a bundle archive.

    Args:
        bundle_path: Path to the ZIP bundle.
        algorithms: Digests every primary entry must carry.

    Returns:
        VerificationResult with pass/fail status and details.
    """
    if not bundle_path.is_file():
        return VerificationResult(
            is_valid=False,
            checked_count=0,
            errors=[f"Bundle not found: {bundle_path}"],
        )

    mismatches: list[str] = []
    missing_files: list[str] = []
    checked = 0

    try:
        with zipfile.ZipFile(bundle_path) as archive:
            names = [name for name in archive.namelist() if not name.endswith("/")]
            present = set(names)

            for name in names:
                split = _split_checksum_name(name)
                if split is None:
                    for algorithm in algorithms:
                        expected_entry = f"{name}.{algorithm}"
                        if expected_entry not in present:
                            missing_files.append(expected_entry)
                    continue

                covered, algorithm = split
                if covered not in present:
                    missing_files.append(covered)
                    _logger.error("Checksum without its entry", extra={"entry": name})
                    continue

                expected = archive.read(name).decode("ascii", errors="replace").strip().lower()
                with archive.open(covered) as stream:
                    actual = compute_digest_stream(stream, algorithm)
                checked += 1

                if actual != expected:
                    mismatches.append(name)
                    _logger.error(
                        "Checksum mismatch",
                        extra={"entry": name, "expected": expected, "actual": actual},
                    )
    except (zipfile.BadZipFile, OSError) as err:
        return VerificationResult(
            is_valid=False,
            checked_count=checked,
            mismatches=mismatches,
            missing_files=missing_files,
            errors=[f"Cannot read bundle {bundle_path}: {err}"],
        )

    is_valid = not mismatches and not missing_files

    if is_valid:
        _logger.info("All bundle checksums verified", extra={"checked_count": checked})
    else:
        _logger.error(
            "Bundle verification failed",
            extra={"mismatches": len(mismatches), "missing": len(missing_files)},
        )

    return VerificationResult(
        is_valid=is_valid,
        checked_count=checked,
        mismatches=mismatches,
        missing_files=missing_files,
    )
