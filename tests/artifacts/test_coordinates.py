# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for coordinates and the artifact models built on them.

The repository path is the addressing key for every bundle entry, so its
exact shape matters more than anything else in this module.
"""

from pathlib import Path

import pytest

from gavbundle.artifacts.models import (
    ArtifactFile,
    ArtifactKind,
    BundleResult,
    Coordinates,
    ProjectResult,
)


class TestCoordinates:
    def test_repository_path_replaces_group_dots(self) -> None:
        coordinates = Coordinates("org.example", "lib", "1.0")
        assert coordinates.repository_path == "org/example/lib/1.0/"

    def test_single_segment_group(self) -> None:
        assert Coordinates("acme", "tool", "2.3.4").repository_path == "acme/tool/2.3.4/"

    def test_dots_in_artifact_and_version_are_kept(self) -> None:
        coordinates = Coordinates("io.x", "core.api", "1.0.0-rc.1")
        assert coordinates.repository_path == "io/x/core.api/1.0.0-rc.1/"

    def test_base_file_name(self) -> None:
        assert Coordinates("org.example", "lib", "1.0").base_file_name == "lib-1.0"

    def test_str_is_colon_joined(self) -> None:
        assert str(Coordinates("org.example", "lib", "1.0")) == "org.example:lib:1.0"

    @pytest.mark.parametrize(
        "fields",
        [("", "lib", "1.0"), ("org.example", "  ", "1.0"), ("org.example", "lib", "")],
    )
    def test_empty_field_rejected(self, fields: tuple[str, str, str]) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            Coordinates(*fields)

    @pytest.mark.parametrize(
        "fields",
        [
            ("org..example", "lib", "1.0"),
            (".org.example", "lib", "1.0"),
            ("org.example.", "lib", "1.0"),
            ("org/example", "lib", "1.0"),
            ("org.example", "li\\b", "1.0"),
            ("org.example", "..", "1.0"),
            ("org.example", "lib", "."),
            ("..", "..", ".."),
        ],
    )
    def test_non_canonical_path_rejected(self, fields: tuple[str, str, str]) -> None:
        with pytest.raises(ValueError):
            Coordinates(*fields)

    def test_distinct_coordinates_have_distinct_paths(self) -> None:
        first = Coordinates("org.example", "lib", "1.0")
        second = Coordinates("org.example.lib", "lib", "1.0")
        assert first.repository_path != second.repository_path

    def test_is_hashable_and_comparable(self) -> None:
        a = Coordinates("org.example", "lib", "1.0")
        b = Coordinates("org.example", "lib", "1.0")
        assert a == b
        assert len({a, b}) == 1


class TestArtifactFile:
    def test_only_descriptor_is_required(self, tmp_path: Path) -> None:
        for kind in ArtifactKind:
            artifact = ArtifactFile(tmp_path / "x", "x", kind)
            assert artifact.required is (kind is ArtifactKind.DESCRIPTOR)

    def test_exists_checks_for_regular_file(self, tmp_path: Path) -> None:
        present = tmp_path / "lib-1.0.jar"
        present.write_bytes(b"jar")
        assert ArtifactFile(present, present.name, ArtifactKind.BINARY).exists()
        assert not ArtifactFile(tmp_path / "gone.jar", "gone.jar", ArtifactKind.BINARY).exists()
        assert not ArtifactFile(tmp_path, "dir", ArtifactKind.BINARY).exists()


class TestResults:
    def test_bundle_result_aggregates_projects(self, tmp_path: Path) -> None:
        first = ProjectResult(
            Coordinates("org.example", "a", "1.0"),
            entries=["org/example/a/1.0/a-1.0.pom"],
        )
        second = ProjectResult(
            Coordinates("org.example", "b", "1.0"),
            entries=["org/example/b/1.0/b-1.0.pom", "org/example/b/1.0/b-1.0.pom.md5"],
            warnings=["binary file not found: b-1.0.jar"],
        )
        result = BundleResult(tmp_path / "bundle.zip", [first, second], sha256="0" * 64)

        assert result.entry_count == 3
        assert result.warnings == ["binary file not found: b-1.0.jar"]
        assert second.entry_count == 2
