# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for gavbundle tests.

Fixtures here are available to every test file automatically. The project
factory lays out folders the way a real batch looks on disk, and the fake
signer stands in for gpg so signed bundles can be built without a keyring.
"""

import stat
import sys
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

_FAKE_SIGNER_SCRIPT = textwrap.dedent("""\
    import sys

    args = sys.argv[1:]
    output = args[args.index("--output") + 1]
    target = args[-1]
    with open(target, "rb") as handle:
        size = len(handle.read())
    with open(output, "w", encoding="utf-8") as handle:
        handle.write("-----BEGIN PGP SIGNATURE-----\\n")
        handle.write(f"fake signature over {size} bytes\\n")
        handle.write("-----END PGP SIGNATURE-----\\n")
""")


def _write_executable(path: Path, body: str) -> Path:
    path.write_text(body, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture()
def fake_signer(tmp_path: Path) -> Path:
    """An executable that behaves like `gpg --detach-sign --armor --output X FILE`."""
    tools = tmp_path / "tools"
    tools.mkdir(exist_ok=True)
    script = tools / "fake_gpg.py"
    script.write_text(_FAKE_SIGNER_SCRIPT, encoding="utf-8")
    return _write_executable(
        tools / "fake-gpg",
        f'#!/bin/sh\nexec "{sys.executable}" "{script}" "$@"\n',
    )


@pytest.fixture()
def failing_signer(tmp_path: Path) -> Path:
    """An executable that always exits with status 2."""
    tools = tmp_path / "tools"
    tools.mkdir(exist_ok=True)
    return _write_executable(tools / "broken-gpg", "#!/bin/sh\necho 'no secret key' >&2\nexit 2\n")


def write_pom(
    path: Path,
    group_id: str | None = "org.example",
    artifact_id: str | None = "demo",
    version: str | None = "1.0.0",
    parent: tuple[str, str, str] | None = None,
) -> Path:
    """Write a minimal namespaced pom.xml; pass None to leave a field out."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<project xmlns="http://maven.apache.org/POM/4.0.0">',
        "  <modelVersion>4.0.0</modelVersion>",
    ]
    if parent is not None:
        lines += [
            "  <parent>",
            f"    <groupId>{parent[0]}</groupId>",
            f"    <artifactId>{parent[1]}</artifactId>",
            f"    <version>{parent[2]}</version>",
            "  </parent>",
        ]
    if group_id is not None:
        lines.append(f"  <groupId>{group_id}</groupId>")
    if artifact_id is not None:
        lines.append(f"  <artifactId>{artifact_id}</artifactId>")
    if version is not None:
        lines.append(f"  <version>{version}</version>")
    lines += ["  <packaging>pom</packaging>", "</project>", ""]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


ProjectFactory = Callable[..., Path]


@pytest.fixture()
def pom_writer() -> Callable[..., Path]:
    """Expose `write_pom` to tests that need descriptors outside a project folder."""
    return write_pom


@pytest.fixture()
def make_project(tmp_path: Path) -> ProjectFactory:
    """
    Create `<tmp>/projects/<name>/` with a pom.xml and, on request, the
    binary, sources and javadoc jars named after the coordinates.
    """

    def _make(
        name: str = "demo",
        group_id: str = "org.example",
        artifact_id: str | None = None,
        version: str = "1.0.0",
        binary: bool = False,
        sources: bool = False,
        docs: bool = False,
    ) -> Path:
        artifact = artifact_id or name
        project_dir = tmp_path / "projects" / name
        project_dir.mkdir(parents=True, exist_ok=True)
        write_pom(project_dir / "pom.xml", group_id, artifact, version)

        base = f"{artifact}-{version}"
        if binary:
            (project_dir / f"{base}.jar").write_bytes(b"PK\x03\x04 binary " + base.encode())
        if sources:
            (project_dir / f"{base}-sources.jar").write_bytes(b"PK\x03\x04 sources " + base.encode())
        if docs:
            (project_dir / f"{base}-javadoc.jar").write_bytes(b"PK\x03\x04 javadoc " + base.encode())
        return project_dir

    return _make


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """
    Create a minimal valid config YAML file in a temp directory.

    This is the smallest config that passes schema validation.
    Tests that need specific config values should write their own files.
    """
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          project_name: "gavbundle-test"
          log_level: "DEBUG"
    """)
    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """A config file that's valid YAML but fails schema validation (missing required field)."""
    config_content = textwrap.dedent("""\
        global:
          project_name: "gavbundle-test"
    """)
    config_file = tmp_path / "invalid_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    """A file that isn't valid YAML at all."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file
