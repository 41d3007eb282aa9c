# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for gavbundle.

Every config section gets its own frozen pydantic model. Frozen means once
you create it, you cannot mutate it: the toggles that shape a bundle (which
files to include, whether to sign, which digests to publish) are fixed for
the whole run and passed explicitly into the pipeline.

The models use pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked

Secrets never live in the file. Signing passphrases and portal credentials
are read from the environment variables named here, at the moment they are
needed.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from gavbundle.utils.hashing import DEFAULT_ALGORITHMS, SUPPORTED_ALGORITHMS


class GlobalConfig(BaseModel):
    """Cross-cutting settings: identity of the run and observability."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        description="Schema version for compatibility tracking, e.g. '1.0.0'"
    )
    project_name: str = Field(
        default="gavbundle", description="Human-readable identifier for this release run"
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output",
    )


class BundleConfig(BaseModel):
    """
    What goes into the bundle and where it is written.

    `projects` are directory names under `projects_directory`; each one holds
    a descriptor plus whichever optional artifacts are enabled below.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    projects_directory: str = Field(description="Directory containing one folder per project")
    projects: list[str] = Field(
        min_length=1,
        description="Project folder names, bundled in this order",
    )
    output: str = Field(
        default="target/custom-publishing/custom-deployment-bundle.zip",
        description="Path of the ZIP bundle to produce",
    )
    descriptor_file_name: str = Field(
        default="pom.xml", description="Descriptor file name inside each project folder"
    )
    descriptor_suffix: str = Field(
        default=".pom", description="Suffix of the descriptor entry inside the bundle"
    )
    include_binary: bool = Field(default=False, description="Bundle <artifact>-<version>.jar")
    include_sources: bool = Field(default=False, description="Bundle the sources jar")
    include_docs: bool = Field(default=False, description="Bundle the javadoc jar")
    binary_suffix: str = Field(default=".jar")
    sources_suffix: str = Field(default="-sources.jar")
    docs_suffix: str = Field(default="-javadoc.jar")
    checksum_algorithms: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ALGORITHMS),
        min_length=1,
        description="Digest names; each produces a `<file>.<name>` entry",
    )

    @field_validator("checksum_algorithms")
    @classmethod
    def _check_algorithms(cls, value: list[str]) -> list[str]:
        normalized = [name.lower() for name in value]
        unknown = [name for name in normalized if name not in SUPPORTED_ALGORITHMS]
        if unknown:
            raise ValueError(
                f"Unsupported checksum algorithm(s) {unknown}; "
                f"supported: {sorted(SUPPORTED_ALGORITHMS)}"
            )
        if len(set(normalized)) != len(normalized):
            raise ValueError("checksum_algorithms must not repeat a digest")
        return normalized

    @field_validator("projects")
    @classmethod
    def _check_projects(cls, value: list[str]) -> list[str]:
        for name in value:
            if not name.strip():
                raise ValueError("project names must be non-empty")
        if len(set(value)) != len(value):
            raise ValueError("projects must not list the same folder twice")
        return value


class SigningConfig(BaseModel):
    """Detached signature generation through an external GnuPG-compatible tool."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    enabled: bool = Field(default=True, description="Sign every bundled file")
    executable: str = Field(default="gpg", description="Signing tool to invoke")
    key_id: Optional[str] = Field(
        default=None, description="Key to sign with (passed as --local-user)"
    )
    passphrase_env: Optional[str] = Field(
        default="GPG_PASSPHRASE",
        description="Environment variable holding the key passphrase, if any",
    )


class PublishConfig(BaseModel):
    """Where and how a finished bundle is handed to the publishing portal."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    base_url: str = Field(default="https://central.sonatype.com")
    deployment_name: Optional[str] = Field(
        default=None,
        description="Human-readable deployment name; defaults to the first project's coordinates",
    )
    auto_publish: bool = Field(
        default=False,
        description="Publish automatically once validated instead of holding for review",
    )
    wait_until: Literal["UPLOADED", "VALIDATED", "PUBLISHED"] = Field(default="VALIDATED")
    wait_max_seconds: int = Field(default=300, ge=1)
    polling_interval_seconds: int = Field(default=5, ge=1)
    token_auth: bool = Field(default=True, description="Bearer user token instead of basic auth")
    username_env: str = Field(default="CENTRAL_USERNAME")
    password_env: str = Field(default="CENTRAL_PASSWORD")

    @model_validator(mode="after")
    def _check_wait_target(self) -> "PublishConfig":
        if self.wait_until == "PUBLISHED" and not self.auto_publish:
            raise ValueError("Cannot wait until PUBLISHED when auto_publish is disabled")
        return self


class GavBundleConfig(BaseModel):
    """
    Top-level config container.

    `global` is always required. `bundle` is required by the bundle and
    publish commands, `publish` only by publish; commands validate they have
    what they need. `signing` falls back to its defaults when omitted.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    global_config: GlobalConfig = Field(alias="global")
    bundle: Optional[BundleConfig] = Field(default=None)
    signing: SigningConfig = Field(default_factory=SigningConfig)
    publish: Optional[PublishConfig] = Field(default=None)
