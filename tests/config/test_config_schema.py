# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Schema-level validation tests.

These focus on the pydantic models themselves: defaults, constraint
enforcement, and cross-field rules.
"""

import pytest
from pydantic import ValidationError

from gavbundle.config.schema import (
    BundleConfig,
    GavBundleConfig,
    GlobalConfig,
    PublishConfig,
    SigningConfig,
)


class TestGlobalConfigSchema:
    def test_default_log_level_is_info(self) -> None:
        config = GlobalConfig(config_version="1.0.0")
        assert config.log_level == "INFO"

    def test_default_project_name(self) -> None:
        config = GlobalConfig(config_version="1.0.0")
        assert config.project_name == "gavbundle"

    def test_config_version_is_required(self) -> None:
        with pytest.raises(ValidationError):
            GlobalConfig()  # type: ignore[call-arg]


class TestBundleConfigSchema:
    def test_defaults(self) -> None:
        config = BundleConfig(projects_directory="projects", projects=["lib"])
        assert config.output == "target/custom-publishing/custom-deployment-bundle.zip"
        assert config.descriptor_file_name == "pom.xml"
        assert config.descriptor_suffix == ".pom"
        assert config.checksum_algorithms == ["md5", "sha1"]
        assert not (config.include_binary or config.include_sources or config.include_docs)

    def test_empty_project_list_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BundleConfig(projects_directory="projects", projects=[])

    def test_duplicate_project_rejected(self) -> None:
        with pytest.raises(ValidationError, match="same folder twice"):
            BundleConfig(projects_directory="projects", projects=["lib", "lib"])

    def test_blank_project_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BundleConfig(projects_directory="projects", projects=["  "])

    def test_algorithms_are_normalized(self) -> None:
        config = BundleConfig(
            projects_directory="projects",
            projects=["lib"],
            checksum_algorithms=["SHA256", "sha512"],
        )
        assert config.checksum_algorithms == ["sha256", "sha512"]

    def test_unsupported_algorithm_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Unsupported checksum algorithm"):
            BundleConfig(projects_directory="projects", projects=["lib"], checksum_algorithms=["crc32"])

    def test_repeated_algorithm_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BundleConfig(
                projects_directory="projects",
                projects=["lib"],
                checksum_algorithms=["md5", "MD5"],
            )

    def test_frozen(self) -> None:
        config = BundleConfig(projects_directory="projects", projects=["lib"])
        with pytest.raises(ValidationError):
            config.include_binary = True  # type: ignore[misc]


class TestSigningConfigSchema:
    def test_defaults(self) -> None:
        config = SigningConfig()
        assert config.enabled is True
        assert config.executable == "gpg"
        assert config.key_id is None
        assert config.passphrase_env == "GPG_PASSPHRASE"

    def test_passphrase_is_not_a_field(self) -> None:
        with pytest.raises(ValidationError):
            SigningConfig(passphrase="secret")  # type: ignore[call-arg]


class TestPublishConfigSchema:
    def test_defaults(self) -> None:
        config = PublishConfig()
        assert config.base_url == "https://central.sonatype.com"
        assert config.wait_until == "VALIDATED"
        assert config.auto_publish is False

    def test_wait_for_published_needs_auto_publish(self) -> None:
        with pytest.raises(ValidationError, match="auto_publish"):
            PublishConfig(wait_until="PUBLISHED")

    def test_wait_for_published_with_auto_publish(self) -> None:
        config = PublishConfig(wait_until="PUBLISHED", auto_publish=True)
        assert config.wait_until == "PUBLISHED"

    def test_unknown_wait_state_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PublishConfig(wait_until="DONE")  # type: ignore[arg-type]

    def test_polling_interval_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            PublishConfig(polling_interval_seconds=0)


class TestGavBundleConfigSchema:
    def test_requires_global_section(self) -> None:
        with pytest.raises(ValidationError):
            GavBundleConfig.model_validate({})

    def test_optional_sections_default(self) -> None:
        config = GavBundleConfig.model_validate({"global": {"config_version": "1.0.0"}})
        assert config.bundle is None
        assert config.publish is None
        assert config.signing == SigningConfig()

    def test_rejects_top_level_unknown_fields(self) -> None:
        with pytest.raises(ValidationError):
            GavBundleConfig.model_validate({
                "global": {"config_version": "1.0.0"},
                "unknown_section": {"something": True},
            })
