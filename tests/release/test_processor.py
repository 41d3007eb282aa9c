# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the per-file processor: checksums and signing dispatch.
"""

from pathlib import Path

import pytest

from gavbundle.config.exceptions import UnsupportedAlgorithmError
from gavbundle.config.schema import SigningConfig
from gavbundle.release.processing.processor import DefaultFileProcessor


@pytest.fixture()
def hello_file(tmp_path: Path) -> Path:
    path = tmp_path / "hello.txt"
    path.write_bytes(b"hello")
    return path


class TestChecksum:
    def test_md5(self, hello_file: Path) -> None:
        assert DefaultFileProcessor().checksum(hello_file, "md5") == "5d41402abc4b2a76b9719d911017c592"

    def test_sha1(self, hello_file: Path) -> None:
        assert (
            DefaultFileProcessor().checksum(hello_file, "sha1")
            == "aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d"
        )

    def test_algorithm_name_is_case_insensitive(self, hello_file: Path) -> None:
        processor = DefaultFileProcessor()
        assert processor.checksum(hello_file, "SHA1") == processor.checksum(hello_file, "sha1")

    def test_unsupported_algorithm(self, hello_file: Path) -> None:
        with pytest.raises(UnsupportedAlgorithmError) as excinfo:
            DefaultFileProcessor().checksum(hello_file, "crc32")
        assert excinfo.value.algorithm == "crc32"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            DefaultFileProcessor().checksum(tmp_path / "absent", "md5")


class TestSigning:
    def test_disabled_processor_returns_none(self, hello_file: Path) -> None:
        processor = DefaultFileProcessor()
        assert processor.signing_enabled() is False
        assert processor.sign(hello_file) is None

    def test_from_config_disabled(self) -> None:
        processor = DefaultFileProcessor.from_config(SigningConfig(enabled=False))
        assert processor.signing_enabled() is False

    def test_from_config_reads_passphrase_from_environment(self) -> None:
        config = SigningConfig(executable="gpg2", key_id="ABCD", passphrase_env="RELEASE_PASS")
        processor = DefaultFileProcessor.from_config(config, environ={"RELEASE_PASS": "s3cret"})

        assert processor.signing_enabled() is True
        assert processor.signer is not None
        assert processor.signer.executable == "gpg2"
        assert processor.signer.key_id == "ABCD"
        assert processor.signer.passphrase == "s3cret"

    def test_from_config_without_passphrase(self) -> None:
        processor = DefaultFileProcessor.from_config(SigningConfig(), environ={})
        assert processor.signer is not None
        assert processor.signer.passphrase is None

    def test_sign_delegates_to_signer(self, hello_file: Path, fake_signer: Path) -> None:
        processor = DefaultFileProcessor.from_config(
            SigningConfig(executable=str(fake_signer)), environ={}
        )
        signature = processor.sign(hello_file)
        assert signature is not None
        assert signature.name == "hello.txt.asc"
