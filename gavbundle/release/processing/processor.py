# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Per-file processing: detached signatures and content checksums.
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Optional, Protocol

from gavbundle.config.schema import SigningConfig
from gavbundle.release.signing.signer import GpgSigner
from gavbundle.utils.hashing import compute_digest


class FileProcessor(Protocol):
    def sign(self, file_path: Path) -> Optional[Path]: ...

    def checksum(self, file_path: Path, algorithm: str) -> str: ...

    def signing_enabled(self) -> bool: ...


class DefaultFileProcessor:
    """
    Signs with a GpgSigner when one is given; otherwise signing is disabled
    and `sign` returns None.
    """

    def __init__(self, signer: Optional[GpgSigner] = None) -> None:
        self.signer = signer

    @classmethod
    def from_config(
        cls,
        config: SigningConfig,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "DefaultFileProcessor":
        if not config.enabled:
            return cls(signer=None)

        env = os.environ if environ is None else environ
        passphrase = env.get(config.passphrase_env) if config.passphrase_env else None
        return cls(
            signer=GpgSigner(
                executable=config.executable,
                passphrase=passphrase,
                key_id=config.key_id,
            )
        )

    def sign(self, file_path: Path) -> Optional[Path]:
        if self.signer is None:
            return None
        return self.signer.sign(file_path)

    def checksum(self, file_path: Path, algorithm: str) -> str:
        return compute_digest(file_path, algorithm)

    def signing_enabled(self) -> bool:
        return self.signer is not None
