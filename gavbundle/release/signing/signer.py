# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Detached signatures through an external GnuPG-compatible tool.

We run the tool once per file and wait for it synchronously with no
timeout; cancelling a stuck run belongs to whoever invoked the pipeline.
stdout and stderr are merged, and the exit code is the only success signal
we trust. No shell=True: the command is always an argument list.

When a passphrase is configured it goes to the tool on stdin
(`--passphrase-fd 0`) in batch mode, so it never shows up in a process
listing.
"""

import subprocess
from pathlib import Path
from typing import Optional

from gavbundle.logging.logger import get_logger
from gavbundle.release.exceptions import SigningError
from gavbundle.utils.filesystem import safe_delete

logger = get_logger(__name__)

SIGNATURE_SUFFIX = ".asc"


def signature_path_for(file_path: Path) -> Path:
    return file_path.with_name(file_path.name + SIGNATURE_SUFFIX)


class GpgSigner:
    def __init__(
        self,
        executable: str = "gpg",
        passphrase: Optional[str] = None,
        key_id: Optional[str] = None,
    ) -> None:
        self.executable = executable
        self.passphrase = passphrase or None
        self.key_id = key_id

    def build_command(self, file_path: Path, signature_path: Path) -> list[str]:
        command = [
            self.executable,
            "--detach-sign",
            "--armor",
            "--yes",
            "--output",
            str(signature_path.absolute()),
        ]
        if self.key_id:
            command += ["--local-user", self.key_id]
        if self.passphrase is not None:
            command += [
                "--batch",
                "--pinentry-mode",
                "loopback",
                "--passphrase-fd",
                "0",
            ]
        command.append(str(file_path.absolute()))
        return command

    def sign(self, file_path: Path) -> Path:
        """
        Write `<file>.asc` next to `file_path` and return its path.

        Raises:
            SigningError: Tool missing, non-zero exit, or no signature produced.
            KeyboardInterrupt: Re-raised unchanged if the wait is interrupted.
        """
        signature_path = signature_path_for(file_path)
        command = self.build_command(file_path, signature_path)
        # Only a signature this call created is removed on failure.
        preexisting = signature_path.exists()

        logger.info("Signing file", extra={"file": file_path.name})

        run_kwargs: dict[str, object] = {}
        if self.passphrase is not None:
            run_kwargs["input"] = self.passphrase + "\n"
        else:
            run_kwargs["stdin"] = subprocess.DEVNULL

        try:
            result = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                check=False,
                **run_kwargs,
            )
        except FileNotFoundError as err:
            raise SigningError(f"Signing executable not found: {self.executable}") from err
        except KeyboardInterrupt:
            logger.warning("Signing interrupted", extra={"file": file_path.name})
            if not preexisting:
                safe_delete(signature_path)
            raise

        if result.returncode != 0:
            if not preexisting:
                safe_delete(signature_path)
            logger.error(
                "Signing failed",
                extra={"file": file_path.name, "exit_code": result.returncode},
            )
            raise SigningError(
                f"Signing {file_path.name} failed with exit code: {result.returncode}",
                exit_code=result.returncode,
                output=result.stdout or "",
            )

        if not signature_path.is_file():
            raise SigningError(
                f"Signing tool reported success but wrote no signature: {signature_path}",
                exit_code=result.returncode,
                output=result.stdout or "",
            )

        logger.debug("Signed file", extra={"file": file_path.name, "signature": signature_path.name})
        return signature_path
