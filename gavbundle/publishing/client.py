# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Central Portal publisher API client.

Takes a sealed bundle and turns it into one deployment:

    POST /api/v1/publisher/upload?name=<name>&publishingType=AUTOMATIC|USER_MANAGED
         multipart field "bundle"                -> deployment id (plain text)
    POST /api/v1/publisher/status?id=<id>        -> {"deploymentState": ..., "errors": ...}

Deployment states move PENDING -> VALIDATING -> VALIDATED -> PUBLISHING ->
PUBLISHED, or end in FAILED. `wait_for_state` polls until the requested
state (or a later one) is reached.

Token auth sends `Authorization: Bearer base64(username:password)` with a
portal user token; otherwise HTTP basic auth is used.
"""

import base64
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import httpx

from gavbundle.logging.logger import get_logger
from gavbundle.release.exceptions import PublishError

logger = get_logger(__name__)

UPLOAD_PATH = "/api/v1/publisher/upload"
STATUS_PATH = "/api/v1/publisher/status"

# Position of each state on the way to publication; FAILED is terminal.
_STATE_ORDER: dict[str, int] = {
    "PENDING": 0,
    "VALIDATING": 1,
    "VALIDATED": 2,
    "PUBLISHING": 3,
    "PUBLISHED": 4,
}
FAILED_STATE = "FAILED"
WAIT_TARGETS = ("UPLOADED", "VALIDATED", "PUBLISHED")


@dataclass(frozen=True)
class DeploymentStatus:
    deployment_id: str
    state: str
    deployment_name: str = ""
    errors: dict[str, Any] = field(default_factory=dict)


class CentralPortalClient:
    """Uploads bundles to the publisher API and polls their deployment state."""

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        token_auth: bool = True,
        client: Optional[httpx.Client] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=60, verify=True)
        self._sleep = sleep
        self._clock = clock

        if token_auth:
            token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
            self._headers = {"Authorization": f"Bearer {token}"}
            self._auth: Optional[httpx.BasicAuth] = None
        else:
            self._headers = {}
            self._auth = httpx.BasicAuth(username, password)

    def close(self) -> None:
        self._client.close()

    def _post(self, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self._client.post(url, headers=self._headers, auth=self._auth, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as err:
            raise PublishError(
                f"Publisher API returned {err.response.status_code} for {path}: {err.response.text}"
            ) from err
        except httpx.HTTPError as err:
            raise PublishError(f"Publisher API request to {path} failed: {err}") from err
        return response

    def upload(self, bundle_path: Path, deployment_name: str, automatic: bool) -> str:
        """
        Upload a finished bundle.

        Returns:
            The deployment id assigned by the portal.
        """
        publishing_type = "AUTOMATIC" if automatic else "USER_MANAGED"
        logger.info(
            "Uploading bundle",
            extra={
                "bundle": bundle_path.name,
                "deployment_name": deployment_name,
                "publishing_type": publishing_type,
            },
        )

        try:
            handle = open(bundle_path, "rb")
        except OSError as err:
            raise PublishError(f"Cannot read bundle {bundle_path}: {err}") from err

        with handle:
            response = self._post(
                UPLOAD_PATH,
                params={"name": deployment_name, "publishingType": publishing_type},
                files={"bundle": (bundle_path.name, handle, "application/octet-stream")},
            )

        deployment_id = response.text.strip()
        if not deployment_id:
            raise PublishError("Publisher API returned an empty deployment id")

        logger.info("Bundle uploaded", extra={"deployment_id": deployment_id})
        return deployment_id

    def status(self, deployment_id: str) -> DeploymentStatus:
        response = self._post(STATUS_PATH, params={"id": deployment_id})
        try:
            payload = response.json()
        except ValueError as err:
            raise PublishError(
                f"Malformed status response for {deployment_id}", deployment_id=deployment_id
            ) from err

        return DeploymentStatus(
            deployment_id=payload.get("deploymentId", deployment_id),
            state=str(payload.get("deploymentState", "")).upper(),
            deployment_name=payload.get("deploymentName", ""),
            errors=payload.get("errors") or {},
        )

    def wait_for_state(
        self,
        deployment_id: str,
        target: str,
        max_seconds: float,
        interval_seconds: float,
    ) -> Optional[DeploymentStatus]:
        """
        Poll until the deployment reaches `target` or a later state.

        `UPLOADED` returns immediately with None: the upload call itself
        already confirmed it.

        Raises:
            PublishError: The deployment FAILED or the wait timed out.
            ValueError: Unknown target state.
        """
        target = target.upper()
        if target not in WAIT_TARGETS:
            raise ValueError(f"Unknown deployment state to wait for: {target}")
        if target == "UPLOADED":
            return None

        deadline = self._clock() + max_seconds
        while True:
            status = self.status(deployment_id)
            logger.info(
                "Deployment state",
                extra={"deployment_id": deployment_id, "state": status.state},
            )

            if status.state == FAILED_STATE:
                raise PublishError(
                    f"Deployment {deployment_id} failed: {status.errors}",
                    deployment_id=deployment_id,
                )
            if _STATE_ORDER.get(status.state, -1) >= _STATE_ORDER[target]:
                return status

            if self._clock() >= deadline:
                raise PublishError(
                    f"Deployment {deployment_id} did not reach {target} within {max_seconds}s "
                    f"(last state: {status.state or 'unknown'})",
                    deployment_id=deployment_id,
                )
            self._sleep(interval_seconds)
