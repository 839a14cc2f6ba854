"""
GitHub contents API client.

Uses httpx to read and write files in a GitHub repository through
/repos/{owner}/{repo}/contents/{path}. Each file write is a commit
on the configured branch.

Overwriting a file requires its current blob sha; creating a new file
must omit it. get_existing() returns that sha as a typed result so a
missing file is a normal value rather than an exception.
"""
import base64
import logging
import time
from dataclasses import dataclass
from typing import Optional

import httpx

from image_service.config import GitHubProperties
from image_service.exceptions import RemoteServiceError
from image_service.utils.logging import log_remote_request, log_remote_failure
from image_service.utils.metrics import github_requests_total, github_request_duration_seconds

logger = logging.getLogger(__name__)

GITHUB_ACCEPT = "application/vnd.github.v3+json"
CONNECT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class ExistingObject:
    """Result of probing a path: the blob sha when the file exists, else None."""
    sha: Optional[str] = None

    @property
    def exists(self) -> bool:
        return self.sha is not None

    @classmethod
    def not_found(cls) -> "ExistingObject":
        return cls(sha=None)


class GitHubContentsClient:
    """
    Thin client over the GitHub contents API.

    Single attempt per call: no retry, no backoff. Use as a context
    manager so the underlying connection pool is closed.
    """

    def __init__(
        self,
        properties: GitHubProperties,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Args:
            properties: Repository coordinates and token
            timeout: Read/write/pool timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._properties = properties
        self._client = httpx.Client(
            headers={
                "Authorization": f"token {properties.token}",
                "Accept": GITHUB_ACCEPT,
            },
            timeout=httpx.Timeout(timeout, connect=min(timeout, CONNECT_TIMEOUT_SECONDS)),
            transport=transport,
        )

    def __enter__(self) -> "GitHubContentsClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def contents_url(self, path: str) -> str:
        """Build the contents API URL for a repository path."""
        p = self._properties
        return f"{p.api_url}/repos/{p.owner}/{p.repo}/contents/{path}"

    def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Send one request, recording metrics. Transport errors become RemoteServiceError."""
        url = self.contents_url(path)
        start_time = time.time()
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            duration = time.time() - start_time
            github_requests_total.labels(method=method, status="error").inc()
            github_request_duration_seconds.labels(method=method).observe(duration)
            log_remote_failure(
                logger,
                method=method,
                path=path,
                error=str(e),
                duration_ms=duration * 1000,
                include_traceback=True
            )
            raise RemoteServiceError(f"{type(e).__name__}: {e}") from e

        duration = time.time() - start_time
        github_requests_total.labels(method=method, status=str(response.status_code)).inc()
        github_request_duration_seconds.labels(method=method).observe(duration)
        log_remote_request(
            logger,
            method=method,
            path=path,
            status_code=response.status_code,
            duration_ms=duration * 1000
        )
        return response

    def get_existing(self, path: str) -> ExistingObject:
        """
        Look up the file at path.

        Returns:
            ExistingObject with the blob sha, or ExistingObject.not_found() on 404

        Raises:
            RemoteServiceError: any other non-2xx status, transport failure,
                or a body without a string "sha"
        """
        try:
            response = self._send("GET", path)
        except RemoteServiceError as e:
            raise RemoteServiceError(f"Failed to check existing image on GitHub: {e.message}") from e

        if response.status_code == 404:
            logger.debug(f"No existing file at {path}")
            return ExistingObject.not_found()

        if not response.is_success:
            log_remote_failure(
                logger,
                method="GET",
                path=path,
                error=response.text,
                status_code=response.status_code
            )
            raise RemoteServiceError(
                f"Failed to check existing image on GitHub: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code
            )

        try:
            body = response.json()
        except ValueError as e:
            raise RemoteServiceError(
                f"Failed to check existing image on GitHub: invalid JSON response ({e})",
                status_code=response.status_code
            ) from e

        sha = body.get("sha") if isinstance(body, dict) else None
        if not isinstance(sha, str):
            raise RemoteServiceError(
                f"Failed to check existing image on GitHub: no sha for {path}",
                status_code=response.status_code
            )

        logger.info(f"File exists, sha: {sha}")
        return ExistingObject(sha=sha)

    def put_file(
        self,
        path: str,
        content: bytes,
        message: str,
        branch: str,
        sha: Optional[str] = None
    ) -> dict:
        """
        Create or update the file at path with a single commit.

        Args:
            path: Repository path
            content: Raw file bytes (base64-encoded here)
            message: Commit message
            branch: Target branch
            sha: Current blob sha, required by GitHub to overwrite

        Returns:
            Parsed GitHub response body (empty dict if not JSON)

        Raises:
            RemoteServiceError: transport failure or non-2xx status
        """
        body = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "branch": branch,
        }
        if sha is not None:
            body["sha"] = sha

        try:
            response = self._send("PUT", path, json=body)
        except RemoteServiceError as e:
            raise RemoteServiceError(f"Failed to upload image to GitHub: {e.message}") from e

        if not response.is_success:
            log_remote_failure(
                logger,
                method="PUT",
                path=path,
                error=response.text,
                status_code=response.status_code
            )
            raise RemoteServiceError(
                f"Failed to upload image to GitHub: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError:
            return {}
