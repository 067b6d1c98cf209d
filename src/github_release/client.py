"""GitHub Releases API client.

This module binds the three release endpoints the tool needs:
- GET  /repos/{owner}/{repo}/releases      - list releases
- POST /repos/{owner}/{repo}/releases      - create a release
- POST <upload_url>?name=<asset name>      - upload a release asset

Design notes:
- Uses a synchronous httpx.Client; every call blocks until the response
- Every request carries HTTP Basic credentials and Accept: application/json
- A non-2xx status raises TransportError; nothing is retried
- The upload URL returned by the last create_release() is kept on the
  client so upload_asset() can be called without repeating it
- Uses a Protocol so the CLI doesn't depend on the concrete implementation
  (makes testing with mocks easy)

GitHub API docs: https://docs.github.com/en/rest/releases
"""

from __future__ import annotations

from typing import Any, Protocol

import httpx

from github_release.config import ClientConfig
from github_release.errors import ConfigurationError, TransportError
from github_release.logging_config import get_logger
from github_release.schemas import (
    AssetUploadRequest,
    Credentials,
    ReleaseRequest,
    RepositoryRef,
    strip_uri_template,
)

logger = get_logger(__name__)


def _require(**fields: Any) -> None:
    """Raise ConfigurationError for the first missing or empty argument."""
    for field, value in fields.items():
        if value is None or value == "":
            raise ConfigurationError(field)


# ---------------------------------------------------------------------------
# Protocol (Interface)
# ---------------------------------------------------------------------------


class ReleaseClientProtocol(Protocol):
    """Interface shared by the real client and its mock."""

    upload_uri: str | None

    def __enter__(self) -> ReleaseClientProtocol: ...

    def __exit__(self, *exc_info: object) -> None: ...

    def list_releases(self) -> list[dict[str, Any]]: ...

    def create_release(
        self,
        tag_name: str | None = None,
        target_commitish: str | None = "master",
        name: str | None = None,
        body: str | None = None,
        draft: bool = False,
        prerelease: bool = True,
    ) -> dict[str, Any]: ...

    def upload_asset(
        self,
        upload_uri: str | None = None,
        filename: str | None = None,
        content_type: str | None = None,
        name: str | None = None,
    ) -> dict[str, Any]: ...

    def close(self) -> None: ...


# ---------------------------------------------------------------------------
# Concrete Implementation
# ---------------------------------------------------------------------------


class ReleaseClient:
    """Release API binding for a single repository.

    Usage:
        with ReleaseClient(user="alice", password="...", repo="proj") as client:
            client.create_release(tag_name="v1.0", name="v1.0", body="notes")
            client.upload_asset(filename="out.zip", content_type="application/zip")

    Not safe for concurrent use: upload_uri is plain instance state.
    """

    def __init__(
        self,
        user: str | None = None,
        password: str | None = None,
        repo: str | None = None,
        owner: str | None = None,
        *,
        config: ClientConfig | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            user: Account name used for Basic authentication
            password: Account password (or token)
            repo: Repository name
            owner: Repository owner. Falls back to user when omitted.
            config: API location and timeouts. Uses defaults if None.
            http_client: Preconfigured httpx.Client (tests inject one backed
                         by httpx.MockTransport). The client owns and closes
                         the one it creates itself, never an injected one.

        Raises:
            ConfigurationError: If user, password or repo is missing
        """
        _require(user=user, password=password, repo=repo)
        self.config = config or ClientConfig()
        self.credentials = Credentials(user=user, password=password)
        self.repository = RepositoryRef(owner=owner or user, repo=repo)
        self.upload_uri: str | None = None

        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(
            timeout=self.config.timeout,
            headers={"User-Agent": self.config.user_agent},
        )

    def __enter__(self) -> ReleaseClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http:
            self._http.close()

    @property
    def api_uri(self) -> str:
        """URL of the repository's releases collection."""
        return self.config.releases_url(self.repository.owner, self.repository.repo)

    # -----------------------------------------------------------------------
    # Operations
    # -----------------------------------------------------------------------

    def list_releases(self) -> list[dict[str, Any]]:
        """List releases for the repository.

        Returns:
            The parsed JSON array returned by the API (first page only)

        Raises:
            TransportError: If the API returns a non-2xx status
        """
        return self._request("GET", self.api_uri)

    def create_release(
        self,
        tag_name: str | None = None,
        target_commitish: str | None = "master",
        name: str | None = None,
        body: str | None = None,
        draft: bool = False,
        prerelease: bool = True,
    ) -> dict[str, Any]:
        """Create a release and remember its asset upload URL.

        The stored upload_uri is cleared before anything else, so a failed
        attempt never leaves a previous release's URL behind.

        Args:
            tag_name: Name of the tag
            target_commitish: Commit SHA or branch for the tag
            name: Release title
            body: Release notes
            draft: True to create an unpublished release
            prerelease: True to mark the release as a prerelease

        Returns:
            The release as returned by the API

        Raises:
            ConfigurationError: If a required field is missing (no request is sent)
            TransportError: If the API returns a non-2xx status
        """
        self.upload_uri = None
        _require(
            tag_name=tag_name,
            target_commitish=target_commitish,
            name=name,
            body=body,
        )
        request = ReleaseRequest(
            tag_name=tag_name,
            target_commitish=target_commitish,
            name=name,
            body=body,
            draft=draft,
            prerelease=prerelease,
        )

        logger.info(
            "release_create_started",
            repo=self.repository.full_name,
            tag_name=request.tag_name,
            draft=request.draft,
            prerelease=request.prerelease,
        )
        release = self._request("POST", self.api_uri, json=request.model_dump())
        self.upload_uri = strip_uri_template(release["upload_url"])
        logger.info(
            "release_created",
            repo=self.repository.full_name,
            release_id=release.get("id"),
            upload_uri=self.upload_uri,
        )
        return release

    def upload_asset(
        self,
        upload_uri: str | None = None,
        filename: str | None = None,
        content_type: str | None = None,
        name: str | None = None,
    ) -> dict[str, Any]:
        """Upload a file as an asset of a release.

        Args:
            upload_uri: Upload URL without template suffix. Defaults to the
                        one stored by the last successful create_release().
            filename: Path of the local file to upload
            content_type: MIME type of the file
            name: Asset name. Defaults to the base name of filename.

        Returns:
            The asset descriptor returned by the API

        Raises:
            ConfigurationError: If filename, content_type or an upload URI
                                is missing (no request is sent)
            OSError: If the file cannot be opened
            TransportError: If the API returns a non-2xx status
        """
        upload_uri = upload_uri or self.upload_uri
        _require(filename=filename, content_type=content_type, upload_uri=upload_uri)
        request = AssetUploadRequest(
            upload_uri=upload_uri,
            filename=filename,
            content_type=content_type,
            name=name or "",
        )

        logger.info(
            "asset_upload_started",
            repo=self.repository.full_name,
            filename=request.filename,
            asset_name=request.name,
            content_type=request.content_type,
        )
        with open(request.filename, "rb") as fd:
            asset = self._request(
                "POST",
                request.upload_url(),
                content=fd.read(),
                headers={"Content-Type": request.content_type},
            )
        logger.info(
            "asset_uploaded",
            repo=self.repository.full_name,
            asset_name=request.name,
            size=asset.get("size") if isinstance(asset, dict) else None,
        )
        return asset

    # -----------------------------------------------------------------------
    # HTTP
    # -----------------------------------------------------------------------

    def _request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> Any:
        """Send an authenticated request and return the parsed JSON body.

        Raises:
            TransportError: If the response status is not 2xx
        """
        response = self._http.request(
            method,
            url,
            auth=(self.credentials.user, self.credentials.password),
            headers={"Accept": "application/json", **(headers or {})},
            **kwargs,
        )
        if not response.is_success:
            error = TransportError(method, url, response.status_code, _decode_body(response))
            logger.error(
                "api_request_failed",
                method=method,
                url=url,
                status_code=response.status_code,
                error=str(error),
            )
            raise error
        return response.json()


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


# ---------------------------------------------------------------------------
# Mock Implementation (for testing)
# ---------------------------------------------------------------------------


class MockReleaseClient:
    """In-memory release client that records calls instead of sending them.

    Use this in tests and local dry runs when you don't want to hit the
    real GitHub API. Validation and upload_uri handling match ReleaseClient.

    Usage:
        client = MockReleaseClient(user="alice", password="x", repo="proj")
        client.create_release(tag_name="v1.0", name="v1.0", body="notes")
        assert client.calls[0][0] == "create_release"
    """

    def __init__(
        self,
        user: str | None = None,
        password: str | None = None,
        repo: str | None = None,
        owner: str | None = None,
        *,
        releases: list[dict[str, Any]] | None = None,
        upload_url: str = "https://uploads.example.com/repos/mock/assets{?name,label}",
    ) -> None:
        _require(user=user, password=password, repo=repo)
        self.credentials = Credentials(user=user, password=password)
        self.repository = RepositoryRef(owner=owner or user, repo=repo)
        self.upload_uri: str | None = None
        self.releases = list(releases or [])
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False
        self._upload_url = upload_url

    def __enter__(self) -> MockReleaseClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.closed = True

    def list_releases(self) -> list[dict[str, Any]]:
        self.calls.append(("list_releases", {}))
        return list(self.releases)

    def create_release(
        self,
        tag_name: str | None = None,
        target_commitish: str | None = "master",
        name: str | None = None,
        body: str | None = None,
        draft: bool = False,
        prerelease: bool = True,
    ) -> dict[str, Any]:
        self.upload_uri = None
        _require(
            tag_name=tag_name,
            target_commitish=target_commitish,
            name=name,
            body=body,
        )
        request = ReleaseRequest(
            tag_name=tag_name,
            target_commitish=target_commitish,
            name=name,
            body=body,
            draft=draft,
            prerelease=prerelease,
        )
        self.calls.append(("create_release", request.model_dump()))
        release = {
            "id": len(self.releases) + 1,
            **request.model_dump(),
            "upload_url": self._upload_url,
        }
        self.releases.append(release)
        self.upload_uri = strip_uri_template(self._upload_url)
        return release

    def upload_asset(
        self,
        upload_uri: str | None = None,
        filename: str | None = None,
        content_type: str | None = None,
        name: str | None = None,
    ) -> dict[str, Any]:
        upload_uri = upload_uri or self.upload_uri
        _require(filename=filename, content_type=content_type, upload_uri=upload_uri)
        request = AssetUploadRequest(
            upload_uri=upload_uri,
            filename=filename,
            content_type=content_type,
            name=name or "",
        )
        self.calls.append(("upload_asset", {**request.model_dump(), "url": request.upload_url()}))
        return {
            "name": request.name,
            "content_type": request.content_type,
            "state": "uploaded",
            "url": request.upload_url(),
        }
