"""Pydantic models for the data that flows through the release client.

These schemas are the single source of truth for:
- The JSON payload sent to the create-release endpoint
- The parameters of an asset upload
- The answers gathered by the interactive CLI

Key design decisions:
- Required text fields use min_length=1 so an empty string is rejected the
  same way a missing value is
- Credentials hide the password from repr() so it never ends up in logs
- The API's responses are NOT modelled: the client returns them as plain
  dicts and only reads `upload_url`
"""

from __future__ import annotations

import re
from pathlib import Path
from urllib.parse import quote, urlsplit

from pydantic import BaseModel, Field, model_validator

# Trailing RFC 6570 template, e.g. "{?name,label}" in
# "https://uploads.github.com/repos/o/r/releases/1/assets{?name,label}"
_URI_TEMPLATE_SUFFIX = re.compile(r"\{.+\}\Z")


def strip_uri_template(url: str) -> str:
    """Remove the brace-delimited template tail from an upload URL."""
    return _URI_TEMPLATE_SUFFIX.sub("", url)


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


class Credentials(BaseModel):
    """HTTP Basic credentials for the GitHub account.

    Attributes:
        user: Account login
        password: Account password or personal access token
    """

    user: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1, repr=False)


class RepositoryRef(BaseModel):
    """Target repository.

    Attributes:
        owner: User or organization owning the repository
        repo: Repository name (without ".git")
    """

    owner: str = Field(..., min_length=1)
    repo: str = Field(..., min_length=1)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class ReleaseRequest(BaseModel):
    """Body of POST /repos/{owner}/{repo}/releases.

    Field order matches the JSON document sent to the API.

    Attributes:
        tag_name: Name of the tag to create or reuse
        target_commitish: Commit SHA or branch the tag points at
        name: Release title
        body: Release notes
        draft: True to create an unpublished release
        prerelease: True to mark the release as a prerelease
    """

    tag_name: str = Field(..., min_length=1)
    target_commitish: str = Field("master", min_length=1)
    name: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)
    draft: bool = False
    prerelease: bool = True


class AssetUploadRequest(BaseModel):
    """Parameters of a release asset upload.

    Attributes:
        upload_uri: Upload URL with the template suffix already stripped
        filename: Local path of the file to upload
        content_type: MIME type sent as the Content-Type header
        name: Asset name on the release; defaults to the file's base name
    """

    upload_uri: str = Field(..., min_length=1)
    filename: str = Field(..., min_length=1)
    content_type: str = Field(..., min_length=1)
    name: str = ""

    @model_validator(mode="after")
    def default_name(self) -> AssetUploadRequest:
        if not self.name:
            self.name = Path(self.filename).name
        return self

    def upload_url(self) -> str:
        """The upload URI with its query replaced by ``name=<asset name>``."""
        parts = urlsplit(self.upload_uri)
        return parts._replace(query=f"name={quote(self.name, safe='')}").geturl()


# ---------------------------------------------------------------------------
# CLI answers
# ---------------------------------------------------------------------------


class PublishInputs(BaseModel):
    """Everything the interactive CLI collects before talking to the API."""

    owner: str
    repo: str
    user: str
    password: str = Field(..., repr=False)
    tag_name: str
    name: str
    body: str
    prerelease: bool = True
    filename: str
    content_type: str = "application/zip"
