"""Tests for the interactive CLI flow.

The terminal is replaced with ScriptedInputProvider and the API with
MockReleaseClient, so these tests exercise prompt order, defaults and the
create -> upload wiring without any I/O.

Run with: pytest tests/test_cli.py -v
"""

from __future__ import annotations

import json

import pytest

from github_release import cli
from github_release.cli import collect_inputs, main, publish
from github_release.client import MockReleaseClient
from github_release.errors import ConfigurationError
from github_release.prompts import ScriptedInputProvider
from github_release.schemas import PublishInputs, RepositoryRef


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def defaults() -> RepositoryRef:
    return RepositoryRef(owner="alice", repo="proj")


@pytest.fixture
def inputs() -> PublishInputs:
    return PublishInputs(
        owner="acme",
        repo="proj",
        user="alice",
        password="secret",
        tag_name="v1.0",
        name="v1.0",
        body="notes",
        filename="dist/out.zip",
        content_type="application/zip",
    )


class RecordingFactory:
    """Client factory that hands out (and remembers) MockReleaseClients."""

    def __init__(self) -> None:
        self.clients: list[MockReleaseClient] = []
        self.kwargs: list[dict] = []

    def __call__(self, **kwargs) -> MockReleaseClient:
        self.kwargs.append(kwargs)
        client = MockReleaseClient(**kwargs)
        self.clients.append(client)
        return client


# ---------------------------------------------------------------------------
# collect_inputs
# ---------------------------------------------------------------------------


class TestCollectInputs:
    """Prompt order and defaults."""

    def test_defaults_chain(self, defaults: RepositoryRef) -> None:
        """Enter on every defaulted prompt: owner/repo from git, user=owner, name=tag."""
        provider = ScriptedInputProvider(["", "", "", "secret", "v1.0", "", "", "out.zip", ""])

        result = collect_inputs(provider, defaults)

        assert result.owner == "alice"
        assert result.repo == "proj"
        assert result.user == "alice"
        assert result.password == "secret"
        assert result.tag_name == "v1.0"
        assert result.name == "v1.0"
        assert result.body == "Release v1.0"
        assert result.filename == "out.zip"
        assert result.content_type == "application/zip"
        assert result.prerelease is True
        assert provider.prompts == [
            "owner (alice) : ",
            "repo (proj) : ",
            "user (alice) : ",
            "password : ",
            "tag name : ",
            "name (v1.0) : ",
            "body (Release v1.0) : ",
            "filename : ",
            "content type (application/zip) : ",
        ]

    def test_explicit_answers(self, defaults: RepositoryRef) -> None:
        provider = ScriptedInputProvider(
            ["acme", "tool", "bob", "pw", "v2.0", "Two", r"first\nsecond", "tool.tgz", "application/gzip"]
        )

        result = collect_inputs(provider, defaults)

        assert (result.owner, result.repo, result.user) == ("acme", "tool", "bob")
        assert result.name == "Two"
        assert result.body == "first\nsecond"
        assert result.content_type == "application/gzip"

    def test_no_git_defaults_reasks_owner(self) -> None:
        provider = ScriptedInputProvider(["", "alice", "proj", "", "pw", "v1", "", "", "f.zip", ""])

        result = collect_inputs(provider, None)

        assert result.owner == "alice"
        assert provider.prompts[:2] == ["owner : ", "owner : "]


# ---------------------------------------------------------------------------
# publish
# ---------------------------------------------------------------------------


class TestPublish:
    """Create then upload, through the client factory."""

    def test_creates_prerelease_then_uploads(self, inputs: PublishInputs) -> None:
        factory = RecordingFactory()

        asset = publish(inputs, factory)

        assert factory.kwargs == [{"user": "alice", "password": "secret", "owner": "acme", "repo": "proj"}]
        client = factory.clients[0]
        create, upload = client.calls
        assert create == (
            "create_release",
            {
                "tag_name": "v1.0",
                "target_commitish": "master",
                "name": "v1.0",
                "body": "notes",
                "draft": False,
                "prerelease": True,
            },
        )
        assert upload[0] == "upload_asset"
        assert upload[1]["upload_uri"] == client.upload_uri
        assert upload[1]["name"] == "out.zip"
        assert asset["name"] == "out.zip"
        assert client.closed

    def test_client_closed_on_error(self, inputs: PublishInputs) -> None:
        factory = RecordingFactory()
        bad = inputs.model_copy(update={"content_type": ""})

        with pytest.raises(ConfigurationError, match="content_type is required"):
            publish(bad, factory)
        assert factory.clients[0].closed


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------


class TestMain:
    def test_prints_asset_json(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
        defaults: RepositoryRef,
    ) -> None:
        monkeypatch.setattr(cli, "setup_logging", lambda: None)
        monkeypatch.setattr(cli, "detect_repository", lambda: defaults)
        provider = ScriptedInputProvider(["", "", "", "secret", "v1.0", "", "", "out.zip", ""])
        factory = RecordingFactory()

        main(provider=provider, client_factory=factory)

        printed = json.loads(capsys.readouterr().out)
        assert printed["name"] == "out.zip"
        assert printed["url"] == "https://uploads.example.com/repos/mock/assets?name=out.zip"
        assert factory.clients[0].repository.full_name == "alice/proj"
