"""Tests for owner/repo detection from the git origin remote.

Run with: pytest tests/test_git_remote.py -v
"""

from __future__ import annotations

import subprocess

import pytest

from github_release import git_remote
from github_release.git_remote import detect_repository, origin_url, parse_remote_url
from github_release.schemas import RepositoryRef

REMOTES = (
    "upstream\thttps://github.com/acme/proj.git (fetch)\n"
    "upstream\thttps://github.com/acme/proj.git (push)\n"
    "origin\tgit@github.com:alice/proj.git (fetch)\n"
    "origin\tgit@github.com:alice/proj.git (push)\n"
)


class TestOriginUrl:
    def test_picks_origin(self) -> None:
        assert origin_url(REMOTES) == "git@github.com:alice/proj.git"

    def test_no_origin(self) -> None:
        assert origin_url("upstream\thttps://github.com/acme/proj.git (fetch)\n") is None

    def test_empty_output(self) -> None:
        assert origin_url("") is None


class TestParseRemoteUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "https://github.com/alice/proj.git",
            "https://github.com/alice/proj",
            "https://github.com/alice/proj/",
            "ssh://git@github.com/alice/proj.git",
            "git@github.com:alice/proj.git",
        ],
    )
    def test_supported_forms(self, url: str) -> None:
        assert parse_remote_url(url) == RepositoryRef(owner="alice", repo="proj")

    def test_path_without_owner(self) -> None:
        assert parse_remote_url("https://github.com/proj.git") is None


class TestDetectRepository:
    """subprocess.run is stubbed; git is never executed."""

    def _stub_run(self, monkeypatch: pytest.MonkeyPatch, returncode: int, stdout: str) -> list:
        calls: list = []

        def fake_run(args, **kwargs):
            calls.append(args)
            return subprocess.CompletedProcess(args, returncode, stdout=stdout, stderr="")

        monkeypatch.setattr(git_remote.subprocess, "run", fake_run)
        return calls

    def test_detects_from_origin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = self._stub_run(monkeypatch, 0, REMOTES)
        assert detect_repository() == RepositoryRef(owner="alice", repo="proj")
        assert calls == [["git", "remote", "-v"]]

    def test_not_a_checkout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        self._stub_run(monkeypatch, 128, "")
        assert detect_repository() is None

    def test_no_origin_remote(self, monkeypatch: pytest.MonkeyPatch) -> None:
        self._stub_run(monkeypatch, 0, "")
        assert detect_repository() is None

    def test_git_not_installed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def missing_git(args, **kwargs):
            raise FileNotFoundError("git")

        monkeypatch.setattr(git_remote.subprocess, "run", missing_git)
        assert detect_repository() is None
