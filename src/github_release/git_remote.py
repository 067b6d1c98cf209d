"""Default owner/repo detection from the local git checkout.

Reads the URL of the ``origin`` remote and splits its path into owner and
repository name. Both URL forms git prints are understood:

    https://github.com/alice/proj.git   -> alice / proj
    git@github.com:alice/proj.git       -> alice / proj
"""

from __future__ import annotations

import posixpath
import subprocess
from pathlib import Path
from urllib.parse import urlsplit

from github_release.logging_config import get_logger
from github_release.schemas import RepositoryRef

logger = get_logger(__name__)


def origin_url(remotes: str) -> str | None:
    """Pick the origin URL out of ``git remote -v`` output."""
    for line in remotes.splitlines():
        if line.startswith("origin"):
            fields = line.split()
            if len(fields) >= 2:
                return fields[1]
    return None


def parse_remote_url(url: str) -> RepositoryRef | None:
    """Split a remote URL into owner and repository name.

    Returns None when the path has no owner component.
    """
    if "://" in url:
        path = urlsplit(url).path
    else:
        # scp-like syntax: [user@]host:owner/repo.git
        path = url.split(":", 1)[-1]
    path = path.rstrip("/")

    owner = posixpath.basename(posixpath.dirname(path))
    repo = posixpath.basename(path).removesuffix(".git")
    if not owner or not repo:
        return None
    return RepositoryRef(owner=owner, repo=repo)


def detect_repository(cwd: str | Path | None = None) -> RepositoryRef | None:
    """Guess the target repository from the origin remote.

    Args:
        cwd: Directory of the checkout. Uses the current directory if None.

    Returns:
        The detected RepositoryRef, or None if git is missing, the
        directory is not a checkout, or there is no usable origin remote
    """
    try:
        result = subprocess.run(
            ["git", "remote", "-v"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        logger.warning("git_unavailable", error=str(exc))
        return None

    if result.returncode != 0:
        logger.debug("git_remote_failed", returncode=result.returncode, stderr=result.stderr.strip())
        return None

    url = origin_url(result.stdout)
    if url is None:
        logger.debug("git_origin_missing")
        return None
    logger.debug("git_origin_found", url=url)
    return parse_remote_url(url)
