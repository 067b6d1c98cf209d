"""Client configuration.

There is no configuration file and the CLI takes no flags; this model
exists for programmatic callers (e.g. a GitHub Enterprise base URL) and
for tests.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from github_release import __version__


class ClientConfig(BaseModel):
    """Configuration for ReleaseClient.

    Attributes:
        api_base_url: Root of the REST API (no trailing slash needed)
        timeout: Timeout in seconds applied to every request
        user_agent: User-Agent header value (GitHub rejects requests without one)
    """

    api_base_url: str = "https://api.github.com"
    timeout: float = Field(30.0, gt=0)
    user_agent: str = f"github-release/{__version__}"

    def releases_url(self, owner: str, repo: str) -> str:
        """URL of the releases collection for owner/repo."""
        return f"{self.api_base_url.rstrip('/')}/repos/{owner}/{repo}/releases"
