"""Interactive command-line entry point.

Usage:
    cd path/to/checkout
    github-release

The command takes no arguments. It guesses owner/repo from the origin
remote, asks for everything else, creates a prerelease and uploads one
asset to it. The created asset is printed as JSON on stdout.

Any error (missing answer, HTTP failure, unreadable file) is left to
propagate, so the process exits non-zero with a traceback.
"""

from __future__ import annotations

import json
from collections.abc import Callable

from github_release.client import ReleaseClient, ReleaseClientProtocol
from github_release.git_remote import detect_repository
from github_release.logging_config import setup_logging
from github_release.prompts import InputProvider, TerminalInputProvider
from github_release.schemas import PublishInputs, RepositoryRef

ClientFactory = Callable[..., ReleaseClientProtocol]


def collect_inputs(
    provider: InputProvider,
    defaults: RepositoryRef | None = None,
) -> PublishInputs:
    """Ask the operator for everything needed to publish a release.

    Args:
        provider: Where answers come from
        defaults: Owner/repo guessed from the git remote, if any

    Returns:
        The gathered answers
    """
    owner = provider.ask("owner", default=defaults.owner if defaults else None)
    repo = provider.ask("repo", default=defaults.repo if defaults else None)
    user = provider.ask("user", default=owner)
    password = provider.ask("password", hide=True)
    tag_name = provider.ask("tag name")
    name = provider.ask("name", default=tag_name)
    body = provider.ask("body", default=f"Release {name}", expand=True)
    filename = provider.ask("filename")
    content_type = provider.ask("content type", default="application/zip")
    return PublishInputs(
        owner=owner,
        repo=repo,
        user=user,
        password=password,
        tag_name=tag_name,
        name=name,
        body=body,
        prerelease=True,
        filename=filename,
        content_type=content_type,
    )


def publish(inputs: PublishInputs, client_factory: ClientFactory = ReleaseClient) -> dict:
    """Create the release and upload its asset.

    Returns:
        The asset descriptor returned by the API
    """
    with client_factory(
        user=inputs.user,
        password=inputs.password,
        owner=inputs.owner,
        repo=inputs.repo,
    ) as client:
        client.create_release(
            tag_name=inputs.tag_name,
            name=inputs.name,
            body=inputs.body,
            prerelease=inputs.prerelease,
        )
        return client.upload_asset(
            filename=inputs.filename,
            content_type=inputs.content_type,
        )


def main(
    provider: InputProvider | None = None,
    client_factory: ClientFactory = ReleaseClient,
) -> None:
    """CLI entry point.

    Args:
        provider: Answer source. Prompts on the terminal if None.
        client_factory: Builds the release client (tests pass a mock)
    """
    setup_logging()
    defaults = detect_repository()
    inputs = collect_inputs(provider or TerminalInputProvider(), defaults)
    asset = publish(inputs, client_factory)
    print(json.dumps(asset, indent=2))


if __name__ == "__main__":
    main()
