"""GitHub Actions mode: read the environment and event payload, check the PR."""

import json
import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import ValidationError

from .errors import ConfigError
from .github_client import GitHubClient
from .models import CheckResult, PullRequest, PullRequestEvent
from .runner import run_pull_request_check

logger = logging.getLogger(__name__)


def is_github_actions(environ: Optional[Mapping[str, str]] = None) -> bool:
    environ = os.environ if environ is None else environ
    return environ.get("GITHUB_ACTIONS") == "true"


def parse_event(payload: dict, repository: Optional[str] = None) -> PullRequestEvent:
    """Build a PullRequestEvent from a pull_request event payload.

    Owner and repo come from the payload's repository; GITHUB_REPOSITORY
    ("owner/repo") is used when the payload lacks it.
    """
    pr = payload.get("pull_request") if isinstance(payload, dict) else None
    if not pr:
        raise ConfigError("Event payload has no pull_request (is this a pull_request event?)")

    repo_info = payload.get("repository") or {}
    owner = (repo_info.get("owner") or {}).get("login")
    repo = repo_info.get("name")
    if (not owner or not repo) and repository:
        owner, _, repo = repository.partition("/")
    if not owner or not repo:
        raise ConfigError("Could not determine repository owner and name")

    try:
        pull_request = PullRequest(
            number=pr["number"],
            title=pr.get("title") or "",
            body=pr.get("body"),
            head_ref=pr["head"]["ref"],
            head_sha=pr["head"]["sha"],
            base_ref=pr["base"]["ref"],
        )
    except (KeyError, TypeError, AttributeError, ValidationError) as e:
        raise ConfigError(f"Malformed pull_request in event payload: {e!r}") from e

    return PullRequestEvent(pull_request=pull_request, owner=owner, repo=repo)


def load_event(event_path: str | Path, repository: Optional[str] = None) -> PullRequestEvent:
    try:
        payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read event payload {event_path}: {e}") from e
    return parse_event(payload, repository)


async def run_action(environ: Optional[Mapping[str, str]] = None) -> CheckResult:
    """Run the check for the pull request that triggered the workflow.

    Raises:
        ConfigError: If GITHUB_TOKEN, GITHUB_EVENT_PATH or GITHUB_REPOSITORY is missing.
        ScanError: If the changed files cannot be listed.
    """
    environ = os.environ if environ is None else environ

    token = environ.get("GITHUB_TOKEN")
    event_path = environ.get("GITHUB_EVENT_PATH")
    repository = environ.get("GITHUB_REPOSITORY")

    if not token:
        raise ConfigError("GITHUB_TOKEN is required")
    if not event_path:
        raise ConfigError("GITHUB_EVENT_PATH is required (not running in GitHub Actions?)")
    if not repository:
        raise ConfigError("GITHUB_REPOSITORY is required")

    event = load_event(event_path, repository)
    pr = event.pull_request
    logger.info(f"Pull Request #{pr.number}: {pr.title} ({pr.head_ref} -> {pr.base_ref}, {pr.head_sha})")

    async with GitHubClient(token, base_url=environ.get("GITHUB_API_URL")) as client:
        return await run_pull_request_check(client, event)
