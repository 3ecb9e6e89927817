"""Run a full check over a local directory or a pull request."""

import logging
import threading
from pathlib import Path
from typing import Optional, Sequence

import httpx

from .config import load_config_file, load_remote_config
from .errors import GitHubAPIError, ScanError
from .github_client import GitHubClient
from .models import DEFAULT_PATTERN, CheckResult, PullRequestEvent
from .result import build_result, check_description
from .walker import scan_directory, scan_remote_files

logger = logging.getLogger(__name__)


def resolve_local_options(
    directory: str | Path,
    patterns: Sequence[str],
    ignore: Sequence[str],
    case_sensitive: bool,
) -> tuple[list[str], list[str], bool]:
    """Merge explicit options with a .nomerge.config.json in the directory.

    Explicit patterns win over configured ones; ignore rules are combined;
    case sensitivity is on if either source turns it on.
    """
    config = load_config_file(directory)
    if config is None:
        return list(patterns) or [DEFAULT_PATTERN], list(ignore), case_sensitive

    logger.info(f"Using config from {directory}")
    return (
        list(patterns) or list(config.nomerge),
        [*ignore, *config.ignore],
        case_sensitive or config.case_sensitive,
    )


def run_local_check(
    directory: str | Path,
    patterns: Sequence[str],
    case_sensitive: bool = False,
    ignore: Sequence[str] = (),
    description: Optional[str] = None,
    cancel_event: Optional[threading.Event] = None,
) -> CheckResult:
    """Scan a local directory (and optionally a description).

    Raises:
        ScanError: If the directory cannot be scanned.
    """
    found_in_description = check_description(description, patterns, case_sensitive)
    found_in_files = scan_directory(
        directory,
        patterns,
        case_sensitive=case_sensitive,
        ignore=ignore,
        cancel_event=cancel_event,
    )
    return build_result(patterns, found_in_files, found_in_description)


async def run_pull_request_check(client: GitHubClient, event: PullRequestEvent) -> CheckResult:
    """Check a pull request's description and changed files.

    Raises:
        ScanError: If the list of changed files cannot be fetched.
    """
    pr = event.pull_request
    fetch = client.content_fetcher(event.owner, event.repo)

    config = await load_remote_config(fetch, pr.head_sha)
    patterns = config.nomerge
    logger.info(f"Forbidden patterns: {patterns}, case sensitive: {config.case_sensitive}")
    if config.ignore:
        logger.info(f"Ignore patterns: {config.ignore}")

    found_in_description = check_description(pr.body, patterns, config.case_sensitive)

    try:
        files = await client.list_pull_request_files(event.owner, event.repo, pr.number)
    except (GitHubAPIError, httpx.HTTPError) as e:
        raise ScanError(f"Could not list files of PR #{pr.number}: {e}") from e

    found_in_files = await scan_remote_files(
        files,
        fetch,
        pr.head_sha,
        patterns,
        case_sensitive=config.case_sensitive,
        ignore=config.ignore,
    )

    return build_result(patterns, found_in_files, found_in_description, pr_mode=True)
