"""Walk files (local or from a pull request) and collect pattern matches."""

import asyncio
import logging
import os
import threading
from pathlib import Path
from typing import Awaitable, Callable, Optional, Sequence

import httpx

from .errors import ContentUnreadableError, GitHubAPIError, ScanError
from .ignore import is_ignored
from .models import FileMatch, RemoteFile
from .patterns import find_pattern_matches

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".nomerge.config.json"

# Never descended into when walking a local tree
SKIP_DIRS: frozenset[str] = frozenset({".git", "node_modules"})

REMOVED_STATUS = "removed"

DEFAULT_MAX_CONCURRENCY = 8
DEFAULT_FETCH_TIMEOUT = 30.0
DEFAULT_FETCH_RETRIES = 1

ContentFetcher = Callable[[str, str], Awaitable[str]]


def _to_file_match(filename: str, content: str, patterns: Sequence[str], case_sensitive: bool) -> Optional[FileMatch]:
    matches = find_pattern_matches(content, patterns, case_sensitive)
    if not matches:
        return None
    return FileMatch(
        filename=filename,
        matches=matches,
        total_count=sum(m.count for m in matches),
    )


def iter_files(root: Path) -> list[tuple[Path, str]]:
    """List (absolute path, relative posix path) for every file under root.

    Directories in SKIP_DIRS are pruned. Names are sorted so repeated runs
    see files in the same order.
    """
    files: list[tuple[Path, str]] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)
        for name in sorted(filenames):
            file_path = Path(dirpath) / name
            files.append((file_path, file_path.relative_to(root).as_posix()))
    return files


def scan_directory(
    root: str | Path,
    patterns: Sequence[str],
    case_sensitive: bool = False,
    ignore: Sequence[str] = (),
    cancel_event: Optional[threading.Event] = None,
) -> list[FileMatch]:
    """Scan a local directory tree for forbidden patterns.

    Args:
        root: Directory to scan.
        patterns: Forbidden patterns.
        case_sensitive: Whether letter case must match exactly.
        ignore: Glob rules for relative paths to skip.
        cancel_event: If set while scanning, stop before the next file.

    Returns:
        One FileMatch per file that contains at least one pattern, in walk order.

    Raises:
        ScanError: If root does not exist or is not a directory.
    """
    root = Path(root)
    if not root.exists():
        raise ScanError(f"Path does not exist: {root}")
    if not root.is_dir():
        raise ScanError(f"Path is not a directory: {root}")

    file_matches: list[FileMatch] = []

    for file_path, relative_path in iter_files(root):
        if cancel_event is not None and cancel_event.is_set():
            logger.info("Scan cancelled")
            break

        if file_path.name == CONFIG_FILENAME:
            logger.info(f"Skipping config file: {relative_path}")
            continue

        if is_ignored(relative_path, ignore):
            logger.info(f"Skipping ignored file: {relative_path}")
            continue

        try:
            content = file_path.read_text(encoding="utf-8")
        except (UnicodeDecodeError, OSError) as e:
            logger.warning(f"Could not check file (possibly binary): {relative_path} ({e})")
            continue

        file_match = _to_file_match(relative_path, content, patterns, case_sensitive)
        if file_match:
            logger.info(f"Found forbidden pattern in: {relative_path}")
            file_matches.append(file_match)

    return file_matches


def should_scan_remote(file: RemoteFile, ignore: Sequence[str]) -> bool:
    """Apply the skip rules for a pull request file."""
    if file.status == REMOVED_STATUS:
        logger.info(f"Skipping deleted file: {file.filename}")
        return False
    if file.filename == CONFIG_FILENAME:
        logger.info(f"Skipping config file: {file.filename}")
        return False
    if is_ignored(file.filename, ignore):
        logger.info(f"Skipping ignored file: {file.filename}")
        return False
    return True


async def _fetch_with_retry(
    fetch_content: ContentFetcher,
    path: str,
    ref: str,
    timeout: float,
    retries: int,
) -> str:
    attempt = 0
    while True:
        try:
            return await asyncio.wait_for(fetch_content(path, ref), timeout=timeout)
        except (asyncio.TimeoutError, httpx.TransportError) as e:
            if attempt >= retries:
                raise
            attempt += 1
            logger.warning(f"Fetching {path} failed, retrying ({attempt}/{retries}): {e!r}")


async def scan_remote_files(
    files: Sequence[RemoteFile],
    fetch_content: ContentFetcher,
    ref: str,
    patterns: Sequence[str],
    case_sensitive: bool = False,
    ignore: Sequence[str] = (),
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    retries: int = DEFAULT_FETCH_RETRIES,
) -> list[FileMatch]:
    """Scan pull request files for forbidden patterns.

    Content is fetched through fetch_content, concurrently but bounded by
    max_concurrency. A file whose content cannot be fetched or decoded is
    logged and skipped; it does not affect the other files.

    Returns:
        One FileMatch per matching file, in the order of ``files``.
    """
    semaphore = asyncio.Semaphore(max_concurrency)

    async def check(file: RemoteFile) -> Optional[FileMatch]:
        async with semaphore:
            try:
                content = await _fetch_with_retry(fetch_content, file.filename, ref, timeout, retries)
            except (ContentUnreadableError, GitHubAPIError, httpx.HTTPError, asyncio.TimeoutError) as e:
                logger.warning(f"Could not check file (possibly binary): {file.filename} ({e!r})")
                return None
            except Exception as e:
                logger.warning(f"Could not check file: {file.filename} ({e!r})", exc_info=True)
                return None

        file_match = _to_file_match(file.filename, content, patterns, case_sensitive)
        if file_match:
            logger.info(f"Found forbidden pattern in: {file.filename}")
        return file_match

    to_scan = [f for f in files if should_scan_remote(f, ignore)]
    results = await asyncio.gather(*(check(f) for f in to_scan))

    return [r for r in results if r is not None]
