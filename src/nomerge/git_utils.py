"""Shallow clones for scanning a repository by URL."""

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from git import Repo

logger = logging.getLogger(__name__)


@contextmanager
def cloned_repo(repo_url: str, ref: Optional[str] = None) -> Generator[Path, None, None]:
    """Clone a repository (depth 1) into a temp directory, removed on exit.

    Args:
        repo_url: URL of the repository to clone.
        ref: Optional branch or tag to check out.

    Yields:
        Path to the working tree.
    """
    repo_path = Path(tempfile.mkdtemp(prefix="nomerge_"))
    try:
        logger.info(f"Cloning {repo_url}")
        kwargs = {"depth": 1}
        if ref:
            kwargs["branch"] = ref
        Repo.clone_from(repo_url, repo_path, **kwargs)
        yield repo_path
    finally:
        shutil.rmtree(repo_path, ignore_errors=True)
