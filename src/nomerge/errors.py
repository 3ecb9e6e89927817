"""Exceptions raised by the nomerge check."""


class NoMergeError(Exception):
    """Base class for nomerge errors."""


class ScanError(NoMergeError):
    """The set of sources to scan could not be determined (fatal)."""


class ConfigError(NoMergeError):
    """Invalid arguments or a missing GitHub Actions environment."""


class ContentUnreadableError(NoMergeError):
    """A single source could not be read as text. The source is skipped."""

    def __init__(self, path: str, reason: str = "not a text file"):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class GitHubAPIError(NoMergeError):
    """The GitHub API returned a non-success status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"GitHub API request failed: {status_code} {message}")
        self.status_code = status_code
