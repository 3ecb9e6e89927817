"""Pydantic models for the nomerge check."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_PATTERN = "nomerge"


class PatternMatch(BaseModel):
    """One variant of a forbidden pattern found in a source."""

    model_config = ConfigDict(frozen=True)

    pattern: str = Field(description="The configured pattern that was searched for")
    actual_text: str = Field(description="Text actually found (may differ in case)")
    count: int = Field(ge=1, description="Number of times this variant appears")


class FileMatch(BaseModel):
    """Matches found in a single file."""

    model_config = ConfigDict(frozen=True)

    filename: str = Field(description="Path of the file relative to the scan root")
    matches: list[PatternMatch] = Field(default_factory=list, description="Distinct matched variants")
    total_count: int = Field(default=0, description="Sum of all match counts")


class CheckResult(BaseModel):
    """Final verdict of one nomerge run."""

    model_config = ConfigDict(frozen=True)

    passed: bool = Field(description="True when nothing forbidden was found")
    found_in_description: bool = Field(default=False, description="Whether the PR description matched")
    found_in_files: list[FileMatch] = Field(default_factory=list, description="Files containing forbidden patterns")
    message: str = Field(default="", description="Human-readable summary")
    patterns: list[str] = Field(default_factory=list, description="All patterns that were checked")


class NoMergeConfig(BaseModel):
    """Contents of .nomerge.config.json."""

    model_config = ConfigDict(populate_by_name=True)

    nomerge: list[str] = Field(
        default_factory=lambda: [DEFAULT_PATTERN],
        description="Forbidden pattern or list of patterns",
    )
    case_sensitive: bool = Field(
        default=False,
        alias="caseSensitive",
        description="Match patterns case-sensitively",
    )
    ignore: list[str] = Field(default_factory=list, description="Glob rules for files to skip")

    @field_validator("nomerge", mode="before")
    @classmethod
    def _single_pattern_to_list(cls, value):
        if value is None:
            return [DEFAULT_PATTERN]
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("ignore", mode="before")
    @classmethod
    def _none_ignore_to_list(cls, value):
        return [] if value is None else value


class RemoteFile(BaseModel):
    """A file changed in a pull request, as listed by the GitHub API."""

    filename: str = Field(description="Path of the file in the repository")
    status: str = Field(default="modified", description="added, modified, removed, renamed, ...")
    sha: str = Field(default="", description="Blob SHA")


class PullRequest(BaseModel):
    """The subset of a pull request the check needs."""

    number: int
    title: str = ""
    body: Optional[str] = None
    head_ref: str = ""
    head_sha: str
    base_ref: str = ""


class PullRequestEvent(BaseModel):
    """A parsed pull_request event payload."""

    pull_request: PullRequest
    owner: str
    repo: str


class CheckRequest(BaseModel):
    """Request body for running a check over a directory or repository."""

    path: Optional[str] = Field(default=None, description="Local directory to scan")
    repo_url: Optional[str] = Field(default=None, description="Git repository URL to clone and scan")
    patterns: list[str] = Field(
        default_factory=lambda: [DEFAULT_PATTERN],
        description="Forbidden patterns",
    )
    ignore: list[str] = Field(default_factory=list, description="Glob rules for files to skip")
    case_sensitive: bool = Field(default=False, description="Match patterns case-sensitively")
    description: Optional[str] = Field(
        default=None,
        description="Optional free text (e.g. a PR body) to check as well",
    )

    @field_validator("patterns", mode="before")
    @classmethod
    def _single_pattern_to_list(cls, value):
        if isinstance(value, str):
            return [value]
        return value
