"""Block merges when forbidden marker text is found."""

from .ignore import is_ignored
from .models import CheckResult, FileMatch, NoMergeConfig, PatternMatch
from .patterns import contains_pattern, find_pattern_matches
from .result import build_result, check_description
from .walker import scan_directory, scan_remote_files

__all__ = [
    "is_ignored",
    "contains_pattern",
    "find_pattern_matches",
    "scan_directory",
    "scan_remote_files",
    "check_description",
    "build_result",
    "CheckResult",
    "FileMatch",
    "NoMergeConfig",
    "PatternMatch",
]
