"""Combine file matches and the description check into a CheckResult."""

import re
from typing import Optional, Sequence

from .models import CheckResult, FileMatch
from .patterns import contains_pattern, summarize_matches

_FENCED_CODE = re.compile(r"```[\s\S]*?```")
_INLINE_CODE = re.compile(r"`[^`]+`")


def strip_code(description: str) -> str:
    """Remove fenced code blocks, then inline code spans."""
    return _INLINE_CODE.sub("", _FENCED_CODE.sub("", description))


def check_description(
    description: Optional[str],
    patterns: Sequence[str],
    case_sensitive: bool,
) -> bool:
    """Check a PR description, ignoring anything inside backticks.

    Code samples and config file names quoted in backticks would otherwise
    trigger on the very pattern they document.
    """
    if not description:
        return False
    return contains_pattern(strip_code(description), patterns, case_sensitive)


def _quote(values: Sequence[str]) -> str:
    return ", ".join(f'"{v}"' for v in values)


def format_file_line(file_match: FileMatch) -> str:
    texts, _ = summarize_matches(file_match.matches)
    plural = "s" if file_match.total_count > 1 else ""
    return f"    • {file_match.filename}: {file_match.total_count} forbidden pattern{plural}: {_quote(texts)}"


def format_message(
    patterns: Sequence[str],
    found_in_files: Sequence[FileMatch],
    found_in_description: bool = False,
    pr_mode: bool = False,
) -> str:
    """Render the summary shown at the end of a run."""
    if not found_in_description and not found_in_files:
        if pr_mode:
            return "✅ No forbidden patterns found. PR is ready to merge!"
        return "✅ No forbidden patterns found!"

    if len(patterns) == 1:
        pattern_display = f'"{patterns[0]}"'
    else:
        pattern_display = f"patterns: {_quote(patterns)}"

    suffix = " - PR cannot be merged" if pr_mode else ""
    lines = [f"❌ Found forbidden {pattern_display}{suffix}:"]

    if found_in_description:
        lines.append("  - PR description contains forbidden pattern")
    if found_in_files:
        lines.append(f"  - {len(found_in_files)} file(s) contain forbidden pattern:")
        lines.extend(format_file_line(fm) for fm in found_in_files)

    return "\n".join(lines) + "\n"


def build_result(
    patterns: Sequence[str],
    found_in_files: Sequence[FileMatch],
    found_in_description: bool = False,
    pr_mode: bool = False,
) -> CheckResult:
    """Build the final verdict for a run."""
    return CheckResult(
        passed=not found_in_description and not found_in_files,
        found_in_description=found_in_description,
        found_in_files=list(found_in_files),
        message=format_message(patterns, found_in_files, found_in_description, pr_mode),
        patterns=list(patterns),
    )


def fix_hints(result: CheckResult) -> list[str]:
    """Suggestions printed after a failed run."""
    hints: list[str] = []
    if result.found_in_description:
        hints.append("Remove forbidden patterns from the PR description")
    if result.found_in_files:
        hints.append("Remove forbidden patterns from the files listed above")
        hints.append("Or add them to the ignore list in .nomerge.config.json")
    return hints
