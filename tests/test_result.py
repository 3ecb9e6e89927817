"""Tests for the description check and result aggregation."""

import pytest
from pydantic import ValidationError

from nomerge.models import FileMatch, PatternMatch
from nomerge.result import (
    build_result,
    check_description,
    fix_hints,
    format_file_line,
    format_message,
    strip_code,
)


def _file_match(filename: str, *variants: tuple[str, int], pattern: str = "todo") -> FileMatch:
    matches = [PatternMatch(pattern=pattern, actual_text=text, count=count) for text, count in variants]
    return FileMatch(filename=filename, matches=matches, total_count=sum(c for _, c in variants))


class TestStripCode:
    """Test removal of code from descriptions."""

    def test_removes_inline_code(self):
        assert strip_code("See `nomerge` in docs") == "See  in docs"

    def test_removes_fenced_block_across_lines(self):
        text = "Before\n```json\n{\"nomerge\": \"x\"}\n```\nAfter"
        assert strip_code(text) == "Before\n\nAfter"

    def test_fenced_blocks_are_non_greedy(self):
        text = "```a``` keep ```b```"
        assert strip_code(text) == " keep "

    def test_empty_backticks_are_kept(self):
        assert strip_code("a `` b") == "a `` b"


class TestCheckDescription:
    """Test check_description."""

    def test_backticked_pattern_is_not_a_match(self):
        assert check_description("See `nomerge` in docs", ["nomerge"], False) is False

    def test_plain_pattern_matches(self):
        assert check_description("nomerge: still testing", ["nomerge"], False) is True

    def test_fenced_code_is_ignored(self):
        description = "Config example:\n```\n{\"nomerge\": \"NOMERGE\"}\n```\n"
        assert check_description(description, ["nomerge"], False) is False

    def test_pattern_outside_code_still_matches(self):
        description = "Uses `config`. NOMERGE until review."
        assert check_description(description, ["nomerge"], False) is True

    @pytest.mark.parametrize("description", [None, ""])
    def test_missing_description(self, description):
        assert check_description(description, ["nomerge"], False) is False


class TestFormatMessage:
    """Test summary rendering."""

    def test_passed_messages(self):
        assert format_message(["nomerge"], []) == "✅ No forbidden patterns found!"
        assert format_message(["nomerge"], [], pr_mode=True) == (
            "✅ No forbidden patterns found. PR is ready to merge!"
        )

    def test_file_line_lists_distinct_texts(self):
        line = format_file_line(_file_match("src/api.js", ("TODO", 2), ("todo", 1)))
        assert line == '    • src/api.js: 3 forbidden patterns: "TODO", "todo"'

    def test_file_line_singular(self):
        line = format_file_line(_file_match("src/auth.js", ("TODO", 1)))
        assert line == '    • src/auth.js: 1 forbidden pattern: "TODO"'

    def test_failed_message_names_every_file(self):
        files = [_file_match("a.js", ("TODO", 1)), _file_match("b.js", ("todo", 2))]
        message = format_message(["TODO", "FIXME"], files)

        assert message.startswith('❌ Found forbidden patterns: "TODO", "FIXME":\n')
        assert "  - 2 file(s) contain forbidden pattern:" in message
        assert '    • a.js: 1 forbidden pattern: "TODO"' in message
        assert '    • b.js: 2 forbidden patterns: "todo"' in message
        assert "PR description" not in message

    def test_description_only_pr_mode(self):
        message = format_message(["nomerge"], [], found_in_description=True, pr_mode=True)
        assert message == (
            '❌ Found forbidden "nomerge" - PR cannot be merged:\n'
            "  - PR description contains forbidden pattern\n"
        )


class TestBuildResult:
    """Test build_result."""

    def test_passed_when_nothing_found(self):
        result = build_result(["nomerge"], [])
        assert result.passed is True
        assert result.found_in_description is False
        assert result.found_in_files == []
        assert result.patterns == ["nomerge"]

    def test_failed_on_files(self):
        result = build_result(["TODO"], [_file_match("src/auth.js", ("TODO", 1))])
        assert result.passed is False
        assert "src/auth.js" in result.message

    def test_failed_on_description(self):
        result = build_result(["nomerge"], [], found_in_description=True)
        assert result.passed is False
        assert result.found_in_description is True

    def test_result_is_immutable(self):
        result = build_result(["nomerge"], [])
        with pytest.raises(ValidationError):
            result.passed = False


class TestFixHints:
    """Test fix_hints."""

    def test_no_hints_when_passed(self):
        assert fix_hints(build_result(["x"], [])) == []

    def test_hints_for_description_and_files(self):
        result = build_result(["x"], [_file_match("a", ("x", 1))], found_in_description=True)
        hints = fix_hints(result)
        assert hints[0] == "Remove forbidden patterns from the PR description"
        assert any(".nomerge.config.json" in h for h in hints)
