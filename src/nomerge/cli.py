"""Command-line entry point.

Runs in GitHub Actions mode when GITHUB_ACTIONS=true, otherwise scans a local
directory using the command-line options.
"""

import argparse
import asyncio
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .action import is_github_actions, run_action
from .errors import ConfigError, NoMergeError
from .models import DEFAULT_PATTERN, CheckResult
from .result import fix_hints
from .runner import resolve_local_options, run_local_check

logger = logging.getLogger(__name__)

RULE = "=" * 50

EPILOG = """\
examples:
  nomerge                                   check for "nomerge" in the current directory
  nomerge -n FIXME -n TODO                  check for custom patterns
  nomerge -i "*.html" -i "test/**"          ignore files
  nomerge -n FIXME --case-sensitive         case-sensitive search
  nomerge -d ./src                          scan a specific directory

In GitHub Actions, configuration is read from .nomerge.config.json in the
repository at the PR head commit.
"""


@dataclass
class CliOptions:
    patterns: list[str] = field(default_factory=list)
    ignore_patterns: list[str] = field(default_factory=list)
    case_sensitive: bool = False
    directory: Optional[str] = None


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise ConfigError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="nomerge",
        description="Prevent PR merges when forbidden patterns are found",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-n", "--nomerge",
        dest="patterns",
        action="append",
        default=[],
        metavar="PATTERN",
        help=f'pattern to search for, repeatable (default: "{DEFAULT_PATTERN}")',
    )
    parser.add_argument(
        "-i", "--ignore",
        dest="ignore_patterns",
        action="append",
        default=[],
        metavar="GLOB",
        help='glob for files to ignore, repeatable (e.g. "*.html", "src/**/*.test.ts")',
    )
    parser.add_argument(
        "-c", "--case-sensitive",
        action="store_true",
        help="match patterns case-sensitively (default: case-insensitive)",
    )
    parser.add_argument(
        "-d", "--directory",
        metavar="PATH",
        help="directory to scan (default: current directory)",
    )
    return parser


def parse_cli_args(argv: Sequence[str]) -> CliOptions:
    """Parse command-line arguments.

    Raises:
        ConfigError: On unknown arguments or a missing option value.
    """
    args = build_parser().parse_args(list(argv))
    return CliOptions(
        patterns=args.patterns,
        ignore_patterns=args.ignore_patterns,
        case_sensitive=args.case_sensitive,
        directory=args.directory,
    )


def run_cli_mode(options: CliOptions) -> CheckResult:
    directory = options.directory or os.getcwd()
    patterns, ignore, case_sensitive = resolve_local_options(
        directory,
        options.patterns,
        options.ignore_patterns,
        options.case_sensitive,
    )

    print(f"\n📁 Scanning directory: {directory}")
    print(f"📋 Forbidden pattern(s): {', '.join(repr(p) for p in patterns)}")
    if ignore:
        print(f"📋 Ignore patterns: {', '.join(repr(p) for p in ignore)}")

    return run_local_check(directory, patterns, case_sensitive=case_sensitive, ignore=ignore)


def print_result(result: CheckResult) -> None:
    print(f"\n{RULE}\n📊 RESULTS\n{RULE}")
    print(result.message)
    print(RULE)

    if result.passed:
        print("\n🎉 Check passed!")
        return

    print("\n💡 To fix this:")
    for hint in fix_hints(result):
        print(f"  - {hint}")
    print(
        "\n🔒 Failed checks only block merging when branch protection requires"
        " the nomerge status check to pass (see README, \"Blocking merges\")."
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run nomerge and return the process exit code (0 clean, 1 otherwise)."""
    logging.basicConfig(level=logging.INFO)
    argv = sys.argv[1:] if argv is None else argv

    print("🚀 NoMerge Starting...")
    print(RULE)

    try:
        if is_github_actions():
            print("📦 Running in GitHub Actions mode")
            result = asyncio.run(run_action())
        else:
            print("💻 Running in CLI mode")
            result = run_cli_mode(parse_cli_args(argv))
    except NoMergeError as e:
        print(f"\n❌ Fatal error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Unexpected error")
        print(f"\n❌ Fatal error: {e!r}", file=sys.stderr)
        return 1

    print_result(result)
    return 0 if result.passed else 1


if __name__ == "__main__":
    sys.exit(main())
