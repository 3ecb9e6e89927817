#!/usr/bin/env python3
"""
Sandbox entrypoint for nomerge.
Reads check parameters from stdin JSON, runs the check, outputs JSON to stdout.

Input:
{
  "path": ".",                  // or "directory", or "repo_url"
  "patterns": ["TODO", "FIXME"],  // optional, default ["nomerge"]; a string is accepted
  "ignore": ["docs/**"],        // optional
  "case_sensitive": false,      // optional
  "description": "PR body"      // optional
}

Exit code is 0 when the check passed, 1 when a forbidden pattern was found
or the check could not run.
"""

import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from git.exc import GitCommandError
from pydantic import ValidationError

from nomerge.errors import NoMergeError
from nomerge.git_utils import cloned_repo
from nomerge.models import CheckRequest
from nomerge.runner import run_local_check

logging.basicConfig(level=logging.INFO, stream=sys.stderr)
logger = logging.getLogger(__name__)


def _run(request: CheckRequest):
    kwargs = {
        "case_sensitive": request.case_sensitive,
        "ignore": request.ignore,
        "description": request.description,
    }
    if request.path:
        return run_local_check(request.path, request.patterns, **kwargs)

    try:
        with cloned_repo(request.repo_url) as repo_path:
            return run_local_check(repo_path, request.patterns, **kwargs)
    except GitCommandError as e:
        raise RuntimeError(f"Failed to clone repository: {e}") from e


def main() -> None:
    try:
        input_data = json.load(sys.stdin)
    except json.JSONDecodeError as e:
        print(json.dumps({"error": f"Invalid JSON input: {e}"}))
        sys.exit(1)

    if "directory" in input_data and "path" not in input_data:
        input_data["path"] = input_data.pop("directory")
    if "nomerge" in input_data and "patterns" not in input_data:
        input_data["patterns"] = input_data.pop("nomerge")
    if "caseSensitive" in input_data and "case_sensitive" not in input_data:
        input_data["case_sensitive"] = input_data.pop("caseSensitive")

    try:
        request = CheckRequest.model_validate(input_data)
    except ValidationError as e:
        print(json.dumps({"error": f"Invalid input: {e}"}))
        sys.exit(1)

    if not request.path and not request.repo_url:
        print(
            json.dumps(
                {
                    "error": "Missing required input. Provide either 'repo_url' (git URL) or 'path'/'directory' (local path)",
                    "examples": {
                        "remote": {"repo_url": "https://github.com/user/repo"},
                        "local": {"path": "."},
                    },
                }
            )
        )
        sys.exit(1)

    try:
        result = _run(request)
    except (NoMergeError, RuntimeError) as e:
        print(json.dumps({"error": str(e)}))
        sys.exit(1)

    print(json.dumps(result.model_dump()))
    sys.exit(0 if result.passed else 1)


if __name__ == "__main__":
    main()
