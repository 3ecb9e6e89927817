"""Glob-style ignore rules for file paths.

Supported syntax:
    *   any run of characters except "/"
    **  any run of characters including "/"
    ?   exactly one character except "/"

Everything else is matched as written. A rule that equals the path exactly
always matches, even if it contains glob characters.
"""

import logging
import re
from functools import lru_cache
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

_DOUBLESTAR = "___DOUBLESTAR___"


def normalize_path(path: str) -> str:
    """Strip a single leading "./"."""
    return path[2:] if path.startswith("./") else path


def glob_to_regex(rule: str) -> str:
    """Translate an ignore rule into an anchored regex string.

    The order of substitutions matters: dots are escaped before any wildcard
    is expanded, and "**" is swapped out before single "*" is handled.
    """
    expr = (
        normalize_path(rule)
        .replace(".", r"\.")
        .replace("**", _DOUBLESTAR)
        .replace("*", "[^/]*")
        .replace(_DOUBLESTAR, ".*")
        .replace("?", "[^/]")
    )
    return f"^{expr}$"


@lru_cache(maxsize=512)
def _compile_rule(rule: str) -> Optional[re.Pattern]:
    try:
        return re.compile(glob_to_regex(rule))
    except re.error as e:
        logger.debug(f"Ignore rule {rule!r} is not a valid glob: {e}")
        return None


def is_ignored(path: str, rules: Iterable[str]) -> bool:
    """Return True if any rule matches the path."""
    normalized = normalize_path(path)

    for rule in rules:
        if normalized == normalize_path(rule):
            return True

        regex = _compile_rule(rule)
        if regex is not None and regex.fullmatch(normalized):
            return True

    return False
