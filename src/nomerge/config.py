"""Loading .nomerge.config.json with defaults."""

import json
import logging
from pathlib import Path
from typing import Awaitable, Callable, Optional, Sequence

from pydantic import ValidationError

from .models import NoMergeConfig
from .walker import CONFIG_FILENAME

logger = logging.getLogger(__name__)

# Workflow files naturally mention the action's own name
DEFAULT_IGNORE_PATTERNS: list[str] = [".github/workflows/**"]


def load_config_text(text: str) -> Optional[NoMergeConfig]:
    """Parse config JSON. Returns None if it is not valid."""
    try:
        return NoMergeConfig.model_validate(json.loads(text))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.info(f"Invalid {CONFIG_FILENAME}: {e}")
        return None


def with_baseline_ignore(config: NoMergeConfig, baseline: Sequence[str]) -> NoMergeConfig:
    """Prepend baseline ignore rules to the configured ones."""
    return config.model_copy(update={"ignore": [*baseline, *config.ignore]})


def load_config_file(directory: str | Path) -> Optional[NoMergeConfig]:
    """Read CONFIG_FILENAME from a local directory, if present and valid."""
    config_path = Path(directory) / CONFIG_FILENAME
    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    return load_config_text(text)


async def load_remote_config(
    fetch_content: Callable[[str, str], Awaitable[str]],
    ref: str,
    baseline_ignore: Sequence[str] = DEFAULT_IGNORE_PATTERNS,
) -> NoMergeConfig:
    """Load the config from the repository at ref.

    Falls back to the defaults (pattern "nomerge", case-insensitive) when the
    file is missing or unreadable. Baseline ignore rules are always included.
    """
    config = None
    try:
        text = await fetch_content(CONFIG_FILENAME, ref)
    except Exception as e:
        logger.info(f"No {CONFIG_FILENAME} found ({e}), using default pattern: 'nomerge'")
    else:
        config = load_config_text(text)

    return with_baseline_ignore(config or NoMergeConfig(), baseline_ignore)
