"""Tests for configuration loading."""

from nomerge.config import (
    DEFAULT_IGNORE_PATTERNS,
    load_config_file,
    load_config_text,
    load_remote_config,
    with_baseline_ignore,
)
from nomerge.errors import GitHubAPIError
from nomerge.models import NoMergeConfig
from nomerge.walker import CONFIG_FILENAME


class TestNoMergeConfig:
    """Test config model defaults and coercion."""

    def test_defaults(self):
        config = NoMergeConfig()
        assert config.nomerge == ["nomerge"]
        assert config.case_sensitive is False
        assert config.ignore == []

    def test_single_pattern_string_becomes_list(self):
        assert NoMergeConfig.model_validate({"nomerge": "FIXME"}).nomerge == ["FIXME"]

    def test_camel_case_key(self):
        config = NoMergeConfig.model_validate({"caseSensitive": True})
        assert config.case_sensitive is True

    def test_null_values_use_defaults(self):
        config = NoMergeConfig.model_validate({"nomerge": None, "ignore": None})
        assert config.nomerge == ["nomerge"]
        assert config.ignore == []


class TestLoadConfigText:
    """Test load_config_text."""

    def test_valid(self):
        config = load_config_text('{"nomerge": ["TODO", "WIP"], "ignore": ["docs/**"]}')
        assert config.nomerge == ["TODO", "WIP"]
        assert config.ignore == ["docs/**"]

    def test_invalid_json(self):
        assert load_config_text("{not json") is None

    def test_wrong_shape(self):
        assert load_config_text('["TODO"]') is None
        assert load_config_text('{"caseSensitive": "maybe"}') is None


class TestLoadConfigFile:
    """Test load_config_file."""

    def test_missing_file(self, tmp_path):
        assert load_config_file(tmp_path) is None

    def test_reads_file(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text('{"nomerge": "DONOTMERGE", "caseSensitive": true}')
        config = load_config_file(tmp_path)
        assert config.nomerge == ["DONOTMERGE"]
        assert config.case_sensitive is True


class TestLoadRemoteConfig:
    """Test load_remote_config."""

    async def test_merges_baseline_ignore(self):
        async def fetch(path, ref):
            assert path == CONFIG_FILENAME
            assert ref == "sha1"
            return '{"nomerge": "WIP", "ignore": ["*.md"]}'

        config = await load_remote_config(fetch, "sha1")

        assert config.nomerge == ["WIP"]
        assert config.ignore == [*DEFAULT_IGNORE_PATTERNS, "*.md"]

    async def test_missing_config_uses_defaults(self):
        async def fetch(path, ref):
            raise GitHubAPIError(404, "Not Found")

        config = await load_remote_config(fetch, "sha1")

        assert config.nomerge == ["nomerge"]
        assert config.case_sensitive is False
        assert config.ignore == DEFAULT_IGNORE_PATTERNS

    async def test_unparseable_config_uses_defaults(self):
        async def fetch(path, ref):
            return "not json"

        config = await load_remote_config(fetch, "sha1")
        assert config.nomerge == ["nomerge"]


class TestWithBaselineIgnore:
    def test_prepends(self):
        config = with_baseline_ignore(NoMergeConfig(ignore=["b"]), ["a"])
        assert config.ignore == ["a", "b"]
