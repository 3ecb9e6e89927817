"""Tests for the stdin/stdout sandbox entrypoint."""

import io
import json

import pytest

import sandbox_main


def run_sandbox(monkeypatch, capsys, payload) -> tuple[int, dict]:
    text = payload if isinstance(payload, str) else json.dumps(payload)
    monkeypatch.setattr("sys.stdin", io.StringIO(text))
    with pytest.raises(SystemExit) as exc_info:
        sandbox_main.main()
    return exc_info.value.code, json.loads(capsys.readouterr().out)


class TestSandboxMain:
    def test_clean_directory(self, monkeypatch, capsys, clean_repo):
        code, output = run_sandbox(monkeypatch, capsys, {"path": str(clean_repo)})
        assert code == 0
        assert output["passed"] is True

    def test_directory_alias_and_config_style_keys(self, monkeypatch, capsys, todo_repo):
        code, output = run_sandbox(
            monkeypatch,
            capsys,
            {"directory": str(todo_repo), "nomerge": "todo", "caseSensitive": True},
        )
        assert code == 1
        assert output["patterns"] == ["todo"]
        assert [f["filename"] for f in output["found_in_files"]] == ["src/api.js"]

    def test_invalid_json(self, monkeypatch, capsys):
        code, output = run_sandbox(monkeypatch, capsys, "{oops")
        assert code == 1
        assert "Invalid JSON input" in output["error"]

    def test_missing_input(self, monkeypatch, capsys):
        code, output = run_sandbox(monkeypatch, capsys, {"patterns": ["TODO"]})
        assert code == 1
        assert "Missing required input" in output["error"]

    def test_missing_directory(self, monkeypatch, capsys, tmp_path):
        code, output = run_sandbox(monkeypatch, capsys, {"path": str(tmp_path / "nope")})
        assert code == 1
        assert "does not exist" in output["error"]
