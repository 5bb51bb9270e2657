"""Tests for lib.action_context: inputs, event payload, commit context, outputs."""

import json

from lib.action_context import (
    action_input,
    commit_context,
    load_event,
    pull_request_number,
    repository,
    write_outputs,
)


class TestActionInput:
    def test_underscore_spelling(self, monkeypatch):
        monkeypatch.setenv("INPUT_GITHUB_TOKEN", " tok ")
        assert action_input("github-token") == "tok"

    def test_runner_hyphen_spelling(self, monkeypatch):
        monkeypatch.delenv("INPUT_COMMIT_SHA", raising=False)
        monkeypatch.setenv("INPUT_COMMIT-SHA", "abc")
        assert action_input("commit-sha") == "abc"

    def test_blank_uses_default(self, monkeypatch):
        monkeypatch.setenv("INPUT_ENVIRONMENT", "  ")
        assert action_input("environment", "preview") == "preview"


class TestEvent:
    def test_pull_request_number(self, tmp_path):
        path = tmp_path / "event.json"
        path.write_text(json.dumps({"pull_request": {"number": 7}}), encoding="utf-8")
        assert pull_request_number(load_event(str(path))) == 7

    def test_push_event_has_no_pr(self):
        assert pull_request_number({"ref": "refs/heads/main"}) is None

    def test_rejects_non_integer_number(self):
        assert pull_request_number({"pull_request": {"number": "7"}}) is None
        assert pull_request_number({"pull_request": {"number": True}}) is None

    def test_missing_event_file_is_empty(self, tmp_path, capsys):
        assert load_event(str(tmp_path / "missing.json")) == {}
        assert "::warning::unable to read event payload" in capsys.readouterr().err

    def test_invalid_event_json_is_empty(self, tmp_path):
        path = tmp_path / "event.json"
        path.write_text("{", encoding="utf-8")
        assert load_event(str(path)) == {}

    def test_no_event_path(self, monkeypatch):
        monkeypatch.delenv("GITHUB_EVENT_PATH", raising=False)
        assert load_event() == {}


class TestRepository:
    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("GITHUB_REPOSITORY", "org/repo")
        assert repository() == "org/repo"

    def test_explicit_wins(self, monkeypatch):
        monkeypatch.setenv("GITHUB_REPOSITORY", "org/repo")
        assert repository("other/thing") == "other/thing"

    def test_invalid_is_empty(self, monkeypatch):
        monkeypatch.delenv("GITHUB_REPOSITORY", raising=False)
        assert repository("noslash") == ""
        assert repository() == ""


class TestCommitContext:
    def test_ambient_sha_is_shortened(self, monkeypatch):
        monkeypatch.delenv("GITHUB_HEAD_REF", raising=False)
        monkeypatch.setenv("GITHUB_REF", "refs/heads/main")
        monkeypatch.setenv("GITHUB_SHA", "abcdef1234567890")
        assert commit_context() == ("main", "abcdef1")

    def test_explicit_sha_kept_verbatim(self, monkeypatch):
        monkeypatch.delenv("GITHUB_HEAD_REF", raising=False)
        monkeypatch.setenv("GITHUB_REF", "refs/heads/main")
        assert commit_context("abcdef1234567890") == ("main", "abcdef1234567890")

    def test_head_ref_preferred_for_pull_requests(self, monkeypatch):
        monkeypatch.setenv("GITHUB_HEAD_REF", "feature/login")
        monkeypatch.setenv("GITHUB_REF", "refs/pull/42/merge")
        monkeypatch.setenv("GITHUB_SHA", "1111111222")
        assert commit_context() == ("feature/login", "1111111")

    def test_missing_context_is_empty(self, monkeypatch):
        for key in ("GITHUB_HEAD_REF", "GITHUB_REF", "GITHUB_SHA"):
            monkeypatch.delenv(key, raising=False)
        assert commit_context() == ("", "")


class TestWriteOutputs:
    def test_appends_lines(self, tmp_path):
        path = tmp_path / "out"
        path.write_text("existing=1\n", encoding="utf-8")
        write_outputs({"mode": "created", "comment-id": "5"}, str(path))
        assert path.read_text(encoding="utf-8") == "existing=1\nmode=created\ncomment-id=5\n"

    def test_env_output_file_used_when_no_path_given(self, monkeypatch, tmp_path):
        path = tmp_path / "github_output"
        monkeypatch.setenv("GITHUB_OUTPUT", str(path))
        write_outputs({"mode": "updated"})
        assert path.read_text(encoding="utf-8") == "mode=updated\n"

    def test_noop_without_output_file(self, monkeypatch, tmp_path):
        monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
        monkeypatch.chdir(tmp_path)
        write_outputs({"mode": "created"})
        assert list(tmp_path.iterdir()) == []
