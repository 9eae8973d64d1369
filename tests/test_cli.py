"""Tests for the command-line entry point."""

from __future__ import annotations

import io
import json

from training_engine.__main__ import main


class TestMain:
    def test_generate_from_file(self, tmp_path, capsys) -> None:
        request = tmp_path / "request.json"
        request.write_text(json.dumps({"action": "generate", "targetDuration": 30, "seed": 1}))
        assert main([str(request)]) == 0
        body = json.loads(capsys.readouterr().out)
        assert body["target_duration_minutes"] == 30

    def test_stdin(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO('{"action": "nope"}'))
        assert main([]) == 1
        assert json.loads(capsys.readouterr().out)["error"].startswith("Invalid action")

    def test_unreadable_request(self, tmp_path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("{not json")
        assert main([str(bad)]) == 2
        assert main([str(tmp_path / "missing.json")]) == 2
