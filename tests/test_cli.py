from __future__ import annotations

import io
import json

from grapherrors.cli import main


def _write(tmp_path, body, name="body.json"):
    p = tmp_path / name
    p.write_text(json.dumps(body), encoding="utf-8")
    return str(p)


def _settings(tmp_path, **errors):
    p = tmp_path / "appsettings.json"
    p.write_text(json.dumps({"errors": errors}), encoding="utf-8")
    return str(p)


def test_cli_prints_offsets(tmp_path, capsys):
    path = _write(tmp_path, {"error": {"message": "resume", "code": 6001, "error_subcode": 1363037,
                                       "error_data": {"start_offset": "10", "end_offset": "20"}}})
    rc = main([path, "--settings", _settings(tmp_path)])
    out = capsys.readouterr().out.splitlines()
    assert rc == 0
    assert "kind: resumable_upload" in out
    assert "class: ResumableUploadError" in out
    assert "start_offset: 10" in out
    assert "end_offset: 20" in out


def test_cli_reads_stdin_and_status(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO('{"error": {"code": 2, "message": "down"}}'))
    rc = main(["-", "--status", "503", "--settings", _settings(tmp_path)])
    out = capsys.readouterr().out.splitlines()
    assert rc == 0
    assert "kind: server" in out
    assert "status: 503" in out
    assert "retry: yes" in out


def test_cli_truncates_body_and_logs(tmp_path, capsys):
    path = _write(tmp_path, {"error": {"code": 190, "message": "x" * 100}})
    main([path, "--settings", _settings(tmp_path, body_snippet_len=5, log_classification=True)])
    captured = capsys.readouterr()
    assert "body: " + json.dumps({"error": {"code": 190, "message": "x" * 100}})[:5] in captured.out.splitlines()
    assert "[CLASSIFY]" in captured.err
    assert "auth_code" in captured.err


def test_cli_missing_file(tmp_path, capsys):
    rc = main([str(tmp_path / "missing.json"), "--settings", _settings(tmp_path)])
    assert rc == 2
    assert "cannot read" in capsys.readouterr().err
