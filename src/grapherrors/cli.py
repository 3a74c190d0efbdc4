# src/grapherrors/cli.py
from __future__ import annotations
import argparse
import sys
from typing import List, Optional

from grapherrors.config.loader import get_errors_config
from grapherrors.http.classifier import classify
from grapherrors.http.errors import ResumableUploadError
from grapherrors.http.response import GraphResponse, decode_body
from grapherrors.http.retry import is_retry_candidate


class _Dbg:
    def debug(self, msg):
        print("[CLASSIFY]", msg, file=sys.stderr)


def _read(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as fh:
        return fh.read()


def render(err, snippet_len: int = 400) -> List[str]:
    lines = [
        f"kind: {err.kind.value}",
        f"class: {type(err.cause).__name__}",
        f"code: {err.code}",
        f"subcode: {err.sub_error_code}",
        f"type: {err.error_type}",
        f"status: {err.http_status_code}",
        f"message: {err.message}",
        f"retry: {'yes' if is_retry_candidate(err) else 'no'}",
    ]
    if isinstance(err.cause, ResumableUploadError):
        lines.append(f"start_offset: {err.cause.start_offset}")
        lines.append(f"end_offset: {err.cause.end_offset}")
    if err.trace_id:
        lines.append(f"trace: {err.trace_id}")
    lines.append(f"body: {err.body_snippet(snippet_len)}")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="grapherrors", description="Classify a Graph error body.")
    ap.add_argument("path", help="JSON file with the response body, or - for stdin")
    ap.add_argument("--status", type=int, default=400, help="HTTP status of the response")
    ap.add_argument("--settings", default=None, help="path to appsettings.json")
    args = ap.parse_args(argv)

    cfg = get_errors_config(args.settings)
    try:
        text = _read(args.path)
    except OSError as ex:
        print(f"cannot read {args.path}: {ex}", file=sys.stderr)
        return 2

    resp = GraphResponse(decoded_body=decode_body(text), http_status_code=args.status, body=text)
    err = classify(resp, logger=_Dbg() if cfg["log_classification"] else None)
    for line in render(err, cfg["body_snippet_len"]):
        print(line)
    return 0
