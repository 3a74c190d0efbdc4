import json, os, pathlib

DEFAULT_PATH = "config/appsettings.json"


def load_appsettings(path: str | None = None) -> dict:
    p = pathlib.Path(path or os.environ.get("GRAPHERRORS_SETTINGS", DEFAULT_PATH))
    if not p.exists():
        return {}
    try:
        text = p.read_text(encoding="utf-8").strip()
        if not text:
            return {}
        data = json.loads(text)
    except (OSError, ValueError):
        # unreadable or malformed JSON → fall back to defaults
        return {}
    return data if isinstance(data, dict) else {}


def _as_bool(value, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return default


def get_errors_config(path: str | None = None):
    cfg = load_appsettings(path).get("errors", {})
    if not isinstance(cfg, dict):
        cfg = {}
    return {
        "body_snippet_len": int(cfg.get("body_snippet_len", 400)),
        "log_classification": _as_bool(cfg.get("log_classification"), False),
    }
