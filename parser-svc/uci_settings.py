# Path: parser-svc/uci_settings.py
"""
Purpose: Environment configuration and debug breadcrumbs for the parser service.
Usage: from uci_settings import DEFAULT_TAGS, MAX_LINES, _dbg
"""
from __future__ import annotations

import os
from typing import List

from uci_parser import UCI_INFO_TAGS

def _env_flag(name: str) -> bool:
    return (os.getenv(name) or "").strip().lower() in ("1", "true", "yes", "on")

def parse_tag_list(text: str) -> List[str]:
    """'depth,score pv' -> ['depth', 'score', 'pv']"""
    return [t for t in text.replace(",", " ").split() if t]

def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        print(f"[PARSER] ignoring {name}={raw!r} (not an integer), using {default}", flush=True)
        return default

PRINT_DBG = _env_flag("UCI_PARSER_DEBUG")

DEFAULT_TAGS: List[str] = parse_tag_list(os.getenv("UCI_PARSER_DEFAULT_TAGS") or "") or list(UCI_INFO_TAGS)
MAX_LINES = _env_int("UCI_PARSER_MAX_LINES", 10000)
HOST = os.getenv("UCI_PARSER_HOST") or "127.0.0.1"
PORT = _env_int("UCI_PARSER_PORT", 8000)

def _dbg(where: str, msg: str) -> None:
    if PRINT_DBG:
        print(f"[DBG] {where}: {msg}", flush=True)
