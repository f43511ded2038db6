# config.py — lookup endpoints, request settings and debug switches for jdict
# - Every constant can be overridden from the environment (JDICT_*).
# - Debug output goes to stderr; raw page dumps only happen in debug mode.

from __future__ import annotations
import os
import sys
from pathlib import Path

# ─────────────────────────── endpoints ────────────────────────────
# WWWJDIC backdoor: 1=EDICT, Z=raw, U=UTF-8, J=Japanese key; term is appended
EDICT_URL  = os.environ.get("JDICT_EDICT_URL", "https://www.edrdg.org/cgi-bin/wwwjdic/wwwjdic?1ZUJ")
WEBLIO_URL = os.environ.get("JDICT_WEBLIO_URL", "https://www.weblio.jp/content/")

# ─────────────────────────── requests ─────────────────────────────
USER_AGENT = os.environ.get("JDICT_USER_AGENT", "jdict/0.1 (+https://example.invalid)")
TIMEOUT    = float(os.environ.get("JDICT_TIMEOUT", "30"))

# ─────────────────────────── debug ────────────────────────────────
DBG = bool(os.environ.get("JDICT_DEBUG"))
DEFAULT_RAWDIR = Path(os.environ.get("JDICT_RAWDIR", "./_raw"))


def set_debug(enabled: bool):
    global DBG
    DBG = bool(enabled)


def dprint(*msg):
    if DBG:
        print("[DBG]", *msg, file=sys.stderr)


def dump_text(rawdir: Path, name: str, text: str):
    if not DBG:
        return
    rawdir.mkdir(parents=True, exist_ok=True)
    (rawdir / name).write_text(text, encoding="utf-8")
