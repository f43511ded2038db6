"""
jdict — network side of a lookup

- fetch_html(url): GET with our User-Agent/timeout; failures raise LookupFailed
- extract_pre_lines(html): text of every <pre>, one item per line (EDICT backdoor)
- lookup_edict(term) / lookup_weblio(term): fetch + hand off to the parsers
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional
from urllib.parse import quote

import requests
from bs4 import BeautifulSoup

from . import config
from .config import dprint, dump_text
from .edict_parser import parse_edict_lines
from .entry import DisplayItem, Entry
from .weblio_parser import parse_weblio_entries


class LookupFailed(RuntimeError):
    """Network or HTTP failure while fetching a dictionary page."""


def edict_url(term: str) -> str:
    return f"{config.EDICT_URL}{quote(term)}"


def weblio_url(term: str) -> str:
    return f"{config.WEBLIO_URL}{quote(term)}"


def fetch_html(url: str, rawdir: Optional[Path] = None, dump_name: str = "page.html") -> str:
    dprint(f"GET {url}")
    try:
        r = requests.get(url, headers={"User-Agent": config.USER_AGENT}, timeout=config.TIMEOUT)
    except requests.exceptions.RequestException as e:
        raise LookupFailed(f"request error: {e}") from e
    dprint(f"HTTP {r.status_code}, bytes={len(r.content)}")
    if r.status_code != 200:
        raise LookupFailed(f"HTTP {r.status_code} for {url}")

    # WWWJDIC does not always declare a charset; the backdoor is UTF-8 ("U" flag)
    if not r.encoding or r.encoding.lower() == "iso-8859-1":
        r.encoding = "utf-8"
    dump_text(rawdir or config.DEFAULT_RAWDIR, dump_name, r.text)
    return r.text


def extract_pre_lines(html: str) -> List[str]:
    soup = BeautifulSoup(html, "html.parser")
    lines: List[str] = []
    for pre in soup.find_all("pre"):
        lines.extend(pre.get_text().splitlines())
    return lines


def lookup_edict(term: str, rawdir: Optional[Path] = None) -> List[DisplayItem]:
    html = fetch_html(edict_url(term), rawdir, f"{term}_EDICT.html")
    lines = extract_pre_lines(html)
    dprint(f"[edict] {len(lines)} raw lines for {term!r}")
    return parse_edict_lines(lines)


def lookup_weblio(term: str, rawdir: Optional[Path] = None) -> List[Entry]:
    html = fetch_html(weblio_url(term), rawdir, f"{term}_WEBLIO.html")
    soup = BeautifulSoup(html, "html.parser")
    return parse_weblio_entries(soup)
