"""EDICT line parser: splits one flat dictionary line into headword, POS and senses.

Line shape:
    入る(P);這入る(rK) [はいる] /(v5r,vi) (1) (ant: 出る・1) to enter/to come in/(v5r,vi) (2) to join/

Slashes separate senses but also appear inside a gloss ("to enter/to come in"),
and parentheses nest, so the sense block is walked with an index scanner instead
of being split with a regex. A slash only ends a sense when the next
parenthesized group is a sense number or a tag.

Nothing here raises: a line that does not fit comes back verbatim as a string.
"""
from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple

from .entry import DisplayItem, Entry

HEAD_SEPARATOR = " /"

_LEAD_SEP_RE = re.compile(r"^[/\s]+")
_TRAIL_SEP_RE = re.compile(r"[/\s]+$")


# ---------------------------
# scanner primitives
# ---------------------------

def _skip_whitespace(text: str, i: int) -> int:
    while i < len(text) and text[i].isspace():
        i += 1
    return i


def _skip_separators(text: str, i: int) -> int:
    while i < len(text) and (text[i] == "/" or text[i].isspace()):
        i += 1
    return i


def _read_group(text: str, i: int) -> Tuple[Optional[str], int]:
    """
    `text[i]` is "(": return (contents, index past the matching ")").
    Unclosed groups give (None, i).
    """
    depth = 0
    for j in range(i, len(text)):
        ch = text[j]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return text[i + 1:j], j + 1
    return None, i


def _is_number_marker(contents: str) -> bool:
    # str.isdecimal also accepts full-width digits (１, ２, ...)
    return bool(contents) and contents.isdecimal()


def _is_annotation(contents: str) -> bool:
    return _is_number_marker(contents) or any(c.isalpha() for c in contents)


def _is_sense_delimiter(text: str, i: int) -> bool:
    """`text[i]` is a depth-0 "/"; peek past whitespace for the next tag/number group."""
    j = _skip_whitespace(text, i + 1)
    if j >= len(text) or text[j] != "(":
        return False
    contents, _ = _read_group(text, j)
    return contents is not None and _is_annotation(contents)


def _trim(text: str) -> str:
    return _TRAIL_SEP_RE.sub("", text.strip())


# ---------------------------
# sense block
# ---------------------------

def _read_sense(text: str, i: int) -> Tuple[str, int]:
    """Accumulate one gloss starting right after its "(n)" marker."""
    # tags glued to the marker, e.g. "(ant: 出る・1)" or "(uk)", are not gloss text
    while True:
        i = _skip_whitespace(text, i)
        if i >= len(text) or text[i] != "(":
            break
        contents, end = _read_group(text, i)
        if contents is None:
            break
        if _is_number_marker(contents):
            return "", i
        i = end

    depth = 0
    buf: List[str] = []
    while i < len(text):
        ch = text[i]
        if ch == "(":
            depth += 1
        elif ch == ")" and depth > 0:
            depth -= 1
        elif ch == "/" and depth == 0 and _is_sense_delimiter(text, i):
            break
        buf.append(ch)
        i += 1
    return _trim("".join(buf)), i


def _scan_numbered(text: str) -> Tuple[bool, List[str]]:
    found = False
    senses: List[str] = []
    i = 0
    while i < len(text):
        i = _skip_separators(text, i)
        if i >= len(text):
            break
        if text[i] != "(":
            # stray text outside a numbered sense (e.g. trailing "EntL..." ids)
            i += 1
            continue
        contents, end = _read_group(text, i)
        if contents is None:
            i += 1
            continue
        i = end
        if not _is_number_marker(contents):
            continue
        found = True
        sense, i = _read_sense(text, i)
        if sense:
            senses.append(sense)
    return found, senses


def _single_sense(text: str) -> List[str]:
    body = _LEAD_SEP_RE.sub("", text)
    cut = body.find("//")
    if cut != -1:
        body = body[:cut]
    body = _trim(body)
    return [body] if body else []


def split_senses(text: str) -> List[str]:
    """
    Split a sense-annotation block into glosses, in source order.
    Numbered blocks ("(1) ... (2) ...") give one gloss per marker; anything
    else collapses into a single gloss.
    """
    found, senses = _scan_numbered(text)
    if found:
        return senses
    return _single_sense(text)


# ---------------------------
# line level
# ---------------------------

def _split_part_of_speech(rest: str) -> Tuple[str, str]:
    """Return (part_of_speech, sense block). POS is the first parenthesized group."""
    start = rest.find("(")
    if start == -1:
        return "", rest
    contents, end = _read_group(rest, start)
    if contents is None or _is_number_marker(contents):
        return "", rest
    return rest[start:end], rest[end:]


def parse_edict_line(line: str) -> DisplayItem:
    sep = line.find(HEAD_SEPARATOR)
    if sep == -1:
        return line

    headword_reading = line[:sep]
    rest = line[sep + len(HEAD_SEPARATOR):]
    part_of_speech, sense_block = _split_part_of_speech(rest)

    senses = [s for s in split_senses(sense_block) if s]
    if not senses or not headword_reading.strip():
        return line
    return Entry(headword_reading, part_of_speech, senses)


def parse_edict_lines(lines: Iterable[str]) -> List[DisplayItem]:
    items: List[DisplayItem] = []
    for line in lines:
        line = line.strip()
        if not line:
            continue
        items.append(parse_edict_line(line))
    return items
