"""Weblio page parser: entries from h2.midashigo headers and their sibling bodies.

A Weblio page carries no schema: the body of an entry is a *later sibling*
div.Sgkdj of its header, readings and senses are plain <p> text, and only a few
class names (hinshi, synonymsUnderDict) mark anything. Field extraction is
therefore heuristic; every extractor returns an empty value rather than raising.
"""
from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from .config import dprint
from .entry import Entry

HEADER_SELECTOR   = "h2.midashigo"
BODY_CLASS_MARKER = "Sgkdj"
POS_SELECTOR      = "span.hinshi"
SYNONYM_SELECTOR  = "div.synonymsUnderDict a"

USAGE_EXAMPLES_MARKER = "例文・使い方・用例・文例"

READING_LABEL     = "読み方："
ALT_READING_OPEN  = "《「"
ALT_READING_CLOSE = "」とも》"
PRONOUNCED_OPEN   = "「"
PRONOUNCED_CLOSE  = "」と発音する"
READING_JOINER    = "・"
HEADER_BRACKET    = "【"
HEADER_HYPHEN     = "‐"

KANA = set(
    "あいうえおかきくけこさしすせそたちつてとなにぬねのはひふへほまみむめもやゆよらりるれろわをん"
    "がぎぐげござじずぜぞだぢづでどばびぶべぼぱぴぷぺぽゃゅょっー"
)
FULLWIDTH_DIGITS = set("１２３４５６７８９０")
SENTENCE_MARKS   = set("。、")
MIN_SENSE_CHARS  = 10


def _text(node: Tag) -> str:
    return node.get_text()


def _class_string(node: Tag) -> str:
    cls = node.get("class") or []
    return " ".join(cls) if isinstance(cls, list) else str(cls)


def _is_fullwidth_number(text: str) -> bool:
    return bool(text) and all(c in FULLWIDTH_DIGITS for c in text)


def _has_punctuation(text: str) -> bool:
    return any(c in string.punctuation or c in SENTENCE_MARKS for c in text)


# ---------- locating ----------

def is_usage_examples_header(header: Tag) -> bool:
    return USAGE_EXAMPLES_MARKER in _text(header)


def find_body(header: Tag) -> Optional[Tag]:
    """First following sibling div whose class contains Sgkdj (never a descendant)."""
    for sib in header.next_siblings:
        if isinstance(sib, Tag) and sib.name == "div" and BODY_CLASS_MARKER in _class_string(sib):
            return sib
    return None


def iter_entry_blocks(soup: BeautifulSoup) -> Iterator[Tuple[Tag, Tag]]:
    for header in soup.select(HEADER_SELECTOR):
        if is_usage_examples_header(header):
            dprint(f"[weblio] skip usage header: {_text(header).strip()!r}")
            continue
        body = find_body(header)
        if body is None:
            dprint(f"[weblio] no body for header: {_text(header).strip()!r}")
            continue
        yield header, body


# ---------- reading ----------

def reading_from_header(header_text: str) -> str:
    """"せい‐かい【正解】" -> "せいかい"."""
    pos = header_text.find(HEADER_BRACKET)
    head = header_text[:pos] if pos != -1 else header_text
    return head.replace(HEADER_HYPHEN, "").strip()


def _label_reading(p_text: str) -> Optional[str]:
    start = p_text.find(READING_LABEL)
    if start == -1:
        return None
    return p_text[start + len(READING_LABEL):].strip()


def _alt_reading(p_text: str) -> Optional[str]:
    # 《「いぞん」とも》
    start = p_text.find(ALT_READING_OPEN)
    end = p_text.find(ALT_READING_CLOSE)
    if start == -1 or end == -1:
        return None
    start += len(ALT_READING_OPEN)
    if end <= start:
        return None
    return p_text[start:end]


def _pronounced_reading(p_text: str) -> Optional[str]:
    # 「ふいんき」と発音する
    start = p_text.find(PRONOUNCED_OPEN)
    end = p_text.find(PRONOUNCED_CLOSE)
    if start == -1 or end == -1:
        return None
    start += len(PRONOUNCED_OPEN)
    if end <= start:
        return None
    candidate = p_text[start:end]
    if all(c in KANA for c in candidate):
        return candidate
    return None


def extract_reading(body: Tag) -> str:
    readings: List[str] = []
    for p in body.find_all("p"):
        p_text = _text(p)
        for finder in (_label_reading, _alt_reading, _pronounced_reading):
            found = finder(p_text)
            if found:
                readings.append(found)
    return READING_JOINER.join(readings)


def headword_label(header: Tag, body: Tag) -> str:
    word = (header.get("title") or "").strip()
    reading = extract_reading(body)
    if word and reading:
        return f"{reading}【{word}】"
    from_header = reading_from_header(_text(header))
    return from_header or word


# ---------- part of speech ----------

def extract_part_of_speech(body: Tag) -> str:
    for span in body.select(POS_SELECTOR):
        text = _text(span).strip()
        if text:
            return text
    return ""


# ---------- senses ----------

def _numbered_senses(body: Tag) -> List[str]:
    """<b>１</b>, <b>２</b> ... inside a <p>: the text after the marker is the sense."""
    senses: List[str] = []
    for b in body.find_all("b"):
        b_text = _text(b)
        if not _is_fullwidth_number(b_text.strip()):
            continue
        p = b.parent
        if not isinstance(p, Tag) or p.name != "p":
            continue
        p_text = _text(p)
        start = p_text.find(b_text)
        if start == -1:
            continue
        sense = p_text[start + len(b_text):].strip()
        if sense:
            senses.append(sense)
    return senses


@dataclass(frozen=True)
class ParagraphRule:
    """
    One step of the paragraph classifier.
    `applies` claims the paragraph; `extract` returns the sense or None to reject it.
    The first rule that applies decides.
    """
    name: str
    applies: Callable[[str], bool]
    extract: Callable[[str], Optional[str]]


def _after_closing_marker(text: str) -> Optional[str]:
    pos = text.find("》")
    if pos == -1:
        pos = text.find("）")
    if pos == -1:
        return None
    sense = text[pos + 1:].strip()
    return sense if len(sense) > MIN_SENSE_CHARS else None


def _prose(text: str) -> Optional[str]:
    if len(text) <= MIN_SENSE_CHARS or _is_fullwidth_number(text):
        return None
    return text if _has_punctuation(text) else None


PARAGRAPH_RULES: Tuple[ParagraphRule, ...] = (
    ParagraphRule("reading-label", lambda t: t.startswith(READING_LABEL), lambda t: None),
    ParagraphRule("bracketed-head", lambda t: "［" in t and "］" in t, _after_closing_marker),
    ParagraphRule("prose", lambda t: bool(t), _prose),
)


def classify_paragraph(text: str) -> Optional[str]:
    cleaned = text.strip()
    for rule in PARAGRAPH_RULES:
        if rule.applies(cleaned):
            return rule.extract(cleaned)
    return None


def _paragraph_senses(body: Tag) -> List[str]:
    senses: List[str] = []
    for p in body.find_all("p"):
        sense = classify_paragraph(_text(p))
        if sense:
            senses.append(sense)
    return senses


def extract_senses(body: Tag) -> List[str]:
    return _numbered_senses(body) or _paragraph_senses(body)


# ---------- synonyms ----------

def extract_synonyms(body: Tag) -> List[str]:
    out: List[str] = []
    for a in body.select(SYNONYM_SELECTOR):
        text = _text(a).strip()
        if text:
            out.append(text)
    return out


# ---------- entries ----------

def build_entry(header: Tag, body: Tag) -> Optional[Entry]:
    senses = extract_senses(body)
    if not senses:
        return None

    label = headword_label(header, body)
    if not label:
        return None
    entry = Entry(label, extract_part_of_speech(body), senses)
    # synonyms go on last, once the entry is complete
    return entry.with_synonyms(extract_synonyms(body))


def parse_single_entry(header: Tag) -> Optional[Entry]:
    if is_usage_examples_header(header):
        return None
    body = find_body(header)
    if body is None:
        return None
    return build_entry(header, body)


def parse_weblio_entries(soup: BeautifulSoup) -> List[Entry]:
    entries: List[Entry] = []
    for header, body in iter_entry_blocks(soup):
        entry = build_entry(header, body)
        if entry is not None:
            entries.append(entry)
    dprint(f"[weblio] extracted {len(entries)} entries")
    return entries
