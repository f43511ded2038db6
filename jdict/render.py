"""Console rendering of lookup results (termcolor)."""
from __future__ import annotations

from typing import Iterable, List

from termcolor import colored

from .entry import DisplayItem, Entry

NO_RESULTS = "No definitions found."
SYNONYM_LABEL = "類語:"

COLORS = {
    "headword": "light_cyan",
    "pos": "light_yellow",
    "number": "light_magenta",
    "sense": "white",
    "synonym_label": "light_green",
}


def _paint(text: str, role: str, color: bool) -> str:
    return colored(text, COLORS[role]) if color else text


def render_entry(entry: Entry, color: bool = True) -> str:
    lines: List[str] = [_paint(entry.headword_reading, "headword", color)]
    if entry.part_of_speech:
        lines.append(_paint(entry.part_of_speech, "pos", color))

    if len(entry.senses) == 1:
        lines.append(f"  {_paint(entry.senses[0], 'sense', color)}")
    else:
        for i, sense in enumerate(entry.senses, 1):
            lines.append(f"  {_paint(f'({i})', 'number', color)} {_paint(sense, 'sense', color)}")

    if entry.synonyms:
        lines.append(f"  {_paint(SYNONYM_LABEL, 'synonym_label', color)} "
                     f"{_paint(', '.join(entry.synonyms), 'sense', color)}")
    return "\n".join(lines)


def render_item(item: DisplayItem, color: bool = True) -> str:
    if isinstance(item, Entry):
        return render_entry(item, color)
    # unparsed EDICT line: shown as-is
    return item


def render_results(items: Iterable[DisplayItem], color: bool = True) -> str:
    blocks = [render_item(it, color) for it in items]
    if not blocks:
        return NO_RESULTS
    return "\n\n".join(blocks)
