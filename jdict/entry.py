"""
jdict — normalized dictionary entry

Both parsers (EDICT lines, Weblio markup) produce the same record:
- headword_reading: printable headword/reading label (never empty)
- part_of_speech:   may be empty
- senses:           display order, at least one
- synonyms:         insertion order, may be empty

A parsed EDICT line that does not fit the format is passed through as a plain
string instead; `DisplayItem` covers both.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Tuple, Union


@dataclass(frozen=True)
class Entry:
    headword_reading: str
    part_of_speech: str
    senses: Tuple[str, ...]
    synonyms: Tuple[str, ...] = field(default=())

    def __post_init__(self):
        # accept any iterable, store tuples so the record stays immutable
        object.__setattr__(self, "senses", tuple(self.senses))
        object.__setattr__(self, "synonyms", tuple(self.synonyms))

    def with_synonyms(self, synonyms: Iterable[str]) -> "Entry":
        return replace(self, synonyms=tuple(synonyms))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "headword_reading": self.headword_reading,
            "part_of_speech": self.part_of_speech,
            "senses": list(self.senses),
            "synonyms": list(self.synonyms),
        }


DisplayItem = Union[Entry, str]
