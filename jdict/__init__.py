from .entry import DisplayItem, Entry
from .edict_parser import parse_edict_line, parse_edict_lines, split_senses
from .weblio_parser import find_body, parse_single_entry, parse_weblio_entries

__all__ = [
    "DisplayItem",
    "Entry",
    "find_body",
    "parse_edict_line",
    "parse_edict_lines",
    "parse_single_entry",
    "parse_weblio_entries",
    "split_senses",
]
