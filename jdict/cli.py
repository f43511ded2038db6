#!/usr/bin/env python3
# -*- coding: utf-8 -*-
r"""
jdict — Japanese dictionary lookup from the terminal.

- Default: EDICT (WWWJDIC backdoor, <pre> lines), Japanese/English glosses.
- -j: Weblio monolingual Japanese dictionary.
- --json prints the parsed entries instead of coloured text.

Usage examples:
  jdict 入る
  jdict -j 正解
  jdict --debug --rawdir ./_raw 猫
"""
from __future__ import annotations
import argparse
import json
import os
import sys
from pathlib import Path
from typing import List, Optional

from . import config
from .entry import DisplayItem, Entry
from .fetch import LookupFailed, lookup_edict, lookup_weblio
from .render import render_results


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="jdict", description="Look up a Japanese word (EDICT or Weblio)")
    ap.add_argument("word", help="Japanese word to look up")
    ap.add_argument("-j", dest="weblio", action="store_true",
                    help="Use Japanese monolingual dictionary (Weblio)")
    ap.add_argument("--json", action="store_true", help="Print parsed entries as JSON")
    ap.add_argument("--no-color", action="store_true", help="Disable coloured output")
    ap.add_argument("--debug", action="store_true", help="Verbose debug logging to stderr")
    ap.add_argument("--rawdir", default=str(config.DEFAULT_RAWDIR),
                    help="Directory for raw page dumps (debug mode only)")
    return ap


def _as_json(items: List[DisplayItem]) -> str:
    out = [it.to_dict() if isinstance(it, Entry) else {"raw": it} for it in items]
    return json.dumps(out, indent=2, ensure_ascii=False)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config.set_debug(args.debug or os.environ.get("JDICT_DEBUG"))
    rawdir = Path(args.rawdir)

    try:
        if args.weblio:
            items: List[DisplayItem] = list(lookup_weblio(args.word, rawdir))
        else:
            items = lookup_edict(args.word, rawdir)
    except LookupFailed as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(_as_json(items))
    else:
        color = not args.no_color and sys.stdout.isatty()
        print(f"\n{render_results(items, color=color)}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
