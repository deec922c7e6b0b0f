# Path: parser-svc/uci_main.py
from __future__ import annotations
import argparse
import json
import sys
from typing import Iterable, List, Optional, TextIO

import uci_settings as settings
from uci_settings import _dbg
from uci_parser import parse_engine_line

_LINE_PREFIXES = ("info", "bestmove")

def _wanted(line: str, only_info: bool) -> bool:
    if not only_info:
        return True
    return line.split(" ", 1)[0] in _LINE_PREFIXES

def _write_rows(lines: Iterable[str], tags: List[str], fmt: str, na: str, only_info: bool, out: TextIO) -> int:
    """Print one row per engine line; returns how many rows were written."""
    if fmt == "tsv":
        out.write("\t".join(tags) + "\n")
    n = 0
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not _wanted(line, only_info):
            continue
        values = parse_engine_line(line, tags)
        if fmt == "json":
            out.write(json.dumps(dict(zip(tags, values)), separators=(",", ":")) + "\n")
        else:
            out.write("\t".join(na if v is None else v for v in values) + "\n")
        n += 1
    return n

def _requested_tags(tag_args: Optional[List[str]]) -> List[str]:
    # --tags may repeat and each value may hold several tags: "depth,score pv"
    if not tag_args:
        return list(settings.DEFAULT_TAGS)
    tags: List[str] = []
    for text in tag_args:
        tags.extend(settings.parse_tag_list(text))
    return tags

def _cmd_parse(args) -> int:
    tags = _requested_tags(args.tags)
    if args.file in (None, "-"):
        # engine logs are not always valid UTF-8; match the FILE branch
        if hasattr(sys.stdin, "reconfigure"):
            sys.stdin.reconfigure(errors="replace")
        n = _write_rows(sys.stdin, tags, args.format, args.na, args.only_info, sys.stdout)
    else:
        try:
            fh = open(args.file, encoding="utf-8", errors="replace")
        except OSError as e:
            print(f"uci-line-parser: cannot open {args.file}: {e.strerror}", file=sys.stderr)
            return 1
        with fh:
            n = _write_rows(fh, tags, args.format, args.na, args.only_info, sys.stdout)
    sys.stdout.flush()
    _dbg("uci_main", f"parsed {n} lines from {args.file or 'stdin'}")
    return 0

def _cmd_serve(args) -> int:
    import uvicorn
    _dbg("uci_main", f"serving on {args.host}:{args.port}")
    uvicorn.run("uci_app:app", host=args.host, port=args.port)
    return 0

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="uci-line-parser", description="Extract tag values from UCI engine output")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("parse", help="Parse engine output lines from FILE or stdin")
    p.add_argument("file", nargs="?", help="Engine log (default: stdin)")
    p.add_argument("--tags", action="append", metavar="TAGS",
                   help="Comma separated tags to extract, repeatable (default: UCI_PARSER_DEFAULT_TAGS or all info tags)")
    p.add_argument("--format", choices=("tsv", "json"), default="tsv")
    p.add_argument("--na", default="NA", help="TSV placeholder for missing values")
    p.add_argument("--only-info", action="store_true", help="Skip lines that are not info/bestmove")
    p.set_defaults(func=_cmd_parse)

    s = sub.add_parser("serve", help="Run the HTTP service")
    s.add_argument("--host", default=settings.HOST)
    s.add_argument("--port", type=int, default=settings.PORT)
    s.set_defaults(func=_cmd_serve)
    return parser

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)

if __name__ == "__main__":
    sys.exit(main())
