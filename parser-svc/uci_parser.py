# Path: parser-svc/uci_parser.py
"""
Purpose: Extract tagged values from UCI engine output lines as text.
Usage: Called by uci_app.py (HTTP) and uci_main.py (CLI) for every engine line.

Every value comes back as a string or None (tag absent / value undeterminable).
An empty string is a real value: `string` with nothing after it.
Input validation is left to the caller.
"""
import re
from enum import Enum
from typing import Dict, Iterable, List, Optional

# Keywords an `info`/`bestmove` line can carry
UCI_INFO_TAGS: List[str] = [
    "depth", "seldepth", "multipv", "score", "nodes", "nps", "hashfull",
    "tbhits", "sbhits", "cpuload", "time", "currmove", "currmovenumber",
    "pv", "refutation", "currline", "bestmove", "ponder", "string",
]

_DIGITS = re.compile(r"[0-9]*")
_PROMOTIONS = "qrbn"


class TagCategory(Enum):
    SCORE = "score"
    STRING = "string"
    CURRLINE = "currline"
    GENERIC = "generic"


def tag_category(tag_name: str) -> TagCategory:
    if tag_name == "score":
        return TagCategory.SCORE
    if tag_name == "string":
        return TagCategory.STRING
    if tag_name == "currline":
        return TagCategory.CURRLINE
    return TagCategory.GENERIC


def split_tokens(line: str) -> List[str]:
    """
    Split on single spaces, keeping one empty token per extra separator.
    A single trailing separator does not open a new token, and "" has none:
      "a  b" -> ["a", "", "b"]     " a" -> ["", "a"]     "a " -> ["a"]
    """
    tokens = line.split(" ")
    if tokens[-1] == "":
        tokens.pop()
    return tokens


def is_digits(token: str) -> bool:
    # ASCII only; the empty token counts
    return _DIGITS.fullmatch(token) is not None


def is_uci_move(token: str) -> bool:
    """Long algebraic move: e2e4, e7e8q (promotion to q/r/b/n)."""
    if len(token) not in (4, 5):
        return False
    if not ("a" <= token[0] <= "h" and "1" <= token[1] <= "8"):
        return False
    if not ("a" <= token[2] <= "h" and "1" <= token[3] <= "8"):
        return False
    return len(token) == 4 or token[4] in _PROMOTIONS


def _trailing_sequence(tokens: List[str], start: int) -> Optional[str]:
    # Moves run without limit; a digit-only token is taken once per scan
    taken: List[str] = []
    has_number = False
    for tok in tokens[start:]:
        if is_uci_move(tok):
            taken.append(tok)
        elif not has_number and is_digits(tok):
            taken.append(tok)
            has_number = True
        else:
            break
    if not taken:
        return None
    return " ".join(taken)


def _resolve_tag(tokens: List[str], tag_name: str) -> Optional[str]:
    try:
        pos = tokens.index(tag_name)
    except ValueError:
        return None

    value: Optional[str] = None
    category = tag_category(tag_name)
    if category is TagCategory.SCORE:
        # e.g. "cp 34", "mate 3", "34 lowerbound"
        if pos + 2 < len(tokens):
            value = tokens[pos + 1] + " " + tokens[pos + 2]
    elif category is TagCategory.STRING:
        value = " ".join(tokens[pos + 1:])
    elif category is TagCategory.GENERIC:
        if pos + 1 < len(tokens) and is_digits(tokens[pos + 1]):
            value = tokens[pos + 1]
    # currline: its leading cpu index looks numeric, leave it to the scan

    # The move/number scan wins whenever it finds anything, even over
    # score/string values ("string e2e4 looks odd" -> "e2e4").
    scanned = _trailing_sequence(tokens, pos + 1)
    if scanned is not None:
        value = scanned
    return value


def parse_engine_line(line: str, tag_names: Iterable[str]) -> List[Optional[str]]:
    """
    Return one value per requested tag, in order.

    Example:
        parse_engine_line("info depth 12 score cp 34 pv e2e4 e7e5",
                          ["depth", "score", "pv", "nodes"])
        -> ["12", "cp 34", "e2e4 e7e5", None]
    """
    tokens = split_tokens(line)
    return [_resolve_tag(tokens, tag) for tag in tag_names]


def parse_engine_lines(lines: Iterable[str], tag_names: Iterable[str]) -> List[Dict[str, Optional[str]]]:
    """One row per line, tag -> value. Line terminators are stripped first."""
    tags = list(tag_names)
    rows: List[Dict[str, Optional[str]]] = []
    for line in lines:
        values = parse_engine_line(line.rstrip("\r\n"), tags)
        rows.append(dict(zip(tags, values)))
    return rows
