# Path: parser-svc/uci_app.py
"""
UCI Line Parser Service: extracts tag values from engine output lines.

Exposes:
  - GET  /health           -> {"ok": true}
  - POST /parse/line       -> {"tags": [...], "values": [...]}   values aligned with tags
  - POST /parse/lines      -> {"tags": [...], "rows": [{tag: value}, ...]}
  - POST /parse/stream     -> SSE: {type:"row"|"done"}, one row event per line

Notes:
  * Values are always text; a missing tag is null, never an error.
  * Line sanity (newlines, batch size) is checked here, not in uci_parser.
"""
from __future__ import annotations

import json
from typing import AsyncGenerator, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import StreamingResponse

import uci_settings as settings
from uci_schemas import ParseLineRequest, ParseLineResponse, ParseLinesRequest, ParseLinesResponse
from uci_settings import _dbg
from uci_parser import parse_engine_line, parse_engine_lines

app = FastAPI(title="uci-line-svc", version="1.0")
_dbg("app", f"default tags={settings.DEFAULT_TAGS} max_lines={settings.MAX_LINES}")

def _tags_or_default(tags: Optional[List[str]]) -> List[str]:
    return list(settings.DEFAULT_TAGS) if tags is None else tags

def _check_line(line: str, where: str = "Line") -> None:
    if "\n" in line or "\r" in line:
        raise HTTPException(400, f"{where} must not contain a newline")

def _check_batch(lines: List[str]) -> None:
    if len(lines) > settings.MAX_LINES:
        raise HTTPException(413, f"Too many lines (max {settings.MAX_LINES})")
    # a trailing terminator is fine, rows strip it
    for i, line in enumerate(lines):
        _check_line(line.rstrip("\r\n"), f"Line {i}")

def _sse_json(obj: dict) -> str:
    return f"data: {json.dumps(obj, separators=(',', ':'))}\n\n"

@app.get("/health")
async def health():
    return {"ok": True}

@app.post("/parse/line", response_model=ParseLineResponse)
async def parse_line(req: ParseLineRequest) -> ParseLineResponse:
    _check_line(req.line)
    tags = _tags_or_default(req.tags)
    values = parse_engine_line(req.line, tags)
    _dbg("app", f"parse/line tags={len(tags)} found={sum(v is not None for v in values)}")
    return ParseLineResponse(tags=tags, values=values)

@app.post("/parse/lines", response_model=ParseLinesResponse)
async def parse_lines(req: ParseLinesRequest) -> ParseLinesResponse:
    _check_batch(req.lines)
    tags = _tags_or_default(req.tags)
    rows = parse_engine_lines(req.lines, tags)
    _dbg("app", f"parse/lines lines={len(rows)} tags={len(tags)}")
    return ParseLinesResponse(tags=tags, rows=rows)

@app.post("/parse/stream")
async def parse_stream(req: ParseLinesRequest) -> StreamingResponse:
    _check_batch(req.lines)
    tags = _tags_or_default(req.tags)
    _dbg("app", f"parse/stream lines={len(req.lines)} tags={len(tags)}")

    async def gen() -> AsyncGenerator[str, None]:
        count = 0
        for i, line in enumerate(req.lines):
            values = parse_engine_line(line.rstrip("\r\n"), tags)
            yield _sse_json({"type": "row", "index": i, "values": dict(zip(tags, values))})
            count += 1
        yield _sse_json({"type": "done", "count": count})

    return StreamingResponse(gen(), media_type="text/event-stream")
