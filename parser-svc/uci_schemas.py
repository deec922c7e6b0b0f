from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class ParseLineRequest(BaseModel):
    line: str = Field(..., description="One line of engine output, without the newline")
    tags: Optional[List[str]] = Field(None, description="Tags to extract; default is the service tag list")

    model_config = {"extra": "forbid",
        "json_schema_extra": {"examples": [{"line": "info depth 12 score cp 34 pv e2e4 e7e5", "tags": ["depth", "score", "pv"]}]}
    }

class ParseLineResponse(BaseModel):
    tags: List[str]
    values: List[Optional[str]]  # aligned with tags; null = missing

class ParseLinesRequest(BaseModel):
    lines: List[str] = Field(..., description="Engine output lines, in order")
    tags: Optional[List[str]] = None

    model_config = {"extra": "forbid"}

class ParseLinesResponse(BaseModel):
    tags: List[str]
    rows: List[Dict[str, Optional[str]]] = Field(default_factory=list)
