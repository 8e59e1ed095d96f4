# models/result.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# -----------------------------
# Formatted Result (Resolver → Formatter → caller)
# -----------------------------
class NLDResult(BaseModel):
    date: Optional[datetime] = Field(
        None, description="Resolved instant; None when the input could not be resolved"
    )
    pattern: str = Field(..., description="Format pattern used for formatted_string")
    formatted_string: str = Field(..., description="Rendered text or the invalid-date sentinel")
    valid: bool = Field(..., description="False only when the input was unresolvable")


# -----------------------------
# API payloads
# -----------------------------
class ParseRequest(BaseModel):
    text: str
    format: Optional[str] = Field(None, description="Defaults to the configured date format")
    reference: Optional[datetime] = Field(None, description="Defaults to the wall clock")
    week_start: Optional[str] = Field(None, description="Defaults to the configured week start")


class FormatRequest(BaseModel):
    date: Optional[datetime] = None
    format: Optional[str] = None
