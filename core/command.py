# core/command.py
from pydantic import BaseModel
from typing import Literal, Optional, Dict, Any


class Command(BaseModel):
    """
    A passive container for one editor or protocol command.
    This does NOT execute logic.
    """

    type: Literal["parse", "insert", "action"]
    text: str = ""

    # ParseMode for "parse", InsertMode for "insert"
    mode: Optional[str] = None

    # Protocol parameters (newPane, ...)
    meta: Optional[Dict[str, Any]] = None
