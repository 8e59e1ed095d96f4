# app.py
import logging
import json
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from asyncio import Lock

from config import DEBUG, PORT, get_settings
from core.command import Command
from core.week_start import WeekStart
from executors.action import ActionExecutor
from executors.insert import InsertExecutor
from executors.parse import ParseExecutor
from models.result import FormatRequest, NLDResult, ParseRequest
from services import nld_parser
from services.date_formatter import is_valid


# -----------------------------
# Command → Executor mapping (SINGLE SOURCE OF TRUTH)
# -----------------------------
parse_executor = ParseExecutor()
insert_executor = InsertExecutor()
action_executor = ActionExecutor()

COMMAND_EXECUTORS = {
    "parse": parse_executor,
    "insert": insert_executor,
    "action": action_executor,
}

# -----------------------------
# Structured Logging Setup
# -----------------------------
class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(
            {
                "time": self.formatTime(record, self.datefmt),
                "level": record.levelname,
                "name": record.name,
                "message": record.getMessage(),
                "exception": record.exc_text,
            }
        )


logger = logging.getLogger("nldates_api")
logger.setLevel(logging.INFO)
handler = logging.StreamHandler()
handler.setFormatter(JSONFormatter())
if not logger.handlers:
    logger.addHandler(handler)

# -----------------------------
# FastAPI App
# -----------------------------
app = FastAPI(title="Natural Language Dates API", version="1.0")

# -----------------------------
# Metrics
# -----------------------------
metrics_lock = Lock()
request_counters = {
    "parse": 0,
    "format": 0,
    "insert": 0,
    "action": 0,
    "invalid": 0,
    "total": 0,
    "errors": 0,
}


async def _count(*keys: str) -> None:
    async with metrics_lock:
        for key in keys:
            request_counters[key] += 1


# -----------------------------
# Failure Envelope
# -----------------------------
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "type": "http_error",
                "message": str(exc.detail),
            }
        },
    )


# -----------------------------
# API Endpoints
# -----------------------------
@app.get("/")
async def root():
    return {"message": "Natural Language Dates API is running."}


@app.get("/health")
async def health() -> Dict[str, Any]:
    return {"status": "ok"}


@app.get("/metrics")
async def metrics() -> Dict[str, Any]:
    async with metrics_lock:
        return request_counters.copy()


@app.get("/settings")
async def settings() -> Dict[str, Any]:
    return get_settings().model_dump(mode="json")


@app.post("/parse", response_model=NLDResult)
async def parse_text(request: ParseRequest) -> NLDResult:
    await _count("total", "parse")

    try:
        week_start = WeekStart(request.week_start.strip().lower()) if request.week_start else None
    except ValueError:
        await _count("errors")
        raise HTTPException(status_code=400, detail=f"Unknown week start: {request.week_start}")

    result = nld_parser.parse(
        request.text,
        request.format,
        request.reference,
        week_start,
    )

    if not result.valid:
        await _count("invalid")
        logger.info(f"[UNRESOLVED] text='{request.text[:100]}'")

    return result


@app.post("/format")
async def format_instant(request: FormatRequest) -> Dict[str, Any]:
    await _count("total", "format")
    text = nld_parser.format_instant(request.date, request.format)
    return {"formatted_string": text, "valid": is_valid(text)}


@app.post("/command")
async def run_command(command: Command):
    await _count("total")

    try:
        logger.info(
            f"[COMMAND] type={command.type}, mode={command.mode}, text_length={len(command.text)}"
        )

        response = await COMMAND_EXECUTORS[command.type].execute(command)
        await _count(command.type)
        return response

    except HTTPException:
        await _count("errors")
        raise
    except Exception as e:
        await _count("errors")
        logger.exception(f"[ERROR] type={command.type}, exception={e}")
        raise HTTPException(
            status_code=500,
            detail=str(e) if DEBUG else "An unexpected error occurred",
        )


@app.get("/nldates")
async def protocol_action(day: str = "", newPane: Optional[str] = None):
    """URL/protocol handler: nldates?day=<phrase>&newPane=<flag>."""
    return await run_command(
        Command(type="action", text=day, meta={"newPane": newPane})
    )


# -----------------------------
# Entrypoint
# -----------------------------
import uvicorn

if __name__ == "__main__":
    uvicorn.run("API_LAYER.app:app", host="0.0.0.0", port=PORT, workers=1)
