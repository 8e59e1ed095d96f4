from fastapi import HTTPException

from config import get_settings
from core.command import Command
from core.parse_mode import InsertMode
from executors.base import BaseExecutor
from services import nld_parser


class InsertExecutor(BaseExecutor):
    """
    Renders the current moment for "insert date/time" commands.
    No parse step is involved.
    """

    async def execute(self, command: Command) -> dict:
        try:
            mode = InsertMode(command.mode or InsertMode.NOW.value)
        except ValueError:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown insert mode: {command.mode}",
            )

        settings = get_settings()

        if mode is InsertMode.DATE:
            pattern = settings.date_format
        elif mode is InsertMode.TIME:
            pattern = settings.time_format
        else:
            pattern = settings.datetime_format

        now = nld_parser.get_utc_now() if mode.is_utc() else nld_parser.get_now()
        text = nld_parser.format_instant(now, pattern)

        return {
            "type": "insert",
            "data": {"mode": mode.value, "pattern": pattern, "text": text},
            "message": text,
        }
