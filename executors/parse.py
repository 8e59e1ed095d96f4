from fastapi import HTTPException

from config import get_settings
from core.command import Command
from core.parse_mode import ParseMode
from executors.base import BaseExecutor
from services import nld_parser
from services.utils import deep_serialize


class ParseExecutor(BaseExecutor):
    """
    Parses a selected phrase and builds the text that replaces it.
    An unresolvable phrase produces no replacement.
    """

    async def execute(self, command: Command) -> dict:
        try:
            mode = ParseMode(command.mode or ParseMode.REPLACE.value)
        except ValueError:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown parse mode: {command.mode}",
            )

        try:
            settings = get_settings()
            reference = nld_parser.get_now()

            result = nld_parser.parse(
                command.text, settings.date_format, reference, settings=settings
            )

            replacement = None
            if result.valid:
                if mode is ParseMode.LINK:
                    replacement = f"[{command.text}]({result.formatted_string})"
                elif mode is ParseMode.CLEAN:
                    replacement = result.formatted_string
                elif mode.uses_time_format():
                    result = nld_parser.parse(
                        command.text, settings.time_format, reference, settings=settings
                    )
                    replacement = result.formatted_string
                else:
                    replacement = f"[[{result.formatted_string}]]"

            return {
                "type": "parse",
                "data": {
                    "mode": mode.value,
                    "result": deep_serialize(result),
                    "replacement": replacement,
                },
                "message": replacement or "",
            }

        except Exception as e:
            raise HTTPException(
                status_code=500,
                detail=str(e),
            )
