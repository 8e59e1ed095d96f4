import logging

from core.command import Command
from executors.base import BaseExecutor
from services import nld_parser
from services.utils import parse_truthy

logger = logging.getLogger("nldates_action")


class ActionExecutor(BaseExecutor):
    """
    Protocol handler: resolves the `day` argument for the collaborator
    that looks up or creates the matching daily note.
    """

    async def execute(self, command: Command) -> dict:
        params = command.meta or {}
        day = command.text or params.get("day") or ""

        result = nld_parser.parse_date(day)
        new_pane = parse_truthy(params.get("newPane") or "yes")

        logger.info(
            f"[ACTION] day='{day}', valid={result.valid}, new_pane={new_pane}"
        )

        return {
            "type": "action",
            "data": {
                "day": day,
                "date": result.formatted_string if result.valid else None,
                "valid": result.valid,
                "new_pane": new_pane,
            },
            "message": result.formatted_string if result.valid else "",
        }
