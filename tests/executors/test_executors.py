import asyncio
from datetime import datetime, timezone

import pytest
from fastapi import HTTPException

import config
from core.command import Command
from executors.action import ActionExecutor
from executors.insert import InsertExecutor
from executors.parse import ParseExecutor
from services import nld_parser
from services.utils import parse_truthy


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def _run(executor, **fields):
    return asyncio.run(executor.execute(Command(**fields)))


# ---------------------------------------------------------------------
# PARSE COMMANDS
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
    "mode, expected",
    [
        (None, "[[2021-06-17]]"),
        ("replace", "[[2021-06-17]]"),
        ("link", "[tomorrow](2021-06-17)"),
        ("clean", "2021-06-17"),
        ("time", "00:00"),
    ],
)
def test_parse_modes_build_replacement(frozen_now, mode, expected):
    response = _run(ParseExecutor(), type="parse", text="tomorrow", mode=mode)

    assert response["type"] == "parse"
    assert response["data"]["replacement"] == expected
    assert response["message"] == expected


def test_parse_time_mode_uses_time_format(frozen_now):
    config.update_settings(time_format="h:mm A")

    response = _run(ParseExecutor(), type="parse", text="tomorrow at 5pm", mode="time")

    assert response["message"] == "5:00 PM"


def test_unresolvable_selection_produces_no_replacement(frozen_now):
    response = _run(ParseExecutor(), type="parse", text="whenever", mode="link")

    assert response["data"]["replacement"] is None
    assert response["data"]["result"]["valid"] is False
    assert response["data"]["result"]["formatted_string"] == "Invalid date"
    assert response["message"] == ""


def test_unknown_parse_mode_is_rejected(frozen_now):
    with pytest.raises(HTTPException) as exc:
        _run(ParseExecutor(), type="parse", text="today", mode="bold")

    assert exc.value.status_code == 400


# ---------------------------------------------------------------------
# INSERT COMMANDS
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
    "mode, expected",
    [
        ("now", "2021-06-16 14:30"),
        ("date", "2021-06-16"),
        ("time", "14:30"),
    ],
)
def test_insert_current_moment(frozen_now, mode, expected):
    response = _run(InsertExecutor(), type="insert", mode=mode)

    assert response["message"] == expected


def test_insert_now_honours_separator(frozen_now):
    config.update_settings(separator=" @ ")

    response = _run(InsertExecutor(), type="insert", mode="now")

    assert response["message"] == "2021-06-16 @ 14:30"


def test_insert_now_utc(monkeypatch):
    monkeypatch.setattr(
        nld_parser, "get_utc_now", lambda: datetime(2021, 6, 16, 23, 5, tzinfo=timezone.utc)
    )
    config.update_settings(time_format="HH:mm Z")

    response = _run(InsertExecutor(), type="insert", mode="now_utc")

    assert response["message"] == "2021-06-16 23:05 +00:00"


# ---------------------------------------------------------------------
# PROTOCOL ACTION
# ---------------------------------------------------------------------

def test_action_resolves_day_and_defaults_to_new_pane(frozen_now):
    response = _run(ActionExecutor(), type="action", text="next friday")

    assert response["data"]["date"] == "2021-06-18"
    assert response["data"]["valid"] is True
    assert response["data"]["new_pane"] is True


def test_action_reads_day_from_meta(frozen_now):
    response = _run(
        ActionExecutor(), type="action", meta={"day": "yesterday", "newPane": "no"}
    )

    assert response["data"]["date"] == "2021-06-15"
    assert response["data"]["new_pane"] is False


def test_action_with_unresolvable_day(frozen_now):
    response = _run(ActionExecutor(), type="action", text="blursday")

    assert response["data"]["valid"] is False
    assert response["data"]["date"] is None
    assert response["message"] == ""


@pytest.mark.parametrize(
    "flag, expected",
    [("yes", True), ("Y", True), ("1", True), ("t", True), ("TRUE", True),
     ("no", False), ("0", False), ("", False), (None, False)],
)
def test_parse_truthy(flag, expected):
    assert parse_truthy(flag) is expected
