import logging
from datetime import datetime

import config
from core.week_start import WeekStart
from models.settings import NLDSettings
from services import nld_parser
from services.date_formatter import INVALID_DATE


def test_parse_returns_composite_result(reference):
    result = nld_parser.parse("tomorrow", "YYYY-MM-DD", reference)

    assert result.valid is True
    assert result.date == datetime(2021, 6, 17)
    assert result.pattern == "YYYY-MM-DD"
    assert result.formatted_string == "2021-06-17"


def test_parse_unresolvable_is_reported_not_raised(reference, caplog):
    with caplog.at_level(logging.DEBUG, logger="nld_parser"):
        result = nld_parser.parse("the twelfth of never", "YYYY-MM-DD", reference)

    assert result.valid is False
    assert result.date is None
    assert result.formatted_string == INVALID_DATE
    assert "can't be parsed by nldates" in caplog.text


def test_parse_defaults_come_from_settings(frozen_now):
    config.update_settings(date_format="DD.MM.YYYY", week_start="monday")

    result = nld_parser.parse("this week")

    assert result.pattern == "DD.MM.YYYY"
    assert result.formatted_string == "14.06.2021"


def test_explicit_week_start_overrides_settings(reference):
    config.update_settings(week_start="monday")

    result = nld_parser.parse("this week", "YYYY-MM-DD", reference, WeekStart.SUNDAY)

    assert result.formatted_string == "2021-06-13"


def test_settings_snapshot_is_used_for_the_whole_call(reference):
    snapshot = NLDSettings(date_format="YYYY", week_start="saturday")
    config.update_settings(date_format="MM", week_start="monday")

    result = nld_parser.parse("this week", reference=reference, settings=snapshot)

    # Saturday-first week opens on June 12
    assert result.formatted_string == "2021"
    assert result.date == datetime(2021, 6, 12)


def test_parse_date_and_parse_time_use_configured_patterns(reference):
    config.update_settings(date_format="YYYY-MM-DD", time_format="h:mm a")

    assert nld_parser.parse_date("tomorrow at 5pm", reference).formatted_string == "2021-06-17"
    assert nld_parser.parse_time("tomorrow at 5pm", reference).formatted_string == "5:00 pm"


def test_parse_reads_wall_clock_when_no_reference(frozen_now):
    assert nld_parser.parse("now", "YYYY-MM-DD HH:mm:ss").formatted_string == "2021-06-16 14:30:45"


def test_format_instant_without_parse_step():
    config.update_settings(date_format="dddd")

    assert nld_parser.format_instant(datetime(2021, 6, 18)) == "Friday"
    assert nld_parser.format_instant(datetime(2021, 6, 18), "YYYY") == "2021"
    assert nld_parser.format_instant(None, "YYYY") == INVALID_DATE
