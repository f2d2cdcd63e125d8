import pytest
from datetime import datetime
from zoneinfo import ZoneInfo

from delivery_quote.services.business_hours import compute_advisory, local_now
from delivery_quote.core.config import settings

# 2026-10-19 is a Monday
MONDAY = 19
TUESDAY = 20
THURSDAY = 22
FRIDAY = 23
SATURDAY = 24
SUNDAY = 25

MONDAY_MORNING = "We will contact you on Monday morning."


def at(day: int, hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(2026, 10, day, hour, minute, second)


class TestSameDayWindow:

    def test_monday_ten_am(self):
        assert compute_advisory(at(MONDAY, 10, 0)) == "We will contact you at approximately 11:20."

    def test_opening_minute_is_inside_window(self):
        assert compute_advisory(at(TUESDAY, 9, 0)) == "We will contact you at approximately 10:20."

    def test_cutoff_minute_is_inclusive(self):
        assert compute_advisory(at(THURSDAY, 15, 40)) == "We will contact you at approximately 17:00."

    def test_seconds_are_ignored_at_cutoff(self):
        assert compute_advisory(at(THURSDAY, 15, 40, 59)) == "We will contact you at approximately 17:00."

    def test_friday_inside_window(self):
        assert compute_advisory(at(FRIDAY, 12, 5)) == "We will contact you at approximately 13:25."

    def test_eta_is_zero_padded(self):
        advisory = compute_advisory(at(MONDAY, 9, 1))
        assert advisory.endswith("10:21.")

    def test_timezone_aware_input(self):
        now = datetime(2026, 10, MONDAY, 10, 30, tzinfo=ZoneInfo("America/Santiago"))
        assert compute_advisory(now) == "We will contact you at approximately 11:50."


class TestOutsideWindow:

    def test_before_opening_names_current_day(self):
        assert compute_advisory(at(TUESDAY, 8, 59)) == (
            "We open at 09:00. We will contact you this Tuesday morning."
        )

    def test_after_cutoff_names_next_day(self):
        assert compute_advisory(at(MONDAY, 15, 41)) == (
            "We will contact you tomorrow, Tuesday, in the morning."
        )

    def test_thursday_evening_defers_to_friday(self):
        assert compute_advisory(at(THURSDAY, 22, 0)) == (
            "We will contact you tomorrow, Friday, in the morning."
        )

    @pytest.mark.parametrize("hour,minute", [(15, 41), (16, 0), (23, 59)])
    def test_friday_after_cutoff_defers_to_monday(self, hour, minute):
        assert compute_advisory(at(FRIDAY, hour, minute)) == MONDAY_MORNING

    def test_friday_before_opening_defers_to_monday(self):
        assert compute_advisory(at(FRIDAY, 7, 30)) == MONDAY_MORNING

    @pytest.mark.parametrize("hour", [0, 9, 12, 18, 23])
    def test_saturday_any_time(self, hour):
        assert compute_advisory(at(SATURDAY, hour)) == MONDAY_MORNING

    @pytest.mark.parametrize("hour", [0, 10, 15, 23])
    def test_sunday_any_time(self, hour):
        advisory = compute_advisory(at(SUNDAY, hour))
        assert advisory == "We are closed on Sundays. We will contact you on Monday morning."
        assert "Monday morning" in advisory


def test_local_now_uses_configured_timezone():
    now = local_now()
    assert now.tzinfo is not None
    assert str(now.tzinfo) == settings.TIMEZONE
