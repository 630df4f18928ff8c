from __future__ import annotations

from datetime import date

import pytest

from backend.app.services.periods import PeriodKey, calendar_year, trailing_window


def test_shift_crosses_year_boundaries():
    assert PeriodKey(2025, 1).previous() == PeriodKey(2024, 12)
    assert PeriodKey(2024, 12).shift(1) == PeriodKey(2025, 1)
    assert PeriodKey(2025, 3).shift(-15) == PeriodKey(2023, 12)


def test_trailing_window_is_dense_and_ascending():
    window = trailing_window(3, date(2025, 1, 20))

    assert window == [PeriodKey(2024, 11), PeriodKey(2024, 12), PeriodKey(2025, 1)]
    assert [period.key for period in window] == ["2024-11", "2024-12", "2025-01"]


def test_trailing_window_rejects_empty_windows():
    with pytest.raises(ValueError):
        trailing_window(0, date(2025, 1, 1))


def test_labels_use_spanish_month_names():
    assert PeriodKey(2025, 9).label == "sept"
    assert PeriodKey(2025, 12).label == "dic"
    assert PeriodKey(2025, 1).month_name == "Enero"


def test_out_of_range_month_is_kept_as_is():
    period = PeriodKey(2025, 13)

    assert period.key == "2025-13"
    assert period.label == "2025-13"


def test_parse_and_ordering():
    assert PeriodKey.parse("2024-07") == PeriodKey(2024, 7)
    assert PeriodKey(2024, 12) < PeriodKey(2025, 1)
    with pytest.raises(ValueError):
        PeriodKey.parse("julio")


def test_calendar_year_lists_twelve_months():
    periods = calendar_year(2025)

    assert len(periods) == 12
    assert periods[0].key == "2025-01"
    assert periods[-1].key == "2025-12"
