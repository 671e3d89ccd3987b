from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from src.task_manager.task_manager.common.datetime_utils import parse_iso_date, parse_iso_datetime
from src.task_manager.task_manager.common.validators import (
    optional_datetime,
    optional_id,
    optional_text,
    require_amount,
    require_date,
    require_id,
    require_non_empty,
)
from src.task_manager.task_manager.core.exceptions import ValidationError


def test_require_non_empty_strips():
    assert require_non_empty("  Acme ", "customerName") == "Acme"

    for bad in (None, "", "   ", 42):
        with pytest.raises(ValidationError):
            require_non_empty(bad, "customerName")


def test_optional_text():
    assert optional_text(None, "details") is None
    assert optional_text("  ", "details") is None
    with pytest.raises(ValidationError):
        optional_text(["x"], "details")


@pytest.mark.parametrize("value, expected", [(3, 3), ("17", 17)])
def test_require_id_accepts(value, expected):
    assert require_id(value, "assignedTo") == expected


@pytest.mark.parametrize("value", [None, "", "abc", 0, -2, True, 1.9, "1.9"])
def test_require_id_rejects(value):
    with pytest.raises(ValidationError):
        require_id(value, "assignedTo")


def test_require_id_accepts_integral_float():
    assert require_id(4.0, "assignedTo") == 4


def test_optional_id():
    assert optional_id(None, "createdBy") is None
    assert optional_id("", "createdBy") is None
    assert optional_id("5", "createdBy") == 5


def test_dates():
    assert require_date("2026-03-10", "dueDate") == date(2026, 3, 10)
    assert require_date("2026-03-10T23:00:00Z", "dueDate") == date(2026, 3, 10)
    assert require_date(datetime(2026, 3, 10, 8, 0), "dueDate") == date(2026, 3, 10)
    for bad in (None, "", "2026-13-01", "tomorrow", 20260310):
        with pytest.raises(ValidationError):
            require_date(bad, "dueDate")


def test_datetimes():
    assert optional_datetime(None, "completedAt") is None
    assert parse_iso_datetime("2026-03-10T08:30:00Z").utcoffset() == timedelta(0)
    assert optional_datetime("2026-03-10T08:30:00", "completedAt") == datetime(2026, 3, 10, 8, 30)
    assert parse_iso_date(" 2026-01-02 ") == date(2026, 1, 2)
    with pytest.raises(ValidationError):
        optional_datetime("yesterday", "completedAt")


def test_amounts():
    assert require_amount("10.25", "amountDue") == Decimal("10.25")
    assert require_amount(0, "amountDue") == Decimal("0.00")
    assert require_amount(12.5, "amountDue") == Decimal("12.50")
    for bad in (None, "", "-1", "NaN", "abc", True):
        with pytest.raises(ValidationError):
            require_amount(bad, "amountDue")


def test_text_length_limits():
    assert require_non_empty("x" * 150, "customerName", 150) == "x" * 150
    assert require_non_empty(" " + "x" * 150 + " ", "customerName", 150) == "x" * 150
    with pytest.raises(ValidationError):
        require_non_empty("x" * 151, "customerName", 150)
    with pytest.raises(ValidationError):
        optional_text("y" * 151, "currentStep", 150)
    assert require_non_empty("x" * 1000, "description") == "x" * 1000


def test_amount_fits_column():
    assert require_amount("9999999999.99", "amountDue") == Decimal("9999999999.99")
    for bad in ("10000000000", "9999999999.999", 1e12):
        with pytest.raises(ValidationError):
            require_amount(bad, "amountDue")
