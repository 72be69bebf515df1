# SPDX-License-Identifier: MIT

import datetime

import pendulum
import pytest

from studianta.time import (
    date_from_str_optional,
    local_moment,
    time_from_str_optional,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-03-18", pendulum.date(2024, 3, 18)),
        (" 2024-03-18 ", pendulum.date(2024, 3, 18)),
        ("2024-03-18T14:30:00", pendulum.date(2024, 3, 18)),
        (datetime.date(2024, 3, 18), pendulum.date(2024, 3, 18)),
        (datetime.datetime(2024, 3, 18, 23, 59), pendulum.date(2024, 3, 18)),
    ],
)
def test_date_from_str_optional_parses(value, expected):
    assert date_from_str_optional(value) == expected


@pytest.mark.parametrize("value", [None, "", "not a date", "2024-02-30", "18/03/2024", 42])
def test_date_from_str_optional_rejects(value):
    assert date_from_str_optional(value) is None


@pytest.mark.parametrize(
    "value, expected",
    [
        ("9:05", "09:05"),
        ("14:30", "14:30"),
        ("14:30:00", "14:30"),
        (870, "14:30"),
        ("24:00", None),
        ("12:60", None),
        ("noon", None),
        (None, None),
        (True, None),
    ],
)
def test_time_from_str_optional(value, expected):
    assert time_from_str_optional(value) == expected


def test_local_moment_defaults_to_midnight():
    moment = local_moment(pendulum.date(2024, 3, 18), None)
    assert moment == pendulum.naive(2024, 3, 18)
    assert moment.tzinfo is None


def test_local_moment_with_time():
    assert local_moment(pendulum.date(2024, 3, 18), "14:30") == pendulum.naive(
        2024, 3, 18, 14, 30
    )
