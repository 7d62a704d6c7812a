from datetime import date, datetime

import pytest

from app.repositories import coerce_date
from app.repositories.movie_repository import escape_like


@pytest.mark.parametrize("value, expected", [
    (None, None),
    (date(2020, 1, 2), date(2020, 1, 2)),
    (datetime(2020, 1, 2, 15, 30), date(2020, 1, 2)),
    ("2020-01-02", date(2020, 1, 2)),
    ("2020-01-02T15:30:00", date(2020, 1, 2)),
    (" 2020-01-02 ", date(2020, 1, 2)),
    ("not a date", None),
    (20200102, None),
])
def test_coerce_date(value, expected):
    assert coerce_date(value) == expected


def test_escape_like():
    assert escape_like("50%_off") == "50\\%\\_off"
    assert escape_like("a\\b") == "a\\\\b"
    assert escape_like("plain") == "plain"
