from datetime import date

import pytest

from app.domain import User, UserMovie
from app.errors import ValidationError


def build_user(**overrides):
    fields = {
        "first_name": "Ana",
        "last_name": "Gómez",
        "email": "ana@example.com",
        "password": "hashed",
    }
    fields.update(overrides)
    return User.create(**fields)


def test_full_name():
    assert build_user().full_name == "Ana Gómez"


def test_age_is_none_without_birth_date():
    assert build_user().age(date(2024, 6, 15)) is None


def test_age_after_birthday():
    user = build_user(date_of_birth=date(1990, 5, 15))
    assert user.age(date(2024, 6, 15)) == 34


def test_age_before_birthday():
    user = build_user(date_of_birth=date(1990, 5, 15))
    assert user.age(date(2024, 5, 14)) == 33


def test_age_on_birthday():
    user = build_user(date_of_birth=date(1990, 5, 15))
    assert user.age(date(2024, 5, 15)) == 34


def test_age_for_leap_day_birth():
    user = build_user(date_of_birth=date(2000, 2, 29))
    assert user.age(date(2023, 2, 28)) == 22
    assert user.age(date(2023, 3, 1)) == 23


def test_new_user_has_no_id():
    user = build_user()
    assert user.id is None
    assert user.is_active is True


def test_viewed_record_defaults():
    record = UserMovie.create(user_id=1, movie_id=2)
    assert record.id is None
    assert record.is_favorite is False
    assert record.completed_movie is True
    assert record.viewed_at is not None


def test_favorite_toggles_return_new_records():
    record = UserMovie.create(user_id=1, movie_id=2)
    favorite = record.mark_as_favorite()
    assert favorite.is_favorite is True
    assert record.is_favorite is False
    assert favorite.unmark_favorite().is_favorite is False


def test_add_rating_keeps_existing_review_when_none_given():
    record = UserMovie.create(user_id=1, movie_id=2, rating=3, review="Good")
    rated = record.add_rating(5)
    assert rated.rating == 5
    assert rated.review == "Good"
    assert record.add_rating(4, "Better").review == "Better"


@pytest.mark.parametrize("rating", [0, 6, True])
def test_rating_outside_one_to_five_rejected(rating):
    with pytest.raises(ValidationError):
        UserMovie.create(user_id=1, movie_id=2, rating=rating)


def test_non_positive_watch_time_rejected():
    with pytest.raises(ValidationError):
        UserMovie.create(user_id=1, movie_id=2, watch_time=0)
