from datetime import date

import pytest

from app.errors import ConflictError, NotFoundError, ValidationError
from app.utils.security import verify_password


@pytest.fixture
def juan(user_service, user_data):
    return user_service.create(**user_data())


@pytest.fixture
def godfather(movie_service, movie_data):
    return movie_service.create(**movie_data())


def test_create_hashes_password(user_service, user_data):
    user = user_service.create(**user_data(date_of_birth=date(1990, 5, 15)))

    assert user.id is not None
    assert user.password != "Password123!"
    assert verify_password("Password123!", user.password)
    assert user.date_of_birth == date(1990, 5, 15)


def test_duplicate_email_conflicts(user_service, user_data, juan):
    with pytest.raises(ConflictError, match="Email already exists"):
        user_service.create(**user_data(first_name="Otro"))


def test_lost_email_race_is_conflict(user_service, user_data, juan, monkeypatch):
    monkeypatch.setattr(user_service.user_repository, "find_by_email", lambda email: None)

    with pytest.raises(ConflictError):
        user_service.create(**user_data())


def test_find_all_newest_first(user_service, user_data):
    first = user_service.create(**user_data(email="a@example.com"))
    second = user_service.create(**user_data(email="b@example.com"))

    page = user_service.find_all(page=1, limit=10)

    assert [user.id for user in page.data] == [second.id, first.id]
    assert page.total == 2


def test_find_all_rejects_bad_limit(user_service):
    with pytest.raises(ValidationError):
        user_service.find_all(page=1, limit=0)


def test_find_missing_user(user_service):
    with pytest.raises(NotFoundError, match="User with ID 5 not found"):
        user_service.find_by_id(5)


def test_update_user(user_service, juan):
    updated = user_service.update(juan.id, {"first_name": "Juanito", "phone_number": "+57 300"})

    assert updated.first_name == "Juanito"
    assert updated.phone_number == "+57 300"
    assert updated.password == juan.password


def test_update_email_to_own_address(user_service, juan):
    assert user_service.update(juan.id, {"email": juan.email}).email == juan.email


def test_update_email_taken_by_other_user(user_service, user_data, juan):
    other = user_service.create(**user_data(email="other@example.com"))

    with pytest.raises(ConflictError):
        user_service.update(other.id, {"email": juan.email})


def test_remove_is_logical(user_service, juan):
    user_service.remove(juan.id)

    with pytest.raises(NotFoundError):
        user_service.find_by_id(juan.id)
    with pytest.raises(NotFoundError):
        user_service.remove(juan.id)


def test_mark_movie_as_viewed(user_service, juan, godfather):
    record = user_service.mark_movie_as_viewed(juan.id, godfather.id, rating=5, review="Masterpiece", watch_time=175)

    assert record.id is not None
    assert record.rating == 5
    assert record.is_favorite is False
    assert record.completed_movie is True


def test_mark_viewed_twice_conflicts_and_keeps_first(user_service, juan, godfather):
    user_service.mark_movie_as_viewed(juan.id, godfather.id, rating=4)

    with pytest.raises(ConflictError, match="Movie already marked as viewed by this user"):
        user_service.mark_movie_as_viewed(juan.id, godfather.id, rating=1)

    viewed = user_service.get_user_viewed_movies(juan.id)
    assert len(viewed) == 1
    assert viewed[0].viewed.rating == 4


def test_mark_viewed_race_is_conflict(user_service, juan, godfather, monkeypatch):
    user_service.mark_movie_as_viewed(juan.id, godfather.id)
    monkeypatch.setattr(
        user_service.user_movie_repository,
        "find_by_user_and_movie",
        lambda user_id, movie_id: None,
    )

    with pytest.raises(ConflictError):
        user_service.mark_movie_as_viewed(juan.id, godfather.id)


def test_mark_viewed_unknown_user(user_service, godfather):
    with pytest.raises(NotFoundError, match="User with ID 77 not found"):
        user_service.mark_movie_as_viewed(77, godfather.id)


def test_mark_viewed_unknown_movie(user_service, juan):
    with pytest.raises(NotFoundError, match="Movie with ID 77 not found"):
        user_service.mark_movie_as_viewed(juan.id, 77)


def test_viewed_movies_include_movie(user_service, juan, godfather):
    user_service.mark_movie_as_viewed(juan.id, godfather.id, is_favorite=True)

    viewed = user_service.get_user_viewed_movies(juan.id)

    assert viewed[0].movie.title == "The Godfather"
    assert viewed[0].movie.genres == ("Crime", "Drama")


def test_only_favorites(user_service, movie_service, movie_data, juan, godfather):
    other = movie_service.create(**movie_data(title="Amores Perros"))
    user_service.mark_movie_as_viewed(juan.id, godfather.id, is_favorite=True)
    user_service.mark_movie_as_viewed(juan.id, other.id)

    assert len(user_service.get_user_viewed_movies(juan.id)) == 2
    favorites = user_service.get_user_viewed_movies(juan.id, only_favorites=True)
    assert [item.movie.id for item in favorites] == [godfather.id]


def test_viewed_movies_of_unknown_user(user_service):
    with pytest.raises(NotFoundError):
        user_service.get_user_viewed_movies(123)


def test_update_viewed_movie(user_service, juan, godfather):
    user_service.mark_movie_as_viewed(juan.id, godfather.id, rating=3, review="Long")

    rated = user_service.update_viewed_movie(juan.id, godfather.id, rating=5)
    assert (rated.rating, rated.review) == (5, "Long")

    favorite = user_service.update_viewed_movie(juan.id, godfather.id, is_favorite=True)
    assert favorite.is_favorite is True
    assert favorite.rating == 5

    reviewed = user_service.update_viewed_movie(juan.id, godfather.id, review="Even better twice")
    assert (reviewed.rating, reviewed.review) == (5, "Even better twice")

    assert user_service.update_viewed_movie(juan.id, godfather.id, is_favorite=False).is_favorite is False


def test_review_requires_rating(user_service, juan, godfather):
    user_service.mark_movie_as_viewed(juan.id, godfather.id)

    with pytest.raises(ValidationError, match="A rating is required to add a review"):
        user_service.update_viewed_movie(juan.id, godfather.id, review="No stars")


def test_update_viewed_movie_not_viewed(user_service, juan, godfather):
    with pytest.raises(NotFoundError):
        user_service.update_viewed_movie(juan.id, godfather.id, rating=4)


def test_users_with_viewed_movies(user_service, movie_service, movie_data, user_data, juan, godfather):
    ana = user_service.create(**user_data(first_name="Ana", email="ana@example.com"))
    nobody = user_service.create(**user_data(first_name="Zoe", email="zoe@example.com"))
    coco = movie_service.create(**movie_data(title="Coco"))
    user_service.mark_movie_as_viewed(juan.id, godfather.id)
    user_service.mark_movie_as_viewed(juan.id, coco.id)
    user_service.mark_movie_as_viewed(ana.id, coco.id)

    grouped = user_service.get_users_with_viewed_movies()

    assert [entry.user.id for entry in grouped] == [ana.id, juan.id]
    assert nobody.id not in [entry.user.id for entry in grouped]
    assert sorted(item.movie.title for item in grouped[1].movies) == ["Coco", "The Godfather"]
    assert [item.movie.title for item in grouped[0].movies] == ["Coco"]


def test_users_with_viewed_movies_skips_inactive(user_service, juan, godfather):
    user_service.mark_movie_as_viewed(juan.id, godfather.id)
    user_service.remove(juan.id)

    assert user_service.get_users_with_viewed_movies() == []
