from datetime import date, timedelta

import pytest

from app.domain import MovieFilters
from app.errors import NotFoundError, ValidationError


@pytest.fixture
def catalog(movie_service, category_service, movie_data, drama):
    """Five movies across two categories"""
    comedy = category_service.create("Comedia")
    movies = {
        "godfather": movie_service.create(**movie_data()),
        "pulp": movie_service.create(**movie_data(
            title="Pulp Fiction",
            description="Intertwining tales of crime in Los Angeles",
            director="Quentin Tarantino",
            release_date=date(1994, 10, 14),
            duration=154,
            genres=["Crime", "Thriller"],
        )),
        "hangover": movie_service.create(**movie_data(
            title="The Hangover",
            description="A bachelor party in Las Vegas goes wrong",
            director="Todd Phillips",
            release_date=date(2009, 6, 5),
            duration=100,
            genres=["Comedy"],
            category_id=comedy.id,
        )),
        "superbad": movie_service.create(**movie_data(
            title="Superbad",
            description="Two teenagers try to enjoy their last weeks of school",
            director="Greg Mottola",
            release_date=date(2007, 8, 17),
            duration=113,
            genres=["Comedy"],
            category_id=comedy.id,
        )),
        "coco": movie_service.create(**movie_data(
            title="Coco",
            description="A boy journeys into the Land of the Dead",
            director="Lee Unkrich",
            release_date=date(2017, 11, 22),
            duration=105,
            rating="PG",
            genres=["Animation", "Family"],
        )),
    }
    return {"comedy": comedy, "drama": drama, "movies": movies}


def titles(page):
    return [movie.title for movie in page.data]


def test_create_movie(movie_service, movie_data):
    movie = movie_service.create(**movie_data())

    assert movie.id is not None
    assert movie.cast == ("Marlon Brando", "Al Pacino")
    assert movie.genres == ("Crime", "Drama")
    assert movie.release_date == date(1972, 3, 24)
    assert movie.duration_formatted == "2h 55m"


def test_create_in_missing_category(movie_service, movie_data):
    with pytest.raises(NotFoundError, match="Category with ID 999 not found"):
        movie_service.create(**movie_data(category_id=999))


def test_create_in_deleted_category(movie_service, category_service, movie_data, drama):
    category_service.remove(drama.id)

    with pytest.raises(NotFoundError):
        movie_service.create(**movie_data())


def test_create_rejects_empty_cast(movie_service, movie_data):
    with pytest.raises(ValidationError):
        movie_service.create(**movie_data(cast=[]))


def test_find_by_id_missing(movie_service):
    with pytest.raises(NotFoundError, match="Movie with ID 42 not found"):
        movie_service.find_by_id(42)


def test_list_ordered_by_release_date_desc(movie_service, catalog):
    page = movie_service.find_all(MovieFilters())

    assert titles(page) == ["Coco", "The Hangover", "Superbad", "Pulp Fiction", "The Godfather"]
    assert page.total == 5
    assert page.total_pages == 1


def test_search_is_case_insensitive_across_fields(movie_service, catalog):
    assert titles(movie_service.find_all(MovieFilters(search="godfather"))) == ["The Godfather"]
    assert titles(movie_service.find_all(MovieFilters(search="TARANTINO"))) == ["Pulp Fiction"]
    assert titles(movie_service.find_all(MovieFilters(search="las vegas"))) == ["The Hangover"]


def test_search_treats_wildcards_literally(movie_service, catalog):
    assert movie_service.find_all(MovieFilters(search="%")).total == 0
    assert movie_service.find_all(MovieFilters(search="_")).total == 0


def test_filter_by_category(movie_service, catalog):
    page = movie_service.find_all(MovieFilters(category_id=catalog["comedy"].id))

    assert titles(page) == ["The Hangover", "Superbad"]


def test_filter_by_genre(movie_service, catalog):
    assert titles(movie_service.find_all(MovieFilters(genre="Crime"))) == ["Pulp Fiction", "The Godfather"]
    assert movie_service.find_all(MovieFilters(genre="Crim")).total == 0


def test_filter_by_year(movie_service, catalog):
    assert titles(movie_service.find_all(MovieFilters(year=1994))) == ["Pulp Fiction"]


def test_filter_by_rating(movie_service, catalog):
    assert titles(movie_service.find_all(MovieFilters(rating="PG"))) == ["Coco"]


def test_filters_are_combined(movie_service, catalog):
    filters = MovieFilters(genre="Crime", category_id=catalog["drama"].id, year=1972)
    assert titles(movie_service.find_all(filters)) == ["The Godfather"]

    filters = MovieFilters(genre="Comedy", category_id=catalog["drama"].id)
    assert movie_service.find_all(filters).total == 0


def test_pagination_metadata(movie_service, catalog):
    page = movie_service.find_all(MovieFilters(page=2, limit=2))

    assert titles(page) == ["Superbad", "Pulp Fiction"]
    assert page.total == 5
    assert page.total_pages == 3
    assert page.has_previous_page is True
    assert page.has_next_page is True


def test_page_beyond_last_is_empty(movie_service, catalog):
    page = movie_service.find_all(MovieFilters(page=10, limit=2))

    assert page.data == []
    assert page.total == 5
    assert page.has_next_page is False


def test_same_filters_give_same_page(movie_service, catalog):
    filters = MovieFilters(genre="Comedy", limit=1)
    assert movie_service.find_all(filters) == movie_service.find_all(filters)


def test_new_releases(movie_service, movie_data):
    today = date.today()
    recent = movie_service.create(**movie_data(title="Recent", release_date=today - timedelta(days=5)))
    movie_service.create(**movie_data(title="Last Month", release_date=today - timedelta(days=30)))

    releases = movie_service.find_new_releases(today)

    assert [movie.id for movie in releases] == [recent.id]
    assert releases[0].is_new_release(today) is True


def test_update_movie(movie_service, movie_data):
    movie = movie_service.create(**movie_data())

    updated = movie_service.update(movie.id, {"title": "The Godfather Part I", "genres": ["Drama", "Epic"]})

    assert updated.title == "The Godfather Part I"
    assert updated.genres == ("Drama", "Epic")
    assert updated.director == movie.director


def test_update_genres_are_searchable(movie_service, movie_data):
    movie = movie_service.create(**movie_data())
    movie_service.update(movie.id, {"genres": ["Epic"]})

    assert movie_service.find_all(MovieFilters(genre="Crime")).total == 0
    assert movie_service.find_all(MovieFilters(genre="Epic")).total == 1


def test_update_clears_nullable_fields_only(movie_service, movie_data):
    movie = movie_service.create(**movie_data(poster="http://img/poster.jpg", imdb_rating=9.2))

    updated = movie_service.update(movie.id, {"poster": None, "title": None})

    assert updated.poster is None
    assert updated.imdb_rating == 9.2
    assert updated.title == movie.title


def test_update_to_missing_category(movie_service, movie_data):
    movie = movie_service.create(**movie_data())

    with pytest.raises(NotFoundError):
        movie_service.update(movie.id, {"category_id": 999})


def test_update_missing_movie(movie_service):
    with pytest.raises(NotFoundError):
        movie_service.update(999, {"title": "Nothing"})


def test_remove_is_logical(movie_service, movie_data):
    movie = movie_service.create(**movie_data())

    movie_service.remove(movie.id)

    with pytest.raises(NotFoundError):
        movie_service.find_by_id(movie.id)
    with pytest.raises(NotFoundError):
        movie_service.remove(movie.id)
    assert movie_service.find_all(MovieFilters()).total == 0


def test_deleting_category_keeps_its_movies(movie_service, category_service, movie_data, drama):
    movie = movie_service.create(**movie_data())

    category_service.remove(drama.id)

    assert movie_service.find_by_id(movie.id).category_id == drama.id


def test_get_all_categories(movie_service, catalog):
    assert [c.name for c in movie_service.get_all_categories()] == ["Comedia", "Drama"]
