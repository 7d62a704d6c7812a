"""
Movie Service - movie CRUD, filtered listing and new releases
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from app.domain import Category, Movie, MovieFilters, Page
from app.domain.dates import DateLike
from app.errors import NotFoundError
from app.repositories.base import CategoryRepository, MovieRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "title",
    "description",
    "synopsis",
    "release_date",
    "duration",
    "rating",
    "director",
    "cast",
    "genres",
    "country",
    "language",
    "category_id",
    "imdb_rating",
    "poster",
    "trailer",
)
NULLABLE_FIELDS = ("imdb_rating", "poster", "trailer")


class MovieService:
    """Service for movie operations"""

    def __init__(self, movie_repository: MovieRepository, category_repository: CategoryRepository):
        self.movie_repository = movie_repository
        self.category_repository = category_repository

    def _ensure_category_exists(self, category_id: int) -> Category:
        category = self.category_repository.find_by_id(category_id)
        if not category:
            raise NotFoundError(f"Category with ID {category_id} not found")
        return category

    def create(
        self,
        title: str,
        description: str,
        synopsis: str,
        release_date: date,
        duration: int,
        rating: str,
        director: str,
        cast: List[str],
        genres: List[str],
        country: str,
        language: str,
        category_id: int,
        imdb_rating: Optional[float] = None,
        poster: Optional[str] = None,
        trailer: Optional[str] = None,
    ) -> Movie:
        """Create a movie in an existing, active category"""
        self._ensure_category_exists(category_id)

        movie = Movie.create(
            title=title,
            description=description,
            synopsis=synopsis,
            release_date=release_date,
            duration=duration,
            rating=rating,
            director=director,
            cast=cast,
            genres=genres,
            country=country,
            language=language,
            category_id=category_id,
            imdb_rating=imdb_rating,
            poster=poster,
            trailer=trailer,
        )
        saved = self.movie_repository.create(movie)
        logger.info(f"Movie created: id={saved.id} title={saved.title}")
        return saved

    def find_all(self, filters: MovieFilters) -> Page[Movie]:
        return self.movie_repository.find_all(filters)

    def find_by_id(self, movie_id: int) -> Movie:
        movie = self.movie_repository.find_by_id(movie_id)
        if not movie:
            raise NotFoundError(f"Movie with ID {movie_id} not found")
        return movie

    def find_new_releases(self, now: Optional[DateLike] = None) -> List[Movie]:
        return self.movie_repository.find_new_releases(now)

    def update(self, movie_id: int, changes: Dict[str, Any]) -> Movie:
        existing = self.find_by_id(movie_id)
        changes = {
            key: value for key, value in changes.items()
            if key in UPDATABLE_FIELDS and (value is not None or key in NULLABLE_FIELDS)
        }

        if "category_id" in changes:
            self._ensure_category_exists(changes["category_id"])

        movie = existing.with_changes(**changes).validate()
        updated = self.movie_repository.update(movie)
        if not updated:
            raise NotFoundError(f"Movie with ID {movie_id} not found")

        logger.info(f"Movie updated: id={movie_id} fields={sorted(changes)}")
        return updated

    def remove(self, movie_id: int) -> None:
        """Logical delete: the movie is deactivated, never removed"""
        self.find_by_id(movie_id)
        self.movie_repository.delete(movie_id)
        logger.info(f"Movie deactivated: id={movie_id}")

    def get_all_categories(self) -> List[Category]:
        return self.category_repository.find_all()
