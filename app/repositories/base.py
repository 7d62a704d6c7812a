"""
Repository contracts
====================
Services depend on these abstract classes only. The SQLAlchemy
implementations live next to this module; tests and other stores can
provide their own.

Conventions shared by every implementation:
- find_* reads skip logically deleted rows (is_active = False), except
  the uniqueness lookups (find_by_name, find_by_email) which must see
  every row a unique index sees.
- Writes commit immediately. A unique-constraint violation rolls the
  session back and re-raises sqlalchemy.exc.IntegrityError for the
  service to translate.
- Rows are mapped into app.domain entities once, here, with dates
  normalised by coerce_date.
"""
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import List, Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain import (
    Category,
    Movie,
    MovieFilters,
    Page,
    PageRequest,
    User,
    UserMovie,
    UserWithViewedMovies,
    ViewedMovie,
)
from app.domain.dates import DateLike

logger = logging.getLogger(__name__)


def coerce_date(value) -> Optional[date]:
    """Normalise a stored date (date, datetime or ISO string) or return None"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            logger.warning(f"Ignoring unparseable stored date: {value!r}")
            return None
    return None


class SqlAlchemyRepository:
    """Shared session handling for the SQLAlchemy repositories"""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise


class CategoryRepository(ABC):
    @abstractmethod
    def find_all(self) -> List[Category]:
        """Active categories ordered by name"""

    @abstractmethod
    def find_by_id(self, category_id: int) -> Optional[Category]:
        ...

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[Category]:
        """Case-insensitive lookup over every category, active or not"""

    @abstractmethod
    def create(self, category: Category) -> Category:
        ...

    @abstractmethod
    def update(self, category: Category) -> Optional[Category]:
        """Persist a changed category; None when no active row has its id"""

    @abstractmethod
    def delete(self, category_id: int) -> bool:
        """Logical delete; False when no row was affected"""

    @abstractmethod
    def count(self) -> int:
        ...


class MovieRepository(ABC):
    @abstractmethod
    def create(self, movie: Movie) -> Movie:
        ...

    @abstractmethod
    def find_by_id(self, movie_id: int) -> Optional[Movie]:
        ...

    @abstractmethod
    def find_all(self, filters: MovieFilters) -> Page[Movie]:
        """Filtered page of active movies, newest release first"""

    @abstractmethod
    def find_new_releases(self, now: Optional[DateLike] = None) -> List[Movie]:
        ...

    @abstractmethod
    def update(self, movie: Movie) -> Optional[Movie]:
        ...

    @abstractmethod
    def delete(self, movie_id: int) -> bool:
        ...


class UserRepository(ABC):
    @abstractmethod
    def create(self, user: User) -> User:
        ...

    @abstractmethod
    def find_by_id(self, user_id: int) -> Optional[User]:
        ...

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    def find_all(self, page_request: PageRequest) -> Page[User]:
        ...

    @abstractmethod
    def update(self, user: User) -> Optional[User]:
        ...

    @abstractmethod
    def delete(self, user_id: int) -> bool:
        ...


class UserMovieRepository(ABC):
    @abstractmethod
    def create(self, user_movie: UserMovie) -> UserMovie:
        ...

    @abstractmethod
    def find_by_user_and_movie(self, user_id: int, movie_id: int) -> Optional[UserMovie]:
        ...

    @abstractmethod
    def find_by_user_id(self, user_id: int) -> List[ViewedMovie]:
        """Viewed records of one user with their movies, most recent first"""

    @abstractmethod
    def update(self, user_movie: UserMovie) -> UserMovie:
        ...

    @abstractmethod
    def find_users_with_movies(self) -> List[UserWithViewedMovies]:
        ...
