"""
User Service - users and their viewed movies

Email and (user, movie) uniqueness are pre-checked for readable errors;
the unique indexes on users.email and user_movies(user_id, movie_id) are
the real guarantee, so IntegrityError from a write becomes ConflictError.
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from app.domain import Page, PageRequest, User, UserMovie, UserWithViewedMovies, ViewedMovie
from app.errors import ConflictError, NotFoundError, ValidationError
from app.repositories.base import MovieRepository, UserMovieRepository, UserRepository
from app.utils.security import hash_password

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "Email already exists"
ALREADY_VIEWED_MESSAGE = "Movie already marked as viewed by this user"
UPDATABLE_FIELDS = ("first_name", "last_name", "email", "phone_number", "date_of_birth", "avatar")
NULLABLE_FIELDS = ("phone_number", "date_of_birth", "avatar")


class UserService:
    """Service for user and viewed-movie operations"""

    def __init__(
        self,
        user_repository: UserRepository,
        user_movie_repository: UserMovieRepository,
        movie_repository: MovieRepository,
    ):
        self.user_repository = user_repository
        self.user_movie_repository = user_movie_repository
        self.movie_repository = movie_repository

    # ==================== USERS ====================

    def create(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        phone_number: Optional[str] = None,
        date_of_birth: Optional[date] = None,
        avatar: Optional[str] = None,
    ) -> User:
        """Register a user; the password is hashed before it reaches storage"""
        if self.user_repository.find_by_email(email):
            logger.warning(f"User create rejected, email already registered: {email}")
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        user = User.create(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=hash_password(password),
            phone_number=phone_number,
            date_of_birth=date_of_birth,
            avatar=avatar,
        )
        try:
            saved = self.user_repository.create(user)
        except IntegrityError:
            logger.warning(f"User create lost a race on email: {email}")
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from None

        logger.info(f"User created: id={saved.id}")
        return saved

    def find_all(self, page: int = 1, limit: int = 10) -> Page[User]:
        return self.user_repository.find_all(PageRequest(page=page, limit=limit))

    def find_by_id(self, user_id: int) -> User:
        user = self.user_repository.find_by_id(user_id)
        if not user:
            raise NotFoundError(f"User with ID {user_id} not found")
        return user

    def update(self, user_id: int, changes: Dict[str, Any]) -> User:
        existing = self.find_by_id(user_id)
        changes = {
            key: value for key, value in changes.items()
            if key in UPDATABLE_FIELDS and (value is not None or key in NULLABLE_FIELDS)
        }

        if "email" in changes:
            other = self.user_repository.find_by_email(changes["email"])
            if other and other.id != user_id:
                raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        try:
            updated = self.user_repository.update(existing.with_changes(**changes))
        except IntegrityError:
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from None

        if not updated:
            raise NotFoundError(f"User with ID {user_id} not found")
        return updated

    def remove(self, user_id: int) -> None:
        """Logical delete: the user is deactivated, viewed records stay"""
        self.find_by_id(user_id)
        self.user_repository.delete(user_id)
        logger.info(f"User deactivated: id={user_id}")

    # ==================== VIEWED MOVIES ====================

    def mark_movie_as_viewed(
        self,
        user_id: int,
        movie_id: int,
        rating: Optional[int] = None,
        review: Optional[str] = None,
        is_favorite: bool = False,
        watch_time: Optional[int] = None,
        completed_movie: bool = True,
    ) -> UserMovie:
        self.find_by_id(user_id)
        if not self.movie_repository.find_by_id(movie_id):
            raise NotFoundError(f"Movie with ID {movie_id} not found")

        if self.user_movie_repository.find_by_user_and_movie(user_id, movie_id):
            raise ConflictError(ALREADY_VIEWED_MESSAGE)

        user_movie = UserMovie.create(
            user_id=user_id,
            movie_id=movie_id,
            rating=rating,
            review=review,
            is_favorite=is_favorite,
            watch_time=watch_time,
            completed_movie=completed_movie,
        )
        try:
            saved = self.user_movie_repository.create(user_movie)
        except IntegrityError:
            logger.warning(f"Viewed record race lost: user={user_id} movie={movie_id}")
            raise ConflictError(ALREADY_VIEWED_MESSAGE) from None

        logger.info(f"Movie {movie_id} marked as viewed by user {user_id}")
        return saved

    def get_user_viewed_movies(self, user_id: int, only_favorites: bool = False) -> List[ViewedMovie]:
        self.find_by_id(user_id)
        viewed = self.user_movie_repository.find_by_user_id(user_id)
        if only_favorites:
            viewed = [item for item in viewed if item.viewed.is_favorite]
        return viewed

    def update_viewed_movie(
        self,
        user_id: int,
        movie_id: int,
        rating: Optional[int] = None,
        review: Optional[str] = None,
        is_favorite: Optional[bool] = None,
    ) -> UserMovie:
        """Rate, review or (un)favorite a movie the user has already viewed"""
        record = self.user_movie_repository.find_by_user_and_movie(user_id, movie_id)
        if not record:
            raise NotFoundError(f"Movie {movie_id} has not been marked as viewed by user {user_id}")

        if rating is not None:
            record = record.add_rating(rating, review)
        elif review is not None:
            if record.rating is None:
                raise ValidationError("A rating is required to add a review")
            record = record.add_rating(record.rating, review)

        if is_favorite is True:
            record = record.mark_as_favorite()
        elif is_favorite is False:
            record = record.unmark_favorite()

        return self.user_movie_repository.update(record)

    def get_users_with_viewed_movies(self) -> List[UserWithViewedMovies]:
        return self.user_movie_repository.find_users_with_movies()
