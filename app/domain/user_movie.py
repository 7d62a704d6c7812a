from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Tuple

from app.domain.dates import utcnow
from app.domain.movie import Movie
from app.domain.user import User
from app.errors import ValidationError

MIN_USER_RATING = 1
MAX_USER_RATING = 5


def _check_rating(rating: Optional[int]) -> None:
    if rating is None:
        return
    if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_USER_RATING <= rating <= MAX_USER_RATING:
        raise ValidationError(f"Rating must be between {MIN_USER_RATING} and {MAX_USER_RATING}")


@dataclass(frozen=True)
class UserMovie:
    """A movie a user has viewed; at most one per (user_id, movie_id)"""

    id: Optional[int]
    user_id: int
    movie_id: int
    viewed_at: datetime
    rating: Optional[int] = None  # 1-5 stars
    review: Optional[str] = None
    is_favorite: bool = False
    watch_time: Optional[int] = None  # minutes
    completed_movie: bool = True

    def __post_init__(self):
        _check_rating(self.rating)
        if self.watch_time is not None and (
            isinstance(self.watch_time, bool) or not isinstance(self.watch_time, int) or self.watch_time < 1
        ):
            raise ValidationError("Watch time must be a positive whole number of minutes")

    @classmethod
    def create(
        cls,
        user_id: int,
        movie_id: int,
        rating: Optional[int] = None,
        review: Optional[str] = None,
        is_favorite: bool = False,
        watch_time: Optional[int] = None,
        completed_movie: bool = True,
    ) -> "UserMovie":
        return cls(
            id=None,
            user_id=user_id,
            movie_id=movie_id,
            viewed_at=utcnow(),
            rating=rating,
            review=review,
            is_favorite=is_favorite,
            watch_time=watch_time,
            completed_movie=completed_movie,
        )

    def mark_as_favorite(self) -> "UserMovie":
        return replace(self, is_favorite=True)

    def unmark_favorite(self) -> "UserMovie":
        return replace(self, is_favorite=False)

    def add_rating(self, rating: int, review: Optional[str] = None) -> "UserMovie":
        _check_rating(rating)
        return replace(self, rating=rating, review=review or self.review)


@dataclass(frozen=True)
class ViewedMovie:
    """A viewed record together with the movie it points at"""

    viewed: UserMovie
    movie: Movie


@dataclass(frozen=True)
class UserWithViewedMovies:
    user: User
    movies: Tuple[ViewedMovie, ...]
