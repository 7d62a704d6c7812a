"""
Movie entity - immutable record with derived catalog attributes
"""
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple

from app.domain.dates import DateLike, as_date, utcnow
from app.errors import ValidationError

NEW_RELEASE_WINDOW_DAYS = 21
CLASSIC_AGE_YEARS = 25


@dataclass(frozen=True)
class Movie:
    """
    A catalog movie. id is None until the record has been persisted.

    Updates never mutate an instance: with_changes() returns a new one.
    """

    id: Optional[int]
    title: str
    description: str
    synopsis: str
    release_date: Optional[date]
    duration: int  # minutes
    rating: str  # PG, PG-13, R, ...
    director: str
    cast: Tuple[str, ...]
    genres: Tuple[str, ...]
    country: str
    language: str
    category_id: int
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    imdb_rating: Optional[float] = None  # 1-10
    poster: Optional[str] = None
    trailer: Optional[str] = None

    def __post_init__(self):
        # Lists coming from callers or storage are frozen into tuples
        object.__setattr__(self, "cast", tuple(self.cast or ()))
        object.__setattr__(self, "genres", tuple(self.genres or ()))

        if isinstance(self.duration, bool) or not isinstance(self.duration, int) or self.duration < 0:
            raise ValidationError("Duration must be a non-negative whole number of minutes")
        if self.imdb_rating is not None and not 1.0 <= self.imdb_rating <= 10.0:
            raise ValidationError("IMDb rating must be between 1.0 and 10.0")

    @classmethod
    def create(
        cls,
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
    ) -> "Movie":
        """Build a new, not yet persisted movie"""
        now = utcnow()
        return cls(
            id=None,
            title=title,
            description=description,
            synopsis=synopsis,
            release_date=release_date,
            duration=duration,
            rating=rating,
            director=director,
            cast=tuple(cast),
            genres=tuple(genres),
            country=country,
            language=language,
            category_id=category_id,
            is_active=True,
            created_at=now,
            updated_at=now,
            imdb_rating=imdb_rating,
            poster=poster,
            trailer=trailer,
        ).validate()

    def with_changes(self, **changes) -> "Movie":
        return replace(self, **changes)

    def validate(self) -> "Movie":
        """Checks a movie must pass before it is written (create or update)"""
        if not self.title or not self.title.strip():
            raise ValidationError("Title is required")
        if not isinstance(self.release_date, date):
            raise ValidationError("Release date must be a valid date")
        if self.duration < 1:
            raise ValidationError("Duration must be a positive whole number of minutes")
        if not self.cast:
            raise ValidationError("Cast must include at least one actor")
        if not self.genres:
            raise ValidationError("Genres must include at least one genre")
        return self

    @property
    def duration_formatted(self) -> str:
        hours, minutes = divmod(self.duration, 60)
        return f"{hours}h {minutes}m"

    def is_new_release(self, now: Optional[DateLike] = None) -> bool:
        """Released within the last three weeks"""
        if not isinstance(self.release_date, date):
            return False
        window_start = as_date(now) - timedelta(days=NEW_RELEASE_WINDOW_DAYS)
        return self._release_day() > window_start

    def is_classic(self, now: Optional[DateLike] = None) -> bool:
        """At least 25 calendar years old"""
        if not isinstance(self.release_date, date):
            return False
        return as_date(now).year - self.release_date.year >= CLASSIC_AGE_YEARS

    def _release_day(self) -> date:
        if isinstance(self.release_date, datetime):
            return self.release_date.date()
        return self.release_date
