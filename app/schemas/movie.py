"""
Movie Schemas - request/response models for the movie catalog
"""
from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import List, Optional

from app.domain import Movie
from app.domain.dates import DateLike
from app.schemas.validation import validate_movie_rating


class MovieCreate(BaseModel):
    """Schema for creating a movie"""
    title: str = Field(..., min_length=1, max_length=200, examples=["The Godfather"])
    description: str = Field(..., min_length=1, description="Short description")
    synopsis: str = Field(..., min_length=1, description="Full synopsis")
    release_date: date = Field(..., examples=["1972-03-24"])
    duration: int = Field(..., ge=1, description="Duration in minutes", examples=[175])
    rating: str = Field(..., description="Classification (G, PG, PG-13, R, NC-17, ...)", examples=["R"])
    director: str = Field(..., min_length=1, max_length=200)
    cast: List[str] = Field(..., min_length=1, description="Main cast, in billing order")
    genres: List[str] = Field(..., min_length=1, examples=[["Crime", "Drama"]])
    country: str = Field(..., min_length=1, max_length=100)
    language: str = Field(..., min_length=1, max_length=50)
    category_id: int = Field(..., gt=0)
    imdb_rating: Optional[float] = Field(None, ge=1.0, le=10.0)
    poster: Optional[str] = Field(None, max_length=500, description="Poster image URL")
    trailer: Optional[str] = Field(None, max_length=500, description="Trailer URL")

    @field_validator('rating')
    @classmethod
    def check_rating(cls, v):
        return validate_movie_rating(v)


class MovieUpdate(BaseModel):
    """Schema for updating a movie - only the fields sent are changed"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    synopsis: Optional[str] = Field(None, min_length=1)
    release_date: Optional[date] = None
    duration: Optional[int] = Field(None, ge=1)
    rating: Optional[str] = None
    director: Optional[str] = Field(None, min_length=1, max_length=200)
    cast: Optional[List[str]] = Field(None, min_length=1)
    genres: Optional[List[str]] = Field(None, min_length=1)
    country: Optional[str] = Field(None, min_length=1, max_length=100)
    language: Optional[str] = Field(None, min_length=1, max_length=50)
    category_id: Optional[int] = Field(None, gt=0)
    imdb_rating: Optional[float] = Field(None, ge=1.0, le=10.0)
    poster: Optional[str] = Field(None, max_length=500)
    trailer: Optional[str] = Field(None, max_length=500)

    @field_validator('rating')
    @classmethod
    def check_rating(cls, v):
        if v is None:
            return v
        return validate_movie_rating(v)


class MovieResponse(BaseModel):
    """Schema for movie response, including the derived catalog fields"""
    id: int
    title: str
    description: str
    synopsis: str
    release_date: Optional[date]
    duration: int
    duration_formatted: str = Field(..., examples=["2h 55m"])
    rating: str
    director: str
    cast: List[str]
    genres: List[str]
    country: str
    language: str
    category_id: int
    imdb_rating: Optional[float] = None
    poster: Optional[str] = None
    trailer: Optional[str] = None
    is_active: bool
    is_new_release: bool
    is_classic: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, movie: Movie, now: Optional[DateLike] = None) -> "MovieResponse":
        return cls(
            id=movie.id,
            title=movie.title,
            description=movie.description,
            synopsis=movie.synopsis,
            release_date=movie.release_date,
            duration=movie.duration,
            duration_formatted=movie.duration_formatted,
            rating=movie.rating,
            director=movie.director,
            cast=list(movie.cast),
            genres=list(movie.genres),
            country=movie.country,
            language=movie.language,
            category_id=movie.category_id,
            imdb_rating=movie.imdb_rating,
            poster=movie.poster,
            trailer=movie.trailer,
            is_active=movie.is_active,
            is_new_release=movie.is_new_release(now),
            is_classic=movie.is_classic(now),
            created_at=movie.created_at,
            updated_at=movie.updated_at,
        )


class MovieSummary(BaseModel):
    """Compact movie details embedded in viewed-movie responses"""
    id: int
    title: str
    release_date: Optional[date]
    duration: int
    duration_formatted: str
    rating: str
    poster: Optional[str] = None

    @classmethod
    def from_entity(cls, movie: Movie) -> "MovieSummary":
        return cls(
            id=movie.id,
            title=movie.title,
            release_date=movie.release_date,
            duration=movie.duration,
            duration_formatted=movie.duration_formatted,
            rating=movie.rating,
            poster=movie.poster,
        )
