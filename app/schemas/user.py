from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from datetime import date, datetime
from typing import List, Optional

from app.domain import User, UserWithViewedMovies, ViewedMovie
from app.schemas.movie import MovieSummary
from app.schemas.validation import SafeStringMixin


# ==================== USER SCHEMAS ====================

class UserCreate(BaseModel):
    """Schema for registering a user"""
    first_name: str = Field(..., min_length=2, max_length=100, examples=["Juan"])
    last_name: str = Field(..., min_length=2, max_length=100, examples=["Pérez"])
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)
    phone_number: Optional[str] = Field(None, max_length=30, examples=["+57 300 123 4567"])
    date_of_birth: Optional[date] = Field(None, examples=["1990-05-15"])
    avatar: Optional[str] = Field(None, max_length=500, description="Avatar URL")


class UserUpdate(BaseModel):
    """Schema for updating a user (password is not changed here)"""
    first_name: Optional[str] = Field(None, min_length=2, max_length=100)
    last_name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(None, max_length=30)
    date_of_birth: Optional[date] = None
    avatar: Optional[str] = Field(None, max_length=500)


class UserResponse(BaseModel):
    """Schema for user response - never includes the password hash"""
    id: int
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    age: Optional[int] = None
    avatar: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            full_name=user.full_name,
            email=user.email,
            phone_number=user.phone_number,
            date_of_birth=user.date_of_birth,
            age=user.age(),
            avatar=user.avatar,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserBrief(BaseModel):
    id: int
    first_name: str
    last_name: str
    full_name: str
    email: str

    @classmethod
    def from_entity(cls, user: User) -> "UserBrief":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            full_name=user.full_name,
            email=user.email,
        )


# ==================== VIEWED MOVIE SCHEMAS ====================

class MarkMovieViewed(BaseModel, SafeStringMixin):
    """Schema for marking a movie as viewed"""
    rating: Optional[int] = Field(None, ge=1, le=5, description="User rating (1-5 stars)")
    review: Optional[str] = Field(None, max_length=2000)
    is_favorite: bool = False
    watch_time: Optional[int] = Field(None, gt=0, description="Minutes watched")
    completed_movie: bool = True

    @field_validator('review')
    @classmethod
    def clean_review(cls, v):
        if v is None:
            return v
        return cls.sanitize_html(cls.validate_no_script(v))


class ViewedMovieUpdate(BaseModel, SafeStringMixin):
    """Schema for rating, reviewing or (un)favoriting a viewed movie"""
    rating: Optional[int] = Field(None, ge=1, le=5)
    review: Optional[str] = Field(None, max_length=2000)
    is_favorite: Optional[bool] = None

    @field_validator('review')
    @classmethod
    def clean_review(cls, v):
        if v is None:
            return v
        return cls.sanitize_html(cls.validate_no_script(v))


class UserMovieResponse(BaseModel):
    """Schema for a viewed record"""
    id: int
    user_id: int
    movie_id: int
    viewed_at: datetime
    rating: Optional[int] = None
    review: Optional[str] = None
    is_favorite: bool
    watch_time: Optional[int] = None
    completed_movie: bool

    model_config = ConfigDict(from_attributes=True)


class ViewedMovieResponse(BaseModel):
    """Schema for a viewed record with its movie"""
    movie: MovieSummary
    viewed_at: datetime
    rating: Optional[int] = None
    review: Optional[str] = None
    is_favorite: bool
    watch_time: Optional[int] = None
    completed_movie: bool

    @classmethod
    def from_entity(cls, item: ViewedMovie) -> "ViewedMovieResponse":
        return cls(
            movie=MovieSummary.from_entity(item.movie),
            viewed_at=item.viewed.viewed_at,
            rating=item.viewed.rating,
            review=item.viewed.review,
            is_favorite=item.viewed.is_favorite,
            watch_time=item.viewed.watch_time,
            completed_movie=item.viewed.completed_movie,
        )


class UserWithMoviesResponse(BaseModel):
    user: UserBrief
    movies: List[ViewedMovieResponse]

    @classmethod
    def from_entity(cls, entry: UserWithViewedMovies) -> "UserWithMoviesResponse":
        return cls(
            user=UserBrief.from_entity(entry.user),
            movies=[ViewedMovieResponse.from_entity(item) for item in entry.movies],
        )
