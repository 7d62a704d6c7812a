"""
Domain entities and the filter/pagination engine (no I/O)
"""
from app.domain.category import Category
from app.domain.movie import Movie
from app.domain.pagination import MovieFilters, Page, PageRequest
from app.domain.user import User
from app.domain.user_movie import UserMovie, UserWithViewedMovies, ViewedMovie

__all__ = [
    "Category",
    "Movie",
    "MovieFilters",
    "Page",
    "PageRequest",
    "User",
    "UserMovie",
    "UserWithViewedMovies",
    "ViewedMovie",
]
