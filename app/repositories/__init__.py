"""
Repository contracts and their SQLAlchemy implementations
"""
from app.repositories.base import (
    CategoryRepository,
    MovieRepository,
    UserMovieRepository,
    UserRepository,
    coerce_date,
)
from app.repositories.category_repository import SqlAlchemyCategoryRepository
from app.repositories.movie_repository import SqlAlchemyMovieRepository
from app.repositories.user_repository import SqlAlchemyUserMovieRepository, SqlAlchemyUserRepository

__all__ = [
    "CategoryRepository",
    "MovieRepository",
    "UserMovieRepository",
    "UserRepository",
    "coerce_date",
    "SqlAlchemyCategoryRepository",
    "SqlAlchemyMovieRepository",
    "SqlAlchemyUserMovieRepository",
    "SqlAlchemyUserRepository",
]
