"""
Import all models to ensure they are registered with SQLAlchemy
"""
from app.models.category import Category
from app.models.movie import Movie, MovieGenre
from app.models.user import User
from app.models.user_movie import UserMovie

__all__ = [
    "Category",
    "Movie",
    "MovieGenre",
    "User",
    "UserMovie",
]
