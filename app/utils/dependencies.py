from fastapi import Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.repositories import (
    SqlAlchemyCategoryRepository,
    SqlAlchemyMovieRepository,
    SqlAlchemyUserMovieRepository,
    SqlAlchemyUserRepository,
)
from app.services.category_service import CategoryService
from app.services.movie_service import MovieService
from app.services.user_service import UserService

# Services are built per request around the request's database session

def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(SqlAlchemyCategoryRepository(db))


def get_movie_service(db: Session = Depends(get_db)) -> MovieService:
    return MovieService(
        movie_repository=SqlAlchemyMovieRepository(db),
        category_repository=SqlAlchemyCategoryRepository(db),
    )


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(
        user_repository=SqlAlchemyUserRepository(db),
        user_movie_repository=SqlAlchemyUserMovieRepository(db),
        movie_repository=SqlAlchemyMovieRepository(db),
    )
