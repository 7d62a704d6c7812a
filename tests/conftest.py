import os

# Configure the app before it is imported: in-memory database, no table
# creation on startup, cheap password hashing
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.repositories import (
    SqlAlchemyCategoryRepository,
    SqlAlchemyMovieRepository,
    SqlAlchemyUserMovieRepository,
    SqlAlchemyUserRepository,
)
from app.services.category_service import CategoryService
from app.services.movie_service import MovieService
from app.services.user_service import UserService

SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """Provide a clean database session for each test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    """FastAPI test client with the database dependency overridden."""

    def override_get_db():
        test_db = TestingSessionLocal()
        try:
            yield test_db
        finally:
            test_db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def category_service(db_session):
    return CategoryService(SqlAlchemyCategoryRepository(db_session))


@pytest.fixture
def movie_service(db_session):
    return MovieService(
        movie_repository=SqlAlchemyMovieRepository(db_session),
        category_repository=SqlAlchemyCategoryRepository(db_session),
    )


@pytest.fixture
def user_service(db_session):
    return UserService(
        user_repository=SqlAlchemyUserRepository(db_session),
        user_movie_repository=SqlAlchemyUserMovieRepository(db_session),
        movie_repository=SqlAlchemyMovieRepository(db_session),
    )


@pytest.fixture
def drama(category_service):
    return category_service.create("Drama", "Dramatic films")


@pytest.fixture
def movie_data(drama):
    """Factory for valid movie fields; keyword arguments override the defaults"""

    def build(**overrides):
        data = {
            "title": "The Godfather",
            "description": "The aging patriarch of a crime dynasty hands over control",
            "synopsis": "Don Vito Corleone transfers the family business to his son Michael.",
            "release_date": date(1972, 3, 24),
            "duration": 175,
            "rating": "R",
            "director": "Francis Ford Coppola",
            "cast": ["Marlon Brando", "Al Pacino"],
            "genres": ["Crime", "Drama"],
            "country": "USA",
            "language": "English",
            "category_id": drama.id,
        }
        data.update(overrides)
        return data

    return build


@pytest.fixture
def user_data():
    def build(**overrides):
        data = {
            "first_name": "Juan",
            "last_name": "Pérez",
            "email": "juan@example.com",
            "password": "Password123!",
        }
        data.update(overrides)
        return data

    return build
