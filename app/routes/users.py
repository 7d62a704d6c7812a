from fastapi import APIRouter, Depends, Query, status
from typing import List

from app.domain.pagination import DEFAULT_LIMIT, MAX_LIMIT
from app.schemas.pagination import PaginatedResponse
from app.schemas.user import (
    UserCreate,
    UserUpdate,
    UserResponse,
    MarkMovieViewed,
    ViewedMovieUpdate,
    UserMovieResponse,
    ViewedMovieResponse,
    UserWithMoviesResponse,
)
from app.services.user_service import UserService
from app.utils.dependencies import get_user_service

router = APIRouter(prefix="/api/users", tags=["Users"])


# ==================== USER ENDPOINTS ====================

@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    service: UserService = Depends(get_user_service)
):
    """Register a user (409 if the email is already registered)"""
    user = service.create(**user_data.model_dump())
    return UserResponse.from_entity(user)


@router.get("/", response_model=PaginatedResponse[UserResponse])
def get_users(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Items per page"),
    service: UserService = Depends(get_user_service)
):
    """List active users, most recently registered first"""
    return PaginatedResponse.from_page(service.find_all(page, limit), UserResponse.from_entity)


@router.get("/with-movies", response_model=List[UserWithMoviesResponse])
def get_users_with_movies(service: UserService = Depends(get_user_service)):
    """Users grouped with the movies they have viewed"""
    return [UserWithMoviesResponse.from_entity(entry) for entry in service.get_users_with_viewed_movies()]


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service)
):
    """Get a specific user"""
    return UserResponse.from_entity(service.find_by_id(user_id))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    update_data: UserUpdate,
    service: UserService = Depends(get_user_service)
):
    """Update a user - only the fields sent are changed"""
    user = service.update(user_id, update_data.model_dump(exclude_unset=True))
    return UserResponse.from_entity(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    service: UserService = Depends(get_user_service)
):
    """Deactivate a user (logical delete)"""
    service.remove(user_id)
    return None


# ==================== VIEWED MOVIE ENDPOINTS ====================

@router.post(
    "/{user_id}/movies/{movie_id}/mark-viewed",
    response_model=UserMovieResponse,
    status_code=status.HTTP_201_CREATED
)
def mark_movie_as_viewed(
    user_id: int,
    movie_id: int,
    viewed_data: MarkMovieViewed,
    service: UserService = Depends(get_user_service)
):
    """
    Mark a movie as viewed by a user

    - **rating**: 1-5 stars (optional)
    - **review**: Personal review (optional)
    - **is_favorite**: default false
    - **watch_time**: Minutes watched (optional)
    - **completed_movie**: default true

    Returns 409 if the user already marked this movie.
    """
    user_movie = service.mark_movie_as_viewed(user_id, movie_id, **viewed_data.model_dump())
    return UserMovieResponse.model_validate(user_movie)


@router.get("/{user_id}/movies", response_model=List[ViewedMovieResponse])
def get_user_movies(
    user_id: int,
    only_favorites: bool = Query(False, description="Only return favorite movies"),
    service: UserService = Depends(get_user_service)
):
    """Movies viewed by a user, most recent first"""
    viewed = service.get_user_viewed_movies(user_id, only_favorites)
    return [ViewedMovieResponse.from_entity(item) for item in viewed]


@router.patch("/{user_id}/movies/{movie_id}", response_model=UserMovieResponse)
def update_viewed_movie(
    user_id: int,
    movie_id: int,
    update_data: ViewedMovieUpdate,
    service: UserService = Depends(get_user_service)
):
    """Rate, review or (un)favorite a viewed movie"""
    user_movie = service.update_viewed_movie(user_id, movie_id, **update_data.model_dump())
    return UserMovieResponse.model_validate(user_movie)
