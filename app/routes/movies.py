from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional

from app.domain import MovieFilters
from app.domain.pagination import DEFAULT_LIMIT, MAX_LIMIT
from app.schemas.category import CategoryResponse
from app.schemas.movie import MovieCreate, MovieUpdate, MovieResponse
from app.schemas.pagination import PaginatedResponse
from app.services.movie_service import MovieService
from app.utils.dependencies import get_movie_service

router = APIRouter(prefix="/api/movies", tags=["Movies"])


@router.post("/", response_model=MovieResponse, status_code=status.HTTP_201_CREATED)
def create_movie(
    movie_data: MovieCreate,
    service: MovieService = Depends(get_movie_service)
):
    """
    Create a movie

    The category must exist and be active, otherwise 404.
    """
    movie = service.create(**movie_data.model_dump())
    return MovieResponse.from_entity(movie)


@router.get("/", response_model=PaginatedResponse[MovieResponse])
def get_movies(
    search: Optional[str] = Query(None, max_length=200, description="Search title, description or director"),
    category_id: Optional[int] = Query(None, ge=1, description="Filter by category ID"),
    genre: Optional[str] = Query(None, max_length=50, description="Filter by genre"),
    year: Optional[int] = Query(None, ge=1900, le=2030, description="Release year"),
    rating: Optional[str] = Query(None, max_length=10, description="Classification (G, PG, R, ...)"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Items per page"),
    service: MovieService = Depends(get_movie_service)
):
    """
    List active movies, newest release first

    All filters are optional and combined with AND:
    - **search**: case-insensitive match on title, description or director
    - **category_id**, **genre**, **year**, **rating**

    Requesting a page past the last one returns an empty `data` list.
    """
    filters = MovieFilters(
        search=search,
        category_id=category_id,
        genre=genre,
        year=year,
        rating=rating,
        page=page,
        limit=limit,
    )
    return PaginatedResponse.from_page(service.find_all(filters), MovieResponse.from_entity)


@router.get("/new-releases", response_model=List[MovieResponse])
def get_new_releases(service: MovieService = Depends(get_movie_service)):
    """Movies released in the last 21 days"""
    return [MovieResponse.from_entity(movie) for movie in service.find_new_releases()]


@router.get("/categories", response_model=List[CategoryResponse])
def get_movie_categories(service: MovieService = Depends(get_movie_service)):
    """Categories available for movies"""
    return [CategoryResponse.model_validate(category) for category in service.get_all_categories()]


@router.get("/{movie_id}", response_model=MovieResponse)
def get_movie(
    movie_id: int,
    service: MovieService = Depends(get_movie_service)
):
    """Get a specific movie"""
    return MovieResponse.from_entity(service.find_by_id(movie_id))


@router.put("/{movie_id}", response_model=MovieResponse)
def update_movie(
    movie_id: int,
    update_data: MovieUpdate,
    service: MovieService = Depends(get_movie_service)
):
    """
    Update a movie - only the fields sent are changed

    A new **category_id** is checked against existing categories.
    """
    movie = service.update(movie_id, update_data.model_dump(exclude_unset=True))
    return MovieResponse.from_entity(movie)


@router.delete("/{movie_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_movie(
    movie_id: int,
    service: MovieService = Depends(get_movie_service)
):
    """Deactivate a movie (logical delete)"""
    service.remove(movie_id)
    return None
